"""Application configuration and settings management.

This module defines the application settings loaded from environment
variables. The settings object is built once at process entry and handed
explicitly to the components that need it (``create_app`` on the server,
``ContactsStore`` on the client).
"""

from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables.

    Attributes:
        HOST: Interface the HTTP server binds to.
        PORT: Port the HTTP server listens on.
        DATABASE_URL: SQLAlchemy URL of the contacts datastore. When unset the
            service still starts, but every data endpoint reports that the
            database is not configured.
        DATABASE_KEY: Datastore secret, injected as the URL password.
        ALLOWED_ORIGINS: Allowed origins for CORS.
        API_BASE_URL: Base URL the client store sends requests to.
        REQUEST_TIMEOUT: Client request timeout in seconds.
        LOG_LEVEL: Root logging level.
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    HOST: str = "0.0.0.0"
    PORT: int = 5000
    DATABASE_URL: str | None = None
    DATABASE_KEY: str | None = None
    ALLOWED_ORIGINS: List[str] = ["*"]
    API_BASE_URL: str = "http://localhost:5000"
    REQUEST_TIMEOUT: float = 10.0
    LOG_LEVEL: str = "INFO"

    @property
    def database_configured(self) -> bool:
        """Whether datastore credentials were supplied."""
        return bool(self.DATABASE_URL)


@lru_cache()
def get_settings() -> Settings:
    """Return cached application settings.

    The settings object is cached to prevent reloading environment
    variables multiple times during application lifetime.
    """

    return Settings()
