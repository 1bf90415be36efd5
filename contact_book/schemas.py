from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ContactCreate(BaseModel):
    """Raw payload for creating a contact.

    Fields are optional here so that a missing field is reported with the
    API's own message instead of a generic schema error.
    """

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


class NewContact(BaseModel):
    """Validated and normalized contact, ready to be stored."""

    name: str
    email: str
    phone: str


class ContactOut(BaseModel):
    """Schema for returning a stored contact."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    phone: str
    created_at: Optional[datetime] = None

    @field_validator("created_at")
    @classmethod
    def assume_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        """Attach UTC to timestamps the datastore returns without an offset."""
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


class Pagination(BaseModel):
    """Pagination envelope returned alongside a page of contacts."""

    model_config = ConfigDict(populate_by_name=True)

    page: int = 1
    limit: int = 10
    total: int = 0
    total_pages: int = Field(0, alias="totalPages")


class ContactPage(BaseModel):
    """One page of contacts, newest first."""

    contacts: list[ContactOut]
    pagination: Pagination


class MessageResponse(BaseModel):
    """Generic message response."""

    message: str


class HealthResponse(BaseModel):
    """Liveness probe payload."""

    status: str = "OK"
    message: str = "Contact Book API is running"
