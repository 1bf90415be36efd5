from fastapi.testclient import TestClient

from contact_book.core import Settings
from contact_book.database import create_db_engine, create_session_factory, database_url
from main import create_app


def test_no_url_means_not_configured():
    settings = Settings(_env_file=None, DATABASE_URL=None)
    assert settings.database_configured is False
    assert create_db_engine(settings) is None
    assert create_session_factory(None) is None


def test_key_is_used_as_password():
    settings = Settings(
        _env_file=None,
        DATABASE_URL="postgresql://contacts@db.example.com:5432/contacts",
        DATABASE_KEY="s3cret",
    )
    url = database_url(settings)
    assert url.password == "s3cret"
    assert url.username == "contacts"
    assert url.host == "db.example.com"


def test_in_memory_sqlite_engine_serves_sessions():
    settings = Settings(_env_file=None, DATABASE_URL="sqlite://")
    engine = create_db_engine(settings)
    session_factory = create_session_factory(engine)
    with session_factory() as session:
        assert session.bind is engine
    engine.dispose()


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("ALLOWED_ORIGINS", '["http://localhost:5173"]')
    settings = Settings(_env_file=None)
    assert settings.PORT == 8080
    assert settings.ALLOWED_ORIGINS == ["http://localhost:5173"]


def test_app_creates_table_on_startup():
    app = create_app(Settings(_env_file=None, DATABASE_URL="sqlite://"))
    with TestClient(app) as client:
        resp = client.post(
            "/contacts", json={"name": "Jane", "email": "jane@x.com", "phone": "5551234567"}
        )
        assert resp.status_code == 201
        assert client.get("/contacts").json()["pagination"]["total"] == 1
