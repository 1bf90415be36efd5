# tests/conftest.py
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from contact_book.core import Settings
from contact_book.database import Base, get_db
from contact_book.models import Contact
from main import create_app


# DB (SQLite in-memory for tests)
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


# Conformance vectors shared by the validation functions, the create
# endpoint and the client form: (value, expected_valid)
EMAIL_VECTOR = [
    ("jane@x.com", True),
    ("a.b+tag@sub.example.org", True),
    ("x@y.z", True),
    ("user@domain.co.uk", True),
    ("weird!#$%@host.name", True),
    ("plain", False),
    ("no-at.example.com", False),
    ("a@b", False),
    ("a@b.", False),
    ("@b.com", False),
    ("a@.com", False),
    ("a.b@c", False),
    ("a b@c.com", False),
    ("a@b@c.com", False),
    ("jane@x.com extra", False),
    (" jane@x.com ", False),
]

PHONE_VECTOR = [
    ("5551234567", True),
    ("555-123-4567", True),
    ("(555) 123-4567", True),
    ("555.123.4567", True),
    (" 555 123 4567 ", True),
    ("+1 555 123 456", True),
    ("12345", False),
    ("555-123-45678", False),
    ("+1 555 123 4567", False),
    ("abcdefghij", False),
    ("٥٥٥١٢٣٤٥٦٧", False),
]


def pytest_generate_tests(metafunc):
    if "email_case" in metafunc.fixturenames:
        metafunc.parametrize("email_case", EMAIL_VECTOR, ids=[v for v, _ in EMAIL_VECTOR])
    if "phone_case" in metafunc.fixturenames:
        metafunc.parametrize("phone_case", PHONE_VECTOR, ids=[v for v, _ in PHONE_VECTOR])


@pytest.fixture()
def settings():
    return Settings(_env_file=None, DATABASE_URL=None, API_BASE_URL="http://testserver")


@pytest.fixture()
def app(settings):
    return create_app(settings)


@pytest.fixture()
def db_session():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


# Client fixture: override DB dependency per test
@pytest.fixture()
def client(app, db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    try:
        with TestClient(app) as c:
            yield c
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def unconfigured_client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def sample_contact_data():
    return {"name": " Jane Doe ", "email": "jane@x.com", "phone": "555-123-4567"}


@pytest.fixture()
def seed_contacts(db_session):
    """Insert contacts where contact ``i`` is the i-th newest."""

    def _seed(count):
        base = datetime(2024, 1, 1, tzinfo=timezone.utc)
        for i in range(1, count + 1):
            db_session.add(
                Contact(
                    name=f"Contact {i}",
                    email=f"contact{i}@example.com",
                    phone=f"{i:010d}",
                    created_at=base - timedelta(minutes=i),
                )
            )
        db_session.commit()

    return _seed
