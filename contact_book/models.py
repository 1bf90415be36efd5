"""Database models for the Contacts API.

This module defines SQLAlchemy ORM models used by the application.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String

from .database import Base


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Contact(Base):
    """
    SQLAlchemy model representing a contact entry.

    ``id`` and ``created_at`` are assigned on insert. The email address is
    unique across all contacts and the phone number is stored as ten digits.
    """

    __tablename__ = "contacts"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    phone = Column(String(10), nullable=False)

    #: Insert time, the sort key of the contact list (newest first)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, index=True)
