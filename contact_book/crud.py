"""CRUD operations for contacts.

This module is the only writer of the ``contacts`` table. It contains the
database interaction logic, isolated from FastAPI route handlers.
"""

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from . import models, schemas
from .errors import ConflictError

UNIQUE_VIOLATION = "23505"


def _is_unique_violation(exc: IntegrityError) -> bool:
    """Tell a unique-constraint violation apart from other integrity errors."""
    orig = exc.orig
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if code is not None:
        return code == UNIQUE_VIOLATION
    return "unique" in str(orig).lower()


def create_contact(db: Session, contact_in: schemas.NewContact) -> models.Contact:
    """
    Insert a new contact.

    Args:
        db (Session): Database session.
        contact_in (NewContact): Validated, normalized contact data.

    Raises:
        ConflictError: If a contact with the same email already exists.

    Returns:
        Contact: Newly created contact with ``id`` and ``created_at`` set.
    """
    contact = models.Contact(**contact_in.model_dump())
    db.add(contact)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        if _is_unique_violation(exc):
            raise ConflictError("Email already exists") from exc
        raise
    db.refresh(contact)
    return contact


def count_contacts(db: Session) -> int:
    """Return the number of stored contacts."""
    return db.scalar(select(func.count()).select_from(models.Contact)) or 0


def list_contacts(db: Session, offset: int = 0, limit: int = 10) -> list[models.Contact]:
    """
    Retrieve a window of contacts, newest first.

    Args:
        db (Session): Database session.
        offset (int): Number of records to skip.
        limit (int): Maximum number of records to return.

    Returns:
        list[Contact]: Contacts ordered by ``created_at`` descending.
    """
    stmt = (
        select(models.Contact)
        .order_by(models.Contact.created_at.desc())
        .offset(offset)
        .limit(limit)
    )
    return list(db.scalars(stmt).all())


def delete_contact(db: Session, contact_id: str) -> None:
    """
    Delete the contact with the given identifier.

    Nothing distinguishes a removed row from an id that never existed.

    Args:
        db (Session): Database session.
        contact_id (str): Contact identifier.
    """
    db.execute(delete(models.Contact).where(models.Contact.id == contact_id))
    db.commit()
