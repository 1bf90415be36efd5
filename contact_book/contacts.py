"""Contact management routes for the Contacts API."""

import logging
import math

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from . import crud, schemas
from .database import get_db
from .errors import InternalError, ValidationError
from .validation import is_valid_email, is_valid_phone, normalize_phone

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/contacts", tags=["contacts"])


def total_pages(total: int, limit: int) -> int:
    """Number of pages needed for ``total`` records, zero when there are none."""
    return math.ceil(total / limit)


def validated_contact(contact_in: schemas.ContactCreate) -> schemas.NewContact:
    """
    Validate and normalize a create payload.

    Declared ahead of the session dependency so that malformed input is
    rejected before the datastore is touched.

    Args:
        contact_in (ContactCreate): Raw request body.

    Raises:
        ValidationError: If a field is missing, the email is malformed, or
            the phone number does not hold exactly ten digits.

    Returns:
        NewContact: Trimmed name and email, digits-only phone.
    """
    name = (contact_in.name or "").strip()
    email = contact_in.email or ""
    phone = contact_in.phone or ""

    if not name or not email.strip() or not phone.strip():
        raise ValidationError("Name, email, and phone are required")
    # checked as sent, trimming is normalization only
    if not is_valid_email(email):
        raise ValidationError("Invalid email format")
    if not is_valid_phone(phone):
        raise ValidationError("Phone number must be exactly 10 digits")

    return schemas.NewContact(
        name=name, email=email.strip(), phone=normalize_phone(phone)
    )


@router.get("", response_model=schemas.ContactPage)
def list_contacts(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1),
    db: Session = Depends(get_db),
):
    """
    Retrieve one page of contacts, newest first.

    Args:
        page (int): 1-based page number.
        limit (int): Page size.
        db (Session): Database session.

    Raises:
        InternalError: If the datastore query fails.

    Returns:
        ContactPage: Contacts and the pagination envelope.
    """
    offset = (page - 1) * limit
    try:
        contacts = crud.list_contacts(db, offset=offset, limit=limit)
        total = crud.count_contacts(db)
    except SQLAlchemyError:
        logger.exception("Error fetching contacts")
        raise InternalError("Failed to fetch contacts")

    return schemas.ContactPage(
        contacts=[schemas.ContactOut.model_validate(c) for c in contacts],
        pagination=schemas.Pagination(
            page=page,
            limit=limit,
            total=total,
            total_pages=total_pages(total, limit),
        ),
    )


@router.post("", response_model=schemas.ContactOut, status_code=status.HTTP_201_CREATED)
def create_contact(
    contact_in: schemas.NewContact = Depends(validated_contact),
    db: Session = Depends(get_db),
):
    """
    Create a new contact.

    Args:
        contact_in (NewContact): Validated contact data.
        db (Session): Database session.

    Raises:
        ConflictError: If the email address is already taken.
        InternalError: If the insert fails for any other reason.

    Returns:
        ContactOut: Created contact.
    """
    try:
        contact = crud.create_contact(db, contact_in)
    except SQLAlchemyError:
        logger.exception("Error adding contact")
        raise InternalError("Failed to add contact")
    logger.info("Created contact %s", contact.id)
    return contact


@router.delete("/{contact_id}", response_model=schemas.MessageResponse)
def remove_contact(contact_id: str, db: Session = Depends(get_db)):
    """
    Delete a contact.

    Deleting an id that does not exist is acknowledged the same way.

    Args:
        contact_id (str): Contact identifier.
        db (Session): Database session.

    Raises:
        InternalError: If the delete fails.

    Returns:
        MessageResponse: Deletion acknowledgment.
    """
    try:
        crud.delete_contact(db, contact_id)
    except SQLAlchemyError:
        logger.exception("Error deleting contact %s", contact_id)
        raise InternalError("Failed to delete contact")
    return schemas.MessageResponse(message="Contact deleted successfully")
