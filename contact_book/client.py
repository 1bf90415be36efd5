"""Client-side state container for the Contacts API.

``ContactsStore`` keeps one page of contacts, the pagination counters, a
loading flag and the last error message, and updates them from three calls:
fetch a page, add a contact, delete a contact. Adds and deletes are applied
to the local page without re-fetching; the next ``fetch_contacts`` replaces
the local copy wholesale.
"""

import logging
from typing import Any

import httpx

from . import schemas
from .core import Settings, get_settings

logger = logging.getLogger(__name__)

GENERIC_ERROR = "An error occurred"
TIMEOUT_ERROR = "Request timed out"


class ContactsStore:
    """
    In-memory view of the contact list backed by the HTTP API.

    Attributes:
        contacts (list[ContactOut]): Current page, newest first.
        loading (bool): True while ``fetch_contacts`` is in flight.
        error (str | None): Message of the last failed call.
        pagination (Pagination): Counters of the current page.
    """

    def __init__(
        self,
        http: httpx.Client | None = None,
        settings: Settings | None = None,
    ):
        settings = settings or get_settings()
        self.http = http or httpx.Client(
            base_url=settings.API_BASE_URL, timeout=settings.REQUEST_TIMEOUT
        )
        self.contacts: list[schemas.ContactOut] = []
        self.loading = False
        self.error: str | None = None
        self.pagination = schemas.Pagination()

    def close(self) -> None:
        self.http.close()

    def clear_error(self) -> None:
        """Dismiss the current error."""
        self.error = None

    def fetch_contacts(self, page: int = 1, limit: int = 10) -> None:
        """
        Load one page of contacts.

        On failure the local list is emptied and ``error`` is set. ``loading``
        is released on every exit path.

        Args:
            page (int): 1-based page number.
            limit (int): Page size.
        """
        self.loading = True
        self.error = None
        try:
            response = self.http.get("/contacts", params={"page": page, "limit": limit})
            if response.is_error:
                raise _RequestFailed("Failed to fetch contacts")
            data = schemas.ContactPage.model_validate(response.json())
            self.contacts = data.contacts
            self.pagination = data.pagination
        except (_RequestFailed, httpx.HTTPError, ValueError) as exc:
            self._fail(_describe(exc))
            self.contacts = []
        finally:
            self.loading = False

    def add_contact(self, data: schemas.ContactCreate | dict) -> bool:
        """
        Create a contact and prepend it to the local page.

        Args:
            data (ContactCreate | dict): Name, email and phone.

        Returns:
            bool: True on success. On failure ``error`` holds the server
            message and the list is unchanged.
        """
        self.error = None
        if isinstance(data, schemas.ContactCreate):
            data = data.model_dump()
        try:
            response = self.http.post("/contacts", json=data)
            if response.is_error:
                raise _RequestFailed(_server_message(response, "Failed to add contact"))
            contact = schemas.ContactOut.model_validate(response.json())
        except (_RequestFailed, httpx.HTTPError, ValueError) as exc:
            self._fail(_describe(exc))
            return False

        self.contacts = [contact, *self.contacts]
        self.pagination.total += 1
        return True

    def delete_contact(self, contact_id: str) -> bool:
        """
        Delete a contact and drop it from the local page.

        Args:
            contact_id (str): Contact identifier.

        Returns:
            bool: True on success. On failure ``error`` is set and the list is
            unchanged.
        """
        self.error = None
        try:
            response = self.http.delete(f"/contacts/{contact_id}")
            if response.is_error:
                raise _RequestFailed(
                    _server_message(response, "Failed to delete contact")
                )
        except (_RequestFailed, httpx.HTTPError, ValueError) as exc:
            self._fail(_describe(exc))
            return False

        self.contacts = [c for c in self.contacts if c.id != contact_id]
        self.pagination.total -= 1
        return True

    def _fail(self, message: str) -> None:
        logger.warning("Contacts request failed: %s", message)
        self.error = message


class _RequestFailed(Exception):
    """The API answered with an error status."""


def _server_message(response: httpx.Response, fallback: str) -> str:
    try:
        payload: Any = response.json()
    except ValueError:
        return fallback
    if isinstance(payload, dict) and payload.get("error"):
        return str(payload["error"])
    return fallback


def _describe(exc: Exception) -> str:
    """Message shown to the user for a failed call."""
    if isinstance(exc, _RequestFailed):
        return str(exc)
    if isinstance(exc, httpx.TimeoutException):
        return TIMEOUT_ERROR
    return GENERIC_ERROR
