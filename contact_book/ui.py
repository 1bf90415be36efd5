"""Presentation state for the contact book screen.

These classes hold what the form, the list and the error banner display and
react to user actions. Drawing them is left to whatever toolkit hosts them.
"""

from collections.abc import Callable
from dataclasses import dataclass, field

from . import schemas
from .client import ContactsStore
from .validation import PHONE_DIGITS, is_valid_email, is_valid_phone, normalize_phone

FIELDS = ("name", "email", "phone")
DELETE_PROMPT = "Are you sure you want to delete this contact?"


def mask_phone_input(value: str) -> str:
    """Format partial phone input as the user types: ``555``, ``555-12``, ``555-123-4``."""
    digits = normalize_phone(value)[:PHONE_DIGITS]
    if len(digits) >= 6:
        return f"{digits[:3]}-{digits[3:6]}-{digits[6:]}"
    if len(digits) >= 3:
        return f"{digits[:3]}-{digits[3:]}"
    return digits


def format_phone_number(phone: str) -> str:
    """Display a stored ten-digit phone as ``555-123-4567``; anything else as is."""
    if len(phone) == PHONE_DIGITS:
        return f"{phone[:3]}-{phone[3:6]}-{phone[6:]}"
    return phone


class ContactForm:
    """
    The "Add New Contact" form.

    Runs the same field checks as the API before submitting, keeps one error
    message per field and clears itself only after a confirmed success.
    """

    def __init__(self):
        self.values = dict.fromkeys(FIELDS, "")
        self.errors: dict[str, str] = {}
        self.is_submitting = False

    @property
    def phone_display(self) -> str:
        return mask_phone_input(self.values["phone"])

    def set_field(self, name: str, value: str) -> None:
        """Update a field and drop its error message."""
        if name not in self.values:
            raise KeyError(name)
        self.values[name] = value
        self.errors.pop(name, None)

    def validate(self) -> bool:
        errors = {}
        name = self.values["name"].strip()
        email = self.values["email"]
        phone = self.values["phone"].strip()

        if not name:
            errors["name"] = "Name is required"
        elif len(name) < 2:
            errors["name"] = "Name must be at least 2 characters"

        if not email.strip():
            errors["email"] = "Email is required"
        elif not is_valid_email(email):
            errors["email"] = "Please enter a valid email address"

        if not phone:
            errors["phone"] = "Phone number is required"
        elif not is_valid_phone(phone):
            errors["phone"] = "Phone number must be exactly 10 digits"

        self.errors = errors
        return not errors

    def reset(self) -> None:
        self.values = dict.fromkeys(FIELDS, "")
        self.errors = {}

    def submit(
        self, on_submit: Callable[[schemas.ContactCreate], bool], loading: bool = False
    ) -> bool:
        """
        Validate and hand the form data to ``on_submit``.

        Ignored while a submission or a store request is still running.

        Args:
            on_submit: Callback returning True when the contact was created,
                usually ``ContactsStore.add_contact``.
            loading (bool): Whether the store is busy loading contacts.

        Returns:
            bool: True when the contact was created and the form cleared.
        """
        if self.is_submitting or loading:
            return False
        if not self.validate():
            return False

        self.is_submitting = True
        try:
            success = on_submit(schemas.ContactCreate(**self.values))
            if success:
                self.reset()
            return success
        finally:
            self.is_submitting = False


@dataclass
class ContactRow:
    """One rendered line of the contact list."""

    id: str
    name: str
    email: str
    phone: str
    deleting: bool = False


class ContactList:
    """
    The contact list: rows of the current page with a delete button each.

    ``confirm`` is asked before anything is deleted. While one delete is in
    flight its button is disabled and further delete requests are ignored.
    """

    def __init__(self, store: ContactsStore, confirm: Callable[[str], bool]):
        self.store = store
        self.confirm = confirm
        self.deleting_id: str | None = None

    @property
    def show_skeleton(self) -> bool:
        return self.store.loading

    @property
    def is_empty(self) -> bool:
        return not self.store.loading and not self.store.contacts

    @property
    def title(self) -> str:
        return f"Contact List ({len(self.store.contacts)})"

    def rows(self) -> list[ContactRow]:
        return [
            ContactRow(
                id=c.id,
                name=c.name,
                email=c.email,
                phone=format_phone_number(c.phone),
                deleting=c.id == self.deleting_id,
            )
            for c in self.store.contacts
        ]

    def is_delete_disabled(self, contact_id: str) -> bool:
        return self.deleting_id == contact_id

    def request_delete(self, contact_id: str) -> bool:
        """
        Delete a contact after the user confirms.

        Returns:
            bool: True when the contact was deleted.
        """
        if self.deleting_id is not None:
            return False
        if not self.confirm(DELETE_PROMPT):
            return False

        self.deleting_id = contact_id
        try:
            return self.store.delete_contact(contact_id)
        finally:
            self.deleting_id = None


class ErrorBanner:
    """Dismissible banner showing the store's last error."""

    def __init__(self, store: ContactsStore):
        self.store = store

    @property
    def visible(self) -> bool:
        return self.store.error is not None

    @property
    def message(self) -> str | None:
        return self.store.error

    def dismiss(self) -> None:
        # form input survives, only the error is cleared
        self.store.clear_error()


@dataclass
class ContactBook:
    """The whole screen: banner, form and list sharing one store."""

    store: ContactsStore
    confirm: Callable[[str], bool]
    form: ContactForm = field(default_factory=ContactForm)
    contact_list: ContactList = field(init=False)
    banner: ErrorBanner = field(init=False)

    def __post_init__(self):
        self.contact_list = ContactList(self.store, self.confirm)
        self.banner = ErrorBanner(self.store)

    def start(self) -> None:
        """Load the first page."""
        self.store.fetch_contacts()

    def submit_form(self) -> bool:
        return self.form.submit(self.store.add_contact, loading=self.store.loading)
