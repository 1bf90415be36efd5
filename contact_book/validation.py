"""Field validation shared by the API routes and the client form."""

import re

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_DIGITS = 10
_NON_DIGIT = re.compile(r"\D", re.ASCII)


def is_valid_email(value: str) -> bool:
    """Return True when ``value`` looks like ``local@domain.tld``."""
    if not isinstance(value, str):
        return False
    return EMAIL_PATTERN.fullmatch(value) is not None


def normalize_phone(value: str) -> str:
    """Strip every non-digit character from ``value``."""
    return _NON_DIGIT.sub("", value)


def is_valid_phone(value: str) -> bool:
    """Return True when ``value`` holds exactly ten digits once non-digits are dropped."""
    if not isinstance(value, str):
        return False
    return len(normalize_phone(value)) == PHONE_DIGITS
