"""
Form field rules and the field-keyed error raised when input fails them.

Patterns and messages match what the contact, registration, login and
search forms show to users.
"""

from __future__ import annotations

import re
from typing import Optional

# Contact-form username: letters, digits and underscore, 3-20 characters
USERNAME_PATTERN = re.compile(r"[A-Za-z0-9_]{3,20}")

# Loose check, searched anywhere in the value: something@something.something
EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")

USERNAME_FORMAT_MESSAGE = "Username must be alphanumeric and between 3-20 characters."
EMAIL_FORMAT_MESSAGE = "Invalid email format."
REGISTER_REQUIRED_MESSAGE = "Username, password, and email are required."
USERNAME_TAKEN_MESSAGE = "Username is already taken."
UNKNOWN_ROLE_MESSAGE = "Unknown role."
LOGIN_REQUIRED_MESSAGE = "Username and password are required."
INVALID_CREDENTIALS_MESSAGE = "Invalid username or password."
SEARCH_REQUIRED_MESSAGE = "Search query cannot be empty."


class FieldValidationError(Exception):
    """A user-correctable problem tied to one form field."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.message = message

    def as_errors(self) -> dict[str, str]:
        """Field-keyed mapping handed to the form template."""
        return {self.field: self.message}


def is_blank(value: Optional[str]) -> bool:
    """True for None, empty or whitespace-only input."""
    return value is None or not value.strip()


def is_valid_username(value: Optional[str]) -> bool:
    if is_blank(value):
        return False
    return USERNAME_PATTERN.fullmatch(value.strip()) is not None


def is_valid_email(value: Optional[str]) -> bool:
    if is_blank(value):
        return False
    return EMAIL_PATTERN.search(value.strip()) is not None


def require(field: str, message: str, *values: Optional[str]) -> None:
    """Raise a single field error if any of ``values`` is blank."""
    if any(is_blank(v) for v in values):
        raise FieldValidationError(field, message)


def check_username(value: Optional[str]) -> str:
    """Return the trimmed username or raise a ``username`` error."""
    if not is_valid_username(value):
        raise FieldValidationError("username", USERNAME_FORMAT_MESSAGE)
    return value.strip()


def check_email(value: Optional[str]) -> str:
    """Return the trimmed email or raise an ``email`` error."""
    if not is_valid_email(value):
        raise FieldValidationError("email", EMAIL_FORMAT_MESSAGE)
    return value.strip()
