"""Form input validators raising field-keyed errors."""

from .forms import (
    EMAIL_FORMAT_MESSAGE,
    INVALID_CREDENTIALS_MESSAGE,
    LOGIN_REQUIRED_MESSAGE,
    REGISTER_REQUIRED_MESSAGE,
    SEARCH_REQUIRED_MESSAGE,
    UNKNOWN_ROLE_MESSAGE,
    USERNAME_FORMAT_MESSAGE,
    USERNAME_TAKEN_MESSAGE,
    FieldValidationError,
    check_email,
    check_username,
    is_blank,
    is_valid_email,
    is_valid_username,
    require,
)

__all__ = [
    "EMAIL_FORMAT_MESSAGE",
    "INVALID_CREDENTIALS_MESSAGE",
    "LOGIN_REQUIRED_MESSAGE",
    "REGISTER_REQUIRED_MESSAGE",
    "SEARCH_REQUIRED_MESSAGE",
    "UNKNOWN_ROLE_MESSAGE",
    "USERNAME_FORMAT_MESSAGE",
    "USERNAME_TAKEN_MESSAGE",
    "FieldValidationError",
    "check_email",
    "check_username",
    "is_blank",
    "is_valid_email",
    "is_valid_username",
    "require",
]
