"""
Tests for service layer.
"""

import pytest
from sqlmodel import Session

from safevault.core.security import verify_password
from safevault.models.user import User, UserRole
from safevault.services.user_service import UserService
from safevault.services.validators import (
    INVALID_CREDENTIALS_MESSAGE,
    LOGIN_REQUIRED_MESSAGE,
    REGISTER_REQUIRED_MESSAGE,
    SEARCH_REQUIRED_MESSAGE,
    FieldValidationError,
)


def test_submit_contact_stores_trimmed_values(session: Session, all_rows) -> None:
    contact = UserService.submit_contact(session, "  dave_1 ", " dave@example.com ")

    rows = all_rows()
    assert len(rows) == 1
    assert rows[0].id == contact.id
    assert rows[0].username == "dave_1"
    assert rows[0].email == "dave@example.com"
    assert rows[0].password_hash is None
    assert rows[0].role is None
    assert contact.is_registered is False


@pytest.mark.parametrize("name", ["", "ab", "has space", "x" * 21, "semi;colon"])
def test_submit_contact_rejects_bad_username(session: Session, all_rows, name: str) -> None:
    with pytest.raises(FieldValidationError) as exc_info:
        UserService.submit_contact(session, name, "ok@example.com")
    assert exc_info.value.field == "username"
    assert all_rows() == []


def test_submit_contact_rejects_bad_email(session: Session, all_rows) -> None:
    with pytest.raises(FieldValidationError) as exc_info:
        UserService.submit_contact(session, "valid_name", "nope")
    assert exc_info.value.field == "email"
    assert all_rows() == []


def test_register_hashes_password(session: Session) -> None:
    user = UserService.register(session, " alice ", "secret", " a@b.com ")

    assert user.id is not None
    assert user.username == "alice"
    assert user.email == "a@b.com"
    assert user.role == UserRole.USER
    assert user.password_hash != "secret"
    assert verify_password("secret", user.password_hash)
    assert user.is_registered is True


def test_register_requires_all_fields(session: Session, all_rows) -> None:
    with pytest.raises(FieldValidationError) as exc_info:
        UserService.register(session, "ab", "  ", "not-an-email")
    assert exc_info.value.as_errors() == {"register": REGISTER_REQUIRED_MESSAGE}
    assert all_rows() == []


def test_register_rejects_bad_email(session: Session, all_rows) -> None:
    with pytest.raises(FieldValidationError) as exc_info:
        UserService.register(session, "ab", "pw", "not-an-email")
    assert exc_info.value.field == "email"
    assert all_rows() == []


def test_register_rejects_unknown_role(session: Session, all_rows) -> None:
    with pytest.raises(FieldValidationError) as exc_info:
        UserService.register(session, "bob", "pw", "bob@example.com", role="superuser")
    assert exc_info.value.field == "role"
    assert all_rows() == []


def test_register_rejects_taken_username(session: Session, test_user: User, all_rows) -> None:
    with pytest.raises(FieldValidationError) as exc_info:
        UserService.register(session, "alice", "other", "alice2@example.com")
    assert exc_info.value.field == "username"
    assert len(all_rows()) == 1


def test_register_allows_name_used_by_contact_row(session: Session) -> None:
    UserService.submit_contact(session, "erin", "erin@example.com")
    user = UserService.register(session, "erin", "pw", "erin@example.com")
    assert user.is_registered


def test_authenticate_success(session: Session, test_user: User) -> None:
    user = UserService.authenticate(session, " alice ", "secret")
    assert user is not None
    assert user.id == test_user.id
    assert user.role == "user"


def test_authenticate_wrong_password(session: Session, test_user: User) -> None:
    assert UserService.authenticate(session, "alice", "wrong") is None


def test_authenticate_nonexistent_user(session: Session) -> None:
    assert UserService.authenticate(session, "nouser", "whatever") is None


def test_authenticate_ignores_contact_rows(session: Session) -> None:
    UserService.submit_contact(session, "frank", "frank@example.com")
    assert UserService.authenticate(session, "frank", "anything") is None


def test_authenticate_requires_both_fields(session: Session) -> None:
    with pytest.raises(FieldValidationError) as exc_info:
        UserService.authenticate(session, "alice", "")
    assert exc_info.value.as_errors() == {"login": LOGIN_REQUIRED_MESSAGE}
    assert LOGIN_REQUIRED_MESSAGE != INVALID_CREDENTIALS_MESSAGE


def test_search_matches_substring(session: Session, test_user: User) -> None:
    UserService.submit_contact(session, "bob", "bob@example.com")

    results = UserService.search(session, "ali")
    assert [u.username for u in results] == ["alice"]


def test_search_returns_storage_order(session: Session) -> None:
    for name in ("sam_b", "sam_a", "other"):
        UserService.submit_contact(session, name, f"{name}@example.com")

    assert [u.username for u in UserService.search(session, " sam ")] == ["sam_b", "sam_a"]


def test_search_no_match_is_empty(session: Session, test_user: User) -> None:
    assert UserService.search(session, "zzz") == []


def test_search_treats_input_as_value(session: Session, test_user: User) -> None:
    assert UserService.search(session, "' OR '1'='1") == []


def test_search_rejects_blank_query(session: Session) -> None:
    with pytest.raises(FieldValidationError) as exc_info:
        UserService.search(session, "   ")
    assert exc_info.value.as_errors() == {"search": SEARCH_REQUIRED_MESSAGE}
