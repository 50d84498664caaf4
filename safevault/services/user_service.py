"""
User service layer implementing the contact, account and search operations.
Every statement is built with SQLModel expressions, so user input only ever
reaches the database as bound parameters.
"""

from typing import Optional

from sqlmodel import Session, col, select

from safevault.core.logging import get_logger
from safevault.core.security import get_password_hash, verify_password
from safevault.models.user import User, UserRole
from safevault.services.validators import (
    LOGIN_REQUIRED_MESSAGE,
    REGISTER_REQUIRED_MESSAGE,
    SEARCH_REQUIRED_MESSAGE,
    UNKNOWN_ROLE_MESSAGE,
    USERNAME_TAKEN_MESSAGE,
    FieldValidationError,
    check_email,
    check_username,
    require,
)

logger = get_logger(__name__)


class UserService:
    """Service class for operations on the ``Users`` table."""

    @staticmethod
    def submit_contact(session: Session, name: Optional[str], email: Optional[str]) -> User:
        """
        Store a contact-form submission.

        Args:
            session: Database session
            name: Submitted username
            email: Submitted email address

        Returns:
            The inserted contact row

        Raises:
            FieldValidationError: ``username`` or ``email`` is invalid
        """
        username = check_username(name)
        address = check_email(email)

        contact = User(username=username, email=address)
        session.add(contact)
        session.commit()
        session.refresh(contact)
        logger.info(f"Contact submission stored (ID: {contact.id})")
        return contact

    @staticmethod
    def get_account_by_username(session: Session, username: str) -> Optional[User]:
        """
        Retrieve a registered account by exact username.
        Contact rows sharing the name are ignored.

        Args:
            session: Database session
            username: Username to look up (already trimmed)

        Returns:
            User if found, None otherwise
        """
        statement = (
            select(User)
            .where(User.username == username)
            .where(col(User.password_hash).is_not(None))
            .order_by(col(User.id))
        )
        return session.exec(statement).first()

    @staticmethod
    def register(
        session: Session,
        username: Optional[str],
        password: Optional[str],
        email: Optional[str],
        role: Optional[str] = UserRole.USER.value,
    ) -> User:
        """
        Create an account with a hashed password.

        Args:
            session: Database session
            username: Requested username
            password: Plain text password, hashed before storage
            email: Contact email address
            role: Account role (defaults to ``user``)

        Returns:
            Created account row

        Raises:
            FieldValidationError: a required field is blank (``register``), the
                email is malformed (``email``), the role is unknown (``role``)
                or the username belongs to another account (``username``)
        """
        require("register", REGISTER_REQUIRED_MESSAGE, username, password, email)
        address = check_email(email)

        role_value = (role or UserRole.USER.value).strip()
        if role_value not in {r.value for r in UserRole}:
            raise FieldValidationError("role", UNKNOWN_ROLE_MESSAGE)

        name = username.strip()
        if UserService.get_account_by_username(session, name) is not None:
            logger.warning(f"Registration attempt with existing username: {name}")
            raise FieldValidationError("username", USERNAME_TAKEN_MESSAGE)

        account = User(
            username=name,
            email=address,
            password_hash=get_password_hash(password),
            role=role_value,
        )
        session.add(account)
        session.commit()
        session.refresh(account)
        logger.info(f"New user registered: {account.username} (ID: {account.id}, role: {account.role})")
        return account

    @staticmethod
    def authenticate(session: Session, username: Optional[str], password: Optional[str]) -> Optional[User]:
        """
        Authenticate an account by username and password.

        Args:
            session: Database session
            username: Submitted username (trimmed before lookup)
            password: Plain text password, compared as submitted

        Returns:
            User if authentication succeeded, None for an unknown user or a
            wrong password alike

        Raises:
            FieldValidationError: either field is blank (``login``)
        """
        require("login", LOGIN_REQUIRED_MESSAGE, username, password)

        user = UserService.get_account_by_username(session, username.strip())
        if not user:
            return None
        if not verify_password(password, user.password_hash):
            return None
        return user

    @staticmethod
    def search(session: Session, query: Optional[str]) -> list[User]:
        """
        Find rows whose username contains ``query``.

        The ``%`` wildcards wrap the bound value, never the SQL text.

        Args:
            session: Database session
            query: Free-text fragment

        Returns:
            Matching rows in storage order, possibly empty

        Raises:
            FieldValidationError: the query is blank (``search``)
        """
        require("search", SEARCH_REQUIRED_MESSAGE, query)

        pattern = f"%{query.strip()}%"
        statement = select(User).where(col(User.username).like(pattern)).order_by(col(User.id))
        return list(session.exec(statement).all())
