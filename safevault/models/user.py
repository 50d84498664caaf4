"""
User model backing the shared ``Users`` table.

The table holds two kinds of rows: contact-form submissions (username and
email only) and registered accounts (all columns populated).
"""

from enum import Enum
from typing import Optional

from sqlmodel import Field, SQLModel


class UserRole(str, Enum):
    """Closed set of roles an account can hold."""

    ADMIN = "admin"
    USER = "user"


class User(SQLModel, table=True):
    """
    Row of the ``Users`` table.

    Attributes:
        id: Primary key, assigned by the database
        username: Display/login name
        email: Contact email address
        password_hash: Password digest, None for contact rows
        role: Account role, None for contact rows
    """

    __tablename__ = "Users"  # type: ignore

    id: Optional[int] = Field(default=None, primary_key=True)
    username: str = Field(index=True, max_length=255)
    email: str = Field(max_length=255)
    password_hash: Optional[str] = Field(default=None)
    role: Optional[str] = Field(default=None, max_length=50)

    @property
    def is_registered(self) -> bool:
        """True for account rows, False for contact submissions."""
        return self.password_hash is not None
