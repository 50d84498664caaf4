"""
Security utilities for password hashing, session tokens and role checks.

New password hashes use ``pbkdf2_sha256`` through passlib. Digests in the
bcrypt format (``$2a$``, ``$2b$``, ``$2y$``), as written by earlier
deployments, are checked with the ``bcrypt`` package directly.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from jose import JWTError, jwt
from passlib.context import CryptContext

from safevault.core.config import settings
from safevault.core.logging import get_logger

logger = get_logger(__name__)

# Session claim holding the authenticated role.
ROLE_CLAIM = "UserRole"

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

BCRYPT_PREFIXES = ("$2a$", "$2b$", "$2y$")

# bcrypt only reads the first 72 bytes of a password
BCRYPT_MAX_PASSWORD_BYTES = 72


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a hashed password.

    Args:
        plain_password: The plain text password
        hashed_password: The hashed password to compare against

    Returns:
        True if password matches, False otherwise
    """
    if hashed_password.startswith(BCRYPT_PREFIXES):
        return verify_bcrypt_password(plain_password, hashed_password)
    return pwd_context.verify(plain_password, hashed_password)


def verify_bcrypt_password(plain_password: str, hashed_password: str) -> bool:
    """
    Check a password against a bcrypt digest from an earlier deployment.

    A malformed digest counts as a failed check.
    """
    secret = plain_password.encode("utf-8")[:BCRYPT_MAX_PASSWORD_BYTES]
    try:
        return bcrypt.checkpw(secret, hashed_password.encode("utf-8"))
    except ValueError as e:
        logger.warning(f"Stored bcrypt hash could not be checked: {e}")
        return False


def get_password_hash(password: str) -> str:
    """
    Hash a password using the configured default scheme.

    Args:
        password: Plain text password

    Returns:
        Hashed password string
    """
    return pwd_context.hash(password)


def create_session_token(role: str, expires_delta: timedelta | None = None) -> str:
    """
    Create the signed session token stored in the session cookie.

    Args:
        role: Role of the authenticated user
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT string
    """
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.SESSION_EXPIRE_MINUTES)

    to_encode = {"exp": expire, ROLE_CLAIM: role}
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def read_session_role(token: str) -> Optional[str]:
    """
    Decode a session token and return its role claim.

    Raises:
        JWTError: If the token is malformed, tampered with or expired
    """
    payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    role = payload.get(ROLE_CLAIM)
    if role is not None and not isinstance(role, str):
        raise JWTError("Role claim must be a string")
    return role


def has_required_role(session_role: Optional[str], required_role: str) -> bool:
    """Allow only a non-empty session role that exactly equals the required role."""
    return bool(session_role) and session_role == required_role
