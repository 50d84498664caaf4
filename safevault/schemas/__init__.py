"""Pydantic schemas for view contexts and request state."""

from safevault.schemas.session import SessionContext
from safevault.schemas.user import UserSummary

__all__ = ["SessionContext", "UserSummary"]
