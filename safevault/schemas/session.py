"""
Request-scoped session context.
"""

from typing import Optional

from pydantic import BaseModel


class SessionContext(BaseModel):
    """Per-request view of the client's session; ``role`` is None until login."""

    role: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.role)
