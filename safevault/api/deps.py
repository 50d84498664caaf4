"""
API dependencies for FastAPI dependency injection.
Builds the request-scoped session context and the role guard.
"""

from typing import Annotated, Callable

from fastapi import Depends, HTTPException, Request, status
from jose import JWTError

from safevault.core.config import settings
from safevault.core.logging import get_logger
from safevault.core.security import has_required_role, read_session_role
from safevault.models.user import UserRole
from safevault.schemas.session import SessionContext

logger = get_logger(__name__)


def get_session_context(request: Request) -> SessionContext:
    """
    Dependency that reads the session cookie into a ``SessionContext``.

    A missing, expired or tampered cookie gives an empty context.

    Args:
        request: Incoming request

    Returns:
        Session context for this request
    """
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if not token:
        return SessionContext()

    try:
        role = read_session_role(token)
    except JWTError as e:
        logger.warning(f"Session cookie rejected: {e}")
        return SessionContext()

    return SessionContext(role=role)


def require_role(required_role: UserRole) -> Callable[..., SessionContext]:
    """
    Build a guard dependency admitting only sessions holding ``required_role``.

    Args:
        required_role: Role the guarded route needs

    Returns:
        Dependency raising 403 before the route body runs when the role is missing
    """

    def guard(
        context: Annotated[SessionContext, Depends(get_session_context)],
        request: Request,
    ) -> SessionContext:
        if not has_required_role(context.role, required_role.value):
            logger.warning(
                f"Forbidden: {request.url.path} requires role {required_role.value!r}, "
                f"session has {context.role!r}"
            )
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
        return context

    return guard
