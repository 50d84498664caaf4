"""
Health check routes for monitoring and service discovery.
"""

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from safevault.core.config import settings
from safevault.core.logging import get_logger
from safevault.db.session import get_session

logger = get_logger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
def health_check() -> dict:
    """Service status and version."""
    return {
        "status": "healthy",
        "service": settings.PROJECT_NAME,
        "version": settings.VERSION,
    }


@router.get("/health/db")
def database_health_check(session: Session = Depends(get_session)) -> dict:
    """
    Database health check endpoint.
    Runs ``SELECT 1``; failure detail goes to the log, not the response.

    Args:
        session: Database session

    Returns:
        Database health status
    """
    try:
        result = session.connection().execute(text("SELECT 1")).scalar()
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}")
        return {"status": "unhealthy", "database": "error"}

    return {
        "status": "healthy",
        "database": "ok",
        "result": int(result) if result is not None else 1,
    }
