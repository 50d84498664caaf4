"""
Main FastAPI application entry point.
Configures the application, lifespan, error handling and routes.
"""

import uuid
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import HTMLResponse, Response
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from safevault.api.deps import get_session_context
from safevault.api.routes import health
from safevault.core.config import settings
from safevault.core.logging import get_logger, setup_logging
from safevault.db.session import engine
from safevault.models.user import UserRole
from safevault.services.user_service import UserService
from safevault.services.validators import FieldValidationError
from safevault.ui import routes as ui_routes
from safevault.ui.routes import get_template_context, templates

setup_logging()
logger = get_logger(__name__)


def bootstrap_admin() -> None:
    """Create the first admin account unless one with that username exists."""
    with Session(engine) as session:
        if UserService.get_account_by_username(session, settings.FIRST_ADMIN_USERNAME):
            return
        logger.info("Creating first admin account...")
        try:
            UserService.register(
                session,
                settings.FIRST_ADMIN_USERNAME,
                settings.FIRST_ADMIN_PASSWORD,
                settings.FIRST_ADMIN_EMAIL,
                role=UserRole.ADMIN.value,
            )
        except FieldValidationError as e:
            logger.error(f"Failed to create first admin ({e.field}): {e.message}")
            logger.warning("Continuing without an admin account. The admin page will be unreachable.")
            return
        logger.info(f"Admin account created: {settings.FIRST_ADMIN_USERNAME}")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan handler.
    Creates tables and the first admin account on startup.
    """
    logger.info(f"Starting {settings.PROJECT_NAME} v{settings.VERSION}")

    logger.info("Creating database tables...")
    SQLModel.metadata.create_all(engine)

    if settings.DISABLE_BOOTSTRAP_USERS:
        logger.info("User bootstrapping disabled (DISABLE_BOOTSTRAP_USERS=true)")
    else:
        bootstrap_admin()

    logger.info("Application startup complete")

    yield

    logger.info("Shutting down application...")


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    openapi_url=f"{settings.API_V1_PREFIX}/openapi.json",
    docs_url=f"{settings.API_V1_PREFIX}/docs",
    redoc_url=f"{settings.API_V1_PREFIX}/redoc",
    lifespan=lifespan,
)


@app.exception_handler(SQLAlchemyError)
async def storage_error_handler(request: Request, exc: SQLAlchemyError) -> HTMLResponse:
    """Turn storage failures into a generic 503 page; the detail stays in the log."""
    request_id = uuid.uuid4().hex
    logger.error(f"Storage error on {request.method} {request.url.path} (request {request_id}): {exc}")
    context = get_template_context(get_session_context(request), page="error", request_id=request_id)
    return templates.TemplateResponse(
        request,
        "error.html",
        context,
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
    )


@app.exception_handler(StarletteHTTPException)
async def forbidden_page_handler(request: Request, exc: StarletteHTTPException) -> Response:
    """Render 403s as an HTML page; other HTTP errors keep the default response."""
    if exc.status_code != status.HTTP_403_FORBIDDEN:
        return await http_exception_handler(request, exc)
    context = get_template_context(get_session_context(request), page="forbidden")
    return templates.TemplateResponse(
        request,
        "forbidden.html",
        context,
        status_code=status.HTTP_403_FORBIDDEN,
    )


app.include_router(ui_routes.router, tags=["UI"])
app.include_router(health.router, prefix=settings.API_V1_PREFIX)
