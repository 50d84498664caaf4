"""
UI routes for the SafeVault pages.
Handles form rendering, submission and the role-gated admin page.
"""

from datetime import datetime
from pathlib import Path
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from sqlmodel import Session

from safevault.api.deps import get_session_context, require_role
from safevault.core.config import settings
from safevault.core.logging import get_logger
from safevault.core.security import create_session_token
from safevault.db.session import get_session
from safevault.models.user import UserRole
from safevault.schemas.session import SessionContext
from safevault.schemas.user import UserSummary
from safevault.services.user_service import UserService
from safevault.services.validators import INVALID_CREDENTIALS_MESSAGE, FieldValidationError

logger = get_logger(__name__)

router = APIRouter()

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))

DbSession = Annotated[Session, Depends(get_session)]
CurrentSession = Annotated[SessionContext, Depends(get_session_context)]


def get_template_context(context: SessionContext, **kwargs) -> dict:
    """Base template context shared by every page."""
    return {
        "project_name": settings.PROJECT_NAME,
        "current_year": datetime.now().year,
        "session_role": context.role,
        "errors": {},
        **kwargs,
    }


def render_form_errors(
    request: Request,
    context: SessionContext,
    template: str,
    error: FieldValidationError,
    **kwargs,
) -> HTMLResponse:
    """Re-render a form with a field-keyed error."""
    page = get_template_context(context, errors=error.as_errors(), **kwargs)
    return templates.TemplateResponse(request, template, page, status_code=status.HTTP_400_BAD_REQUEST)


# ========== Page Routes ==========

@router.get("/", response_class=HTMLResponse)
def home_page(request: Request, context: CurrentSession):
    """Render the home page."""
    return templates.TemplateResponse(request, "index.html", get_template_context(context, page="home"))


@router.get("/privacy", response_class=HTMLResponse)
def privacy_page(request: Request, context: CurrentSession):
    """Render the privacy notice."""
    return templates.TemplateResponse(request, "privacy.html", get_template_context(context, page="privacy"))


# ========== Contact Form ==========

@router.get("/submit-form", response_class=HTMLResponse)
def contact_form_page(request: Request, context: CurrentSession):
    """Render the contact form."""
    return templates.TemplateResponse(request, "web_form.html", get_template_context(context, page="contact"))


@router.post("/submit")
def submit_contact(
    request: Request,
    session: DbSession,
    context: CurrentSession,
    name: str = Form(default=""),
    email: str = Form(default=""),
):
    """Validate and store a contact submission, then go home."""
    try:
        UserService.submit_contact(session, name, email)
    except FieldValidationError as e:
        logger.info(f"Contact form rejected on field {e.field!r}")
        return render_form_errors(request, context, "web_form.html", e, page="contact", name=name, email=email)

    return RedirectResponse(url="/", status_code=status.HTTP_303_SEE_OTHER)


# ========== Accounts ==========

@router.get("/register", response_class=HTMLResponse)
def register_page(request: Request, context: CurrentSession):
    """Render the registration form."""
    page = get_template_context(context, page="register", roles=[r.value for r in UserRole])
    return templates.TemplateResponse(request, "register.html", page)


@router.post("/register")
def register(
    request: Request,
    session: DbSession,
    context: CurrentSession,
    username: str = Form(default=""),
    password: str = Form(default=""),
    email: str = Form(default=""),
    role: str = Form(default=UserRole.USER.value),
):
    """Create an account and send the user to the login page."""
    try:
        UserService.register(session, username, password, email, role)
    except FieldValidationError as e:
        return render_form_errors(
            request,
            context,
            "register.html",
            e,
            page="register",
            roles=[r.value for r in UserRole],
            username=username,
            email=email,
        )

    return RedirectResponse(url="/login", status_code=status.HTTP_303_SEE_OTHER)


@router.get("/login", response_class=HTMLResponse)
def login_page(request: Request, context: CurrentSession):
    """Render the login form."""
    return templates.TemplateResponse(request, "login.html", get_template_context(context, page="login"))


@router.post("/login")
def login(
    request: Request,
    session: DbSession,
    context: CurrentSession,
    username: str = Form(default=""),
    password: str = Form(default=""),
):
    """
    Check credentials and store the account role in the session cookie.

    Unknown usernames and wrong passwords get the same message.
    """
    try:
        user = UserService.authenticate(session, username, password)
    except FieldValidationError as e:
        return render_form_errors(request, context, "login.html", e, page="login", username=username)

    if user is None:
        logger.warning(f"Failed login attempt for username: {username.strip()}")
        error = FieldValidationError("login", INVALID_CREDENTIALS_MESSAGE)
        return render_form_errors(request, context, "login.html", error, page="login", username=username)

    logger.info(f"User logged in: {user.username} (ID: {user.id})")
    response = RedirectResponse(url="/dashboard", status_code=status.HTTP_303_SEE_OTHER)
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=create_session_token(user.role),
        max_age=settings.SESSION_EXPIRE_MINUTES * 60,
        httponly=True,
        samesite="lax",
        secure=settings.SESSION_COOKIE_SECURE,
    )
    return response


@router.get("/dashboard", response_class=HTMLResponse)
def dashboard_page(request: Request, context: CurrentSession):
    """Render the signed-in landing page, or send anonymous visitors to login."""
    if not context.is_authenticated:
        return RedirectResponse(url="/login", status_code=status.HTTP_303_SEE_OTHER)
    return templates.TemplateResponse(request, "dashboard.html", get_template_context(context, page="dashboard"))


# ========== Search ==========

@router.get("/search", response_class=HTMLResponse)
def search(
    request: Request,
    session: DbSession,
    context: CurrentSession,
    query: Optional[str] = None,
):
    """
    Render the search form, or the results when ``query`` is supplied.

    A supplied but blank query re-renders the form with an error.
    """
    if query is None:
        return templates.TemplateResponse(request, "search.html", get_template_context(context, page="search"))

    try:
        rows = UserService.search(session, query)
    except FieldValidationError as e:
        return render_form_errors(request, context, "search.html", e, page="search", query=query)

    results = [UserSummary.model_validate(row) for row in rows]
    page = get_template_context(context, page="search", query=query.strip(), results=results)
    return templates.TemplateResponse(request, "search_results.html", page)


# ========== Admin ==========

@router.get(
    "/admin",
    response_class=HTMLResponse,
    dependencies=[Depends(require_role(UserRole.ADMIN))],
)
def admin_dashboard_page(request: Request, context: CurrentSession):
    """Render the admin dashboard (admin role only)."""
    return templates.TemplateResponse(request, "admin_dashboard.html", get_template_context(context, page="admin"))
