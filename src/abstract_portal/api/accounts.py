"""Landing, login, logout, and registration endpoints."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, Form, Request, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse, Response

from abstract_portal.api import pages
from abstract_portal.api.guards import session_token
from abstract_portal.domain.accounts import AccountType
from abstract_portal.domain.errors import AuthenticationError, ValidationError

if TYPE_CHECKING:
    from abstract_portal.containers import AppContainer

logger = logging.getLogger(__name__)

router = APIRouter(tags=["accounts"])


@router.get("/", response_class=HTMLResponse)
async def index() -> HTMLResponse:
    """Landing page."""
    return HTMLResponse(pages.index_page())


@router.get("/login", response_class=HTMLResponse)
async def login_form() -> HTMLResponse:
    """Login form."""
    return HTMLResponse(pages.login_page())


@router.post("/login")
async def login(
    request: Request,
    identifier: str = Form(default=""),
    password: str = Form(default=""),
) -> Response:
    """Check credentials and start a session."""
    container: AppContainer = request.app.state.container
    try:
        # bcrypt is CPU-bound; keep it off the event loop.
        token = await run_in_threadpool(
            container.auth_service.login, identifier, password
        )
    except ValidationError as exc:
        return PlainTextResponse(f"{exc}.", status_code=status.HTTP_400_BAD_REQUEST)
    except AuthenticationError as exc:
        return PlainTextResponse(f"{exc}.", status_code=status.HTTP_401_UNAUTHORIZED)
    except Exception as exc:
        logger.exception("Login failed")
        return PlainTextResponse(
            f"Login error: {exc}",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    container.auth_service.logout(session_token(request))
    response = RedirectResponse("/dashboard", status_code=status.HTTP_302_FOUND)
    response.set_cookie(
        container.settings.session_cookie_name,
        token,
        httponly=True,
        samesite="lax",
        secure=container.settings.session_cookie_secure,
    )
    return response


@router.post("/logout")
async def logout(request: Request) -> RedirectResponse:
    """Destroy the session; without one this is a plain redirect."""
    container: AppContainer = request.app.state.container
    token = session_token(request)
    response = RedirectResponse("/", status_code=status.HTTP_302_FOUND)
    if token is None:
        return response
    container.auth_service.logout(token)
    response.delete_cookie(container.settings.session_cookie_name)
    return response


@router.get("/register", response_class=HTMLResponse)
async def register_choice() -> HTMLResponse:
    """Account type chooser."""
    return HTMLResponse(pages.register_choice_page())


@router.get("/register/student", response_class=HTMLResponse)
async def register_student_form() -> HTMLResponse:
    return HTMLResponse(pages.register_form_page(AccountType.STUDENT))


@router.get("/register/reviewer", response_class=HTMLResponse)
async def register_reviewer_form() -> HTMLResponse:
    return HTMLResponse(pages.register_form_page(AccountType.REVIEWER))


@router.get("/register/committee", response_class=HTMLResponse)
async def register_committee_form() -> HTMLResponse:
    return HTMLResponse(pages.register_form_page(AccountType.COMMITTEE))


async def _register(
    container: AppContainer,
    account_type: AccountType,
    email: str | None,
    password: str | None,
    subject_area: str | None = None,
) -> Response:
    try:
        await run_in_threadpool(
            container.account_service.create_account,
            account_type=account_type,
            email=email,
            password=password,
            subject_area=subject_area,
        )
    except Exception as exc:
        if not isinstance(exc, ValidationError):
            logger.exception("Failed to create %s account", account_type.value)
        return PlainTextResponse(
            f"Could not create {account_type.value.lower()} account: {exc}",
            status_code=status.HTTP_400_BAD_REQUEST,
        )
    return RedirectResponse("/login", status_code=status.HTTP_302_FOUND)


@router.post("/register/student")
async def register_student(
    request: Request,
    email: str | None = Form(default=None),
    password: str | None = Form(default=None),
) -> Response:
    """Create a Student account."""
    return await _register(request.app.state.container, AccountType.STUDENT, email, password)


@router.post("/register/reviewer")
async def register_reviewer(
    request: Request,
    email: str | None = Form(default=None),
    password: str | None = Form(default=None),
    subject_area: str | None = Form(default=None, alias="subjectArea"),
) -> Response:
    """Create a Reviewer account."""
    return await _register(
        request.app.state.container,
        AccountType.REVIEWER,
        email,
        password,
        subject_area,
    )


@router.post("/register/committee")
async def register_committee(
    request: Request,
    email: str | None = Form(default=None),
    password: str | None = Form(default=None),
    subject_area: str | None = Form(default=None, alias="subjectArea"),
) -> Response:
    """Create a Committee account."""
    return await _register(
        request.app.state.container,
        AccountType.COMMITTEE,
        email,
        password,
        subject_area,
    )
