"""Reviewer application endpoints."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse, Response

from abstract_portal.api import pages
from abstract_portal.api.guards import require_reviewer
from abstract_portal.domain.errors import ValidationError
from abstract_portal.domain.sessions import SessionUser

if TYPE_CHECKING:
    from abstract_portal.containers import AppContainer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reviewer", tags=["reviewer"])


@router.get("/application", response_class=HTMLResponse)
async def application_page(
    request: Request, user: SessionUser = Depends(require_reviewer)
) -> HTMLResponse:
    """Show the application form, or the submitted application."""
    container: AppContainer = request.app.state.container
    application = container.application_service.get_application_for_reviewer(user.id)
    if application is None:
        return HTMLResponse(pages.application_form_page(user))
    return HTMLResponse(pages.application_status_page(user, application))


@router.post("/application")
async def submit_application(
    request: Request, user: SessionUser = Depends(require_reviewer)
) -> Response:
    """Submit the reviewer's one application."""
    container: AppContainer = request.app.state.container
    form = await request.form()
    # Checkbox groups arrive as repeated "roles" or "roles[]" fields.
    roles = [*form.getlist("roles"), *form.getlist("roles[]")]
    try:
        container.application_service.create_reviewer_application_once(
            user.id,
            name=form.get("name"),
            department=form.get("department"),
            email=form.get("email"),
            roles=roles,
        )
    except Exception as exc:
        if not isinstance(exc, ValidationError):
            logger.exception("Failed to submit application for %s", user.id)
        return PlainTextResponse(
            f"Could not submit application: {exc}",
            status_code=status.HTTP_400_BAD_REQUEST,
        )
    return RedirectResponse("/dashboard", status_code=status.HTTP_302_FOUND)
