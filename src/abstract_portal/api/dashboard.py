"""Role- and status-routed dashboard."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import HTMLResponse, PlainTextResponse, Response

from abstract_portal.api import pages
from abstract_portal.api.guards import require_auth
from abstract_portal.domain.sessions import SessionUser
from abstract_portal.services.dashboard import DashboardView, select_dashboard

if TYPE_CHECKING:
    from abstract_portal.containers import AppContainer

logger = logging.getLogger(__name__)

router = APIRouter(tags=["dashboard"])


def _reviewer(container: AppContainer, user: SessionUser) -> str:
    application = container.application_service.get_application_for_reviewer(user.id)
    return pages.reviewer_dashboard(user, application)


def _committee(container: AppContainer, user: SessionUser) -> str:
    return pages.committee_dashboard(
        user,
        applications=container.application_service.get_applications_by_status(),
        accounts=container.account_service.get_all_status(),
    )


_RENDERERS: dict[DashboardView, Callable[[AppContainer, SessionUser], str]] = {
    DashboardView.STUDENT: lambda _container, user: pages.student_dashboard(user),
    DashboardView.REVIEWER: _reviewer,
    DashboardView.COMMITTEE: _committee,
    DashboardView.ADMIN: lambda _container, user: pages.admin_dashboard(user),
    DashboardView.PENDING: lambda _container, user: pages.pending_dashboard(user),
}


@router.get("/dashboard", response_class=HTMLResponse)
async def dashboard(
    request: Request, user: SessionUser = Depends(require_auth)
) -> Response:
    """Render the dashboard for the session's account type and status."""
    container: AppContainer = request.app.state.container
    view = select_dashboard(user.account_type, user.status)
    try:
        return HTMLResponse(_RENDERERS[view](container, user))
    except Exception as exc:
        logger.exception("Failed to load %s dashboard", view.value)
        return PlainTextResponse(
            f"Could not load dashboard: {exc}",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
