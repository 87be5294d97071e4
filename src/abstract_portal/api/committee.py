"""Committee approval endpoints."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import PlainTextResponse, RedirectResponse, Response

from abstract_portal.api.guards import require_committee
from abstract_portal.domain.accounts import AccountStatus
from abstract_portal.domain.errors import ValidationError

if TYPE_CHECKING:
    from abstract_portal.containers import AppContainer

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/committee",
    tags=["committee"],
    dependencies=[Depends(require_committee)],
)


def _decide(
    update: Callable[[object, object], object],
    record_id: str,
    decision: AccountStatus,
    label: str,
) -> Response:
    try:
        update(record_id, decision)
    except Exception as exc:
        if not isinstance(exc, ValidationError):
            logger.exception("Failed to update %s %s", label, record_id)
        return PlainTextResponse(
            f"Could not update {label}: {exc}",
            status_code=status.HTTP_400_BAD_REQUEST,
        )
    return RedirectResponse("/dashboard", status_code=status.HTTP_302_FOUND)


@router.post("/applications/{application_id}/approve")
async def approve_application(application_id: str, request: Request) -> Response:
    """Approve a reviewer application."""
    container: AppContainer = request.app.state.container
    return _decide(
        container.application_service.set_application_status,
        application_id,
        AccountStatus.APPROVED,
        "application",
    )


@router.post("/applications/{application_id}/deny")
async def deny_application(application_id: str, request: Request) -> Response:
    """Deny a reviewer application."""
    container: AppContainer = request.app.state.container
    return _decide(
        container.application_service.set_application_status,
        application_id,
        AccountStatus.DENIED,
        "application",
    )


@router.post("/accounts/{account_id}/approve")
async def approve_account(account_id: str, request: Request) -> Response:
    """Approve a pending account."""
    container: AppContainer = request.app.state.container
    return _decide(
        container.account_service.set_account_status,
        account_id,
        AccountStatus.APPROVED,
        "account",
    )


@router.post("/accounts/{account_id}/deny")
async def deny_account(account_id: str, request: Request) -> Response:
    """Deny a pending account."""
    container: AppContainer = request.app.state.container
    return _decide(
        container.account_service.set_account_status,
        account_id,
        AccountStatus.DENIED,
        "account",
    )
