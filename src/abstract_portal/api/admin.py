"""Admin account management endpoints."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse, Response

from abstract_portal.api import pages
from abstract_portal.api.guards import require_admin
from abstract_portal.domain.errors import ValidationError
from abstract_portal.domain.sessions import SessionUser

if TYPE_CHECKING:
    from abstract_portal.containers import AppContainer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/accounts", response_class=HTMLResponse)
async def manage_accounts(
    request: Request, user: SessionUser = Depends(require_admin)
) -> Response:
    """List non-Admin accounts grouped by type."""
    container: AppContainer = request.app.state.container
    try:
        accounts = container.account_service.get_all_non_admin_accounts()
    except Exception as exc:
        logger.exception("Failed to load accounts")
        return PlainTextResponse(
            f"Could not load accounts: {exc}",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
    return HTMLResponse(pages.manage_accounts_page(user, accounts))


@router.post("/accounts/{account_id}/delete", dependencies=[Depends(require_admin)])
async def delete_account(account_id: str, request: Request) -> Response:
    """Delete a non-Admin account."""
    container: AppContainer = request.app.state.container
    try:
        deleted = container.account_service.delete_account_by_id_non_admin(account_id)
    except Exception as exc:
        if not isinstance(exc, ValidationError):
            logger.exception("Failed to delete account %s", account_id)
        return PlainTextResponse(
            f"Could not delete account: {exc}",
            status_code=status.HTTP_400_BAD_REQUEST,
        )
    if deleted is None:
        return PlainTextResponse(
            "Account not found.", status_code=status.HTTP_404_NOT_FOUND
        )
    return RedirectResponse("/admin/accounts", status_code=status.HTTP_302_FOUND)
