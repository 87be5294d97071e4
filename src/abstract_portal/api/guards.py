"""Session lookup and role guards for route handlers."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from fastapi import Depends, HTTPException, Request, status

from abstract_portal.domain.accounts import AccountType
from abstract_portal.domain.sessions import SessionUser

if TYPE_CHECKING:
    from abstract_portal.containers import AppContainer


class LoginRequired(Exception):  # noqa: N818
    """Raised when a protected route is hit without a session."""


def session_token(request: Request) -> str | None:
    """Return the session token from the request cookie, if any."""
    container: AppContainer = request.app.state.container
    return request.cookies.get(container.settings.session_cookie_name)


async def current_user(request: Request) -> SessionUser | None:
    """Resolve the signed-in user's snapshot, if any."""
    container: AppContainer = request.app.state.container
    return container.session_service.get_user(session_token(request))


async def require_auth(
    user: SessionUser | None = Depends(current_user),
) -> SessionUser:
    """Ensure the request carries a live session."""
    if user is None:
        raise LoginRequired
    return user


def require_role(role: AccountType) -> Callable[..., Awaitable[SessionUser]]:
    """Build a guard that admits only sessions of the given account type."""

    async def guard(user: SessionUser = Depends(require_auth)) -> SessionUser:
        if user.account_type != role.value:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
        return user

    return guard


require_admin = require_role(AccountType.ADMIN)
require_reviewer = require_role(AccountType.REVIEWER)
require_committee = require_role(AccountType.COMMITTEE)
