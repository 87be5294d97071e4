"""Dashboard selection by account type and status."""

from enum import Enum

from abstract_portal.domain.accounts import AccountStatus, AccountType


class DashboardView(Enum):
    """Dashboards a signed-in user can land on."""

    STUDENT = "student"
    REVIEWER = "reviewer"
    COMMITTEE = "committee"
    ADMIN = "admin"
    PENDING = "pending"


_DASHBOARDS: dict[tuple[AccountType, AccountStatus], DashboardView] = {
    (AccountType.STUDENT, AccountStatus.APPROVED): DashboardView.STUDENT,
    (AccountType.REVIEWER, AccountStatus.APPROVED): DashboardView.REVIEWER,
    (AccountType.COMMITTEE, AccountStatus.APPROVED): DashboardView.COMMITTEE,
}


def select_dashboard(account_type: str, status: str | None) -> DashboardView:
    """Return the dashboard for a session; unknown pairs get the placeholder."""
    try:
        kind = AccountType(account_type)
    except ValueError:
        return DashboardView.PENDING
    # Admin status is never gated.
    if kind is AccountType.ADMIN:
        return DashboardView.ADMIN
    try:
        state = AccountStatus(status)
    except ValueError:
        return DashboardView.PENDING
    return _DASHBOARDS.get((kind, state), DashboardView.PENDING)
