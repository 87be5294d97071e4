"""Tests for dashboard selection."""

import pytest

from abstract_portal.domain.accounts import AccountStatus, AccountType
from abstract_portal.services.dashboard import DashboardView, select_dashboard


@pytest.mark.parametrize(
    ("account_type", "expected"),
    [
        ("Student", DashboardView.STUDENT),
        ("Reviewer", DashboardView.REVIEWER),
        ("Committee", DashboardView.COMMITTEE),
        ("Admin", DashboardView.ADMIN),
    ],
)
def test_approved_accounts_get_role_dashboard(account_type, expected) -> None:
    assert select_dashboard(account_type, "Approved") is expected


@pytest.mark.parametrize("status", ["Pending", "Denied"])
@pytest.mark.parametrize("account_type", ["Student", "Reviewer", "Committee"])
def test_undecided_accounts_get_placeholder(account_type, status) -> None:
    assert select_dashboard(account_type, status) is DashboardView.PENDING


@pytest.mark.parametrize("status", [s.value for s in AccountStatus] + ["", "Odd"])
def test_admin_status_is_not_gated(status) -> None:
    assert select_dashboard(AccountType.ADMIN.value, status) is DashboardView.ADMIN


def test_unknown_values_get_placeholder() -> None:
    assert select_dashboard("Visitor", "Approved") is DashboardView.PENDING
    assert select_dashboard("Student", "approved") is DashboardView.PENDING
    assert select_dashboard("Student", None) is DashboardView.PENDING
