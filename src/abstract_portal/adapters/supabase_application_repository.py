"""Supabase-backed reviewer application repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from postgrest.exceptions import APIError
from supabase import Client

from abstract_portal.adapters.supabase_errors import (
    duplicate_key_error,
    is_unique_violation,
)
from abstract_portal.domain.accounts import AccountStatus
from abstract_portal.domain.applications import Application, ReviewerRole
from abstract_portal.services.applications import ApplicationRepository

_TABLE = "applications"
_COLUMNS = "id, reviewer_id, name, department, email, roles, status, created_at"


def _to_application(row: dict[str, object]) -> Application:
    created = row.get("created_at")
    return Application(
        id=UUID(str(row["id"])),
        reviewer_id=UUID(str(row["reviewer_id"])),
        name=str(row["name"]),
        department=str(row["department"]),
        email=str(row["email"]),
        roles=[ReviewerRole(role) for role in row.get("roles") or []],
        status=AccountStatus(row.get("status") or AccountStatus.PENDING.value),
        created_at=datetime.fromisoformat(created)
        if isinstance(created, str) and created
        else None,
    )


@dataclass
class SupabaseApplicationRepository(ApplicationRepository):
    """Supabase implementation for reviewer applications."""

    client: Client

    def get_by_reviewer(self, reviewer_id: UUID) -> Application | None:
        """Return the application submitted by a reviewer, if any."""
        response = (
            self.client.table(_TABLE)
            .select(_COLUMNS)
            .eq("reviewer_id", str(reviewer_id))
            .limit(1)
            .execute()
        )
        return _to_application(response.data[0]) if response.data else None

    def create_application(  # noqa: PLR0913
        self,
        reviewer_id: UUID,
        name: str,
        department: str,
        email: str,
        roles: list[ReviewerRole],
        status: AccountStatus,
    ) -> Application:
        """Insert an application row and return it."""
        try:
            response = (
                self.client.table(_TABLE)
                .insert(
                    {
                        "reviewer_id": str(reviewer_id),
                        "name": name,
                        "department": department,
                        "email": email,
                        "roles": [role.value for role in roles],
                        "status": status.value,
                    }
                )
                .execute()
            )
        except APIError as exc:
            if is_unique_violation(exc):
                raise duplicate_key_error(exc, _TABLE) from exc
            raise
        if not response.data:
            raise RuntimeError("Failed to create application in Supabase")
        return _to_application(response.data[0])

    def list_by_status(self, status: AccountStatus) -> list[Application]:
        """Return applications with the given status, oldest first."""
        response = (
            self.client.table(_TABLE)
            .select(_COLUMNS)
            .eq("status", status.value)
            .order("created_at")
            .execute()
        )
        return [_to_application(row) for row in response.data or []]

    def update_status(
        self, application_id: UUID, status: AccountStatus
    ) -> Application | None:
        """Update the status column and return the updated row."""
        response = (
            self.client.table(_TABLE)
            .update({"status": status.value})
            .eq("id", str(application_id))
            .execute()
        )
        return _to_application(response.data[0]) if response.data else None
