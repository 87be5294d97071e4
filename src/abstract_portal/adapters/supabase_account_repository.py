"""Supabase-backed account repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from postgrest.exceptions import APIError
from supabase import Client

from abstract_portal.adapters.supabase_errors import (
    duplicate_key_error,
    is_unique_violation,
)
from abstract_portal.domain.accounts import (
    Account,
    AccountProfile,
    AccountStatus,
    AccountType,
)
from abstract_portal.services.accounts import AccountRepository

_TABLE = "accounts"
_PROFILE_COLUMNS = "id, account_type, username, email, subject_area, status, created_at"
_ACCOUNT_COLUMNS = f"{_PROFILE_COLUMNS}, password_hash"


def _parse_timestamp(value: object) -> datetime | None:
    if isinstance(value, str) and value:
        return datetime.fromisoformat(value)
    return None


def _to_profile(row: dict[str, object]) -> AccountProfile:
    return AccountProfile(
        id=UUID(str(row["id"])),
        account_type=AccountType(row["account_type"]),
        username=row.get("username"),
        email=row.get("email"),
        subject_area=row.get("subject_area"),
        status=AccountStatus(row.get("status") or AccountStatus.PENDING.value),
        created_at=_parse_timestamp(row.get("created_at")),
    )


def _to_account(row: dict[str, object]) -> Account:
    profile = _to_profile(row)
    return Account(
        id=profile.id,
        account_type=profile.account_type,
        username=profile.username,
        email=profile.email,
        password_hash=str(row.get("password_hash") or ""),
        subject_area=profile.subject_area,
        status=profile.status,
        created_at=profile.created_at,
    )


@dataclass
class SupabaseAccountRepository(AccountRepository):
    """Supabase implementation for account persistence."""

    client: Client

    def get_by_username(self, username: str) -> Account | None:
        """Return the account with this username, if present."""
        response = (
            self.client.table(_TABLE)
            .select(_ACCOUNT_COLUMNS)
            .eq("username", username)
            .limit(1)
            .execute()
        )
        return _to_account(response.data[0]) if response.data else None

    def get_by_email(self, email: str) -> Account | None:
        """Return the account with this email, if present."""
        response = (
            self.client.table(_TABLE)
            .select(_ACCOUNT_COLUMNS)
            .eq("email", email)
            .limit(1)
            .execute()
        )
        return _to_account(response.data[0]) if response.data else None

    def get_admin(self, username: str) -> Account | None:
        """Return the Admin account with this username, if present."""
        response = (
            self.client.table(_TABLE)
            .select(_ACCOUNT_COLUMNS)
            .eq("account_type", AccountType.ADMIN.value)
            .eq("username", username)
            .limit(1)
            .execute()
        )
        return _to_account(response.data[0]) if response.data else None

    def create_account(  # noqa: PLR0913
        self,
        account_type: AccountType,
        password_hash: str,
        email: str | None = None,
        username: str | None = None,
        subject_area: str | None = None,
    ) -> Account:
        """Insert an account row and return it."""
        payload: dict[str, object] = {
            "account_type": account_type.value,
            "password_hash": password_hash,
            "status": AccountStatus.PENDING.value,
        }
        if email is not None:
            payload["email"] = email
        if username is not None:
            payload["username"] = username
        if subject_area is not None:
            payload["subject_area"] = subject_area
        try:
            response = self.client.table(_TABLE).insert(payload).execute()
        except APIError as exc:
            if is_unique_violation(exc):
                raise duplicate_key_error(exc, _TABLE) from exc
            raise
        if not response.data:
            raise RuntimeError("Failed to create account in Supabase")
        return _to_account(response.data[0])

    def list_by_status(self, status: AccountStatus) -> list[AccountProfile]:
        """Return accounts with the given status, oldest first."""
        response = (
            self.client.table(_TABLE)
            .select(_PROFILE_COLUMNS)
            .eq("status", status.value)
            .order("created_at")
            .execute()
        )
        return [_to_profile(row) for row in response.data or []]

    def update_status(
        self, account_id: UUID, status: AccountStatus
    ) -> AccountProfile | None:
        """Update the status column and return the updated row."""
        response = (
            self.client.table(_TABLE)
            .update({"status": status.value})
            .eq("id", str(account_id))
            .execute()
        )
        return _to_profile(response.data[0]) if response.data else None

    def list_non_admin(self) -> list[AccountProfile]:
        """Return every non-Admin account without password hashes."""
        response = (
            self.client.table(_TABLE)
            .select(_PROFILE_COLUMNS)
            .neq("account_type", AccountType.ADMIN.value)
            .order("created_at")
            .execute()
        )
        return [_to_profile(row) for row in response.data or []]

    def delete_non_admin(self, account_id: UUID) -> AccountProfile | None:
        """Delete by id, excluding Admin rows in the same statement."""
        response = (
            self.client.table(_TABLE)
            .delete()
            .eq("id", str(account_id))
            .neq("account_type", AccountType.ADMIN.value)
            .execute()
        )
        return _to_profile(response.data[0]) if response.data else None
