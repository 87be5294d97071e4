"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest
from postgrest.exceptions import APIError

from abstract_portal.adapters.supabase_account_repository import (
    SupabaseAccountRepository,
)
from abstract_portal.adapters.supabase_application_repository import (
    SupabaseApplicationRepository,
)
from abstract_portal.adapters.supabase_session_store import SupabaseSessionStore
from abstract_portal.domain.accounts import AccountStatus, AccountType
from abstract_portal.domain.applications import ReviewerRole
from abstract_portal.domain.errors import DuplicateKeyError
from abstract_portal.domain.sessions import SessionRecord, SessionUser


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {
            "select": [],
            "insert": [],
            "update": [],
            "upsert": [],
            "delete": [],
        }
    )
    last_payload: object | None = None
    last_filters: list[tuple[str, str, object]] = field(default_factory=list)
    last_columns: str | None = None
    error: Exception | None = None

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, columns: str = "*") -> "FakeTable":
        self._action = "select"
        self.last_columns = columns
        return self

    def insert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "insert"
        self.last_payload = payload
        return self

    def upsert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "upsert"
        self.last_payload = payload
        return self

    def update(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "update"
        self.last_payload = payload
        return self

    def delete(self) -> "FakeTable":
        self._action = "delete"
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("eq", column, value))
        return self

    def neq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("neq", column, value))
        return self

    def gt(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("gt", column, value))
        return self

    def lte(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("lte", column, value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def order(self, _column: str, desc: bool = False) -> "FakeTable":
        return self

    def execute(self) -> FakeResponse:
        if self.error is not None:
            raise self.error
        action = getattr(self, "_action", "select")
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def _account_row(**overrides) -> dict[str, object]:
    row: dict[str, object] = {
        "id": str(uuid4()),
        "account_type": "Student",
        "username": None,
        "email": "s@b.com",
        "subject_area": None,
        "status": "Pending",
        "created_at": "2025-03-01T10:00:00+00:00",
        "password_hash": "$2b$04$hash",
    }
    row.update(overrides)
    return row


def test_account_repository_create_and_lookup() -> None:
    client = FakeSupabaseClient()
    accounts = client.table("accounts")
    row = _account_row()
    accounts.queue("insert", [row])
    accounts.queue("select", [row])

    repository = SupabaseAccountRepository(client)
    created = repository.create_account(
        account_type=AccountType.STUDENT, password_hash="$2b$04$hash", email="s@b.com"
    )
    payload = accounts.last_payload
    fetched = repository.get_by_email("s@b.com")

    assert payload == {
        "account_type": "Student",
        "password_hash": "$2b$04$hash",
        "status": "Pending",
        "email": "s@b.com",
    }
    assert str(created.id) == row["id"]
    assert created.created_at == datetime(2025, 3, 1, 10, tzinfo=UTC)
    assert fetched is not None
    assert fetched.password_hash == "$2b$04$hash"
    assert ("eq", "email", "s@b.com") in accounts.last_filters


def test_account_repository_admin_lookup_filters_type() -> None:
    client = FakeSupabaseClient()
    accounts = client.table("accounts")
    accounts.queue(
        "select", [_account_row(account_type="Admin", username="Admin", email=None)]
    )

    admin = SupabaseAccountRepository(client).get_admin("Admin")

    assert admin is not None
    assert admin.account_type is AccountType.ADMIN
    assert accounts.last_filters == [
        ("eq", "account_type", "Admin"),
        ("eq", "username", "Admin"),
    ]


def test_account_repository_translates_unique_violation() -> None:
    client = FakeSupabaseClient()
    client.table("accounts").error = APIError(
        {"code": "23505", "message": "duplicate key value", "details": "", "hint": ""}
    )

    with pytest.raises(DuplicateKeyError):
        SupabaseAccountRepository(client).create_account(
            account_type=AccountType.STUDENT, password_hash="h", email="s@b.com"
        )


def test_account_repository_reraises_other_api_errors() -> None:
    client = FakeSupabaseClient()
    client.table("accounts").error = APIError(
        {"code": "42P01", "message": "missing table", "details": "", "hint": ""}
    )

    with pytest.raises(APIError):
        SupabaseAccountRepository(client).create_account(
            account_type=AccountType.STUDENT, password_hash="h", email="s@b.com"
        )


def test_account_repository_listings_omit_password() -> None:
    client = FakeSupabaseClient()
    accounts = client.table("accounts")
    accounts.queue("select", [_account_row(status="Pending")])

    profiles = SupabaseAccountRepository(client).list_non_admin()

    assert accounts.last_columns is not None
    assert "password_hash" not in accounts.last_columns
    assert ("neq", "account_type", "Admin") in accounts.last_filters
    assert profiles[0].status is AccountStatus.PENDING


def test_account_repository_delete_excludes_admin() -> None:
    client = FakeSupabaseClient()
    accounts = client.table("accounts")
    account_id = uuid4()

    deleted = SupabaseAccountRepository(client).delete_non_admin(account_id)

    assert deleted is None
    assert accounts.last_filters == [
        ("eq", "id", str(account_id)),
        ("neq", "account_type", "Admin"),
    ]


def test_account_repository_update_status() -> None:
    client = FakeSupabaseClient()
    accounts = client.table("accounts")
    row = _account_row(status="Approved")
    accounts.queue("update", [row])

    updated = SupabaseAccountRepository(client).update_status(
        uuid4(), AccountStatus.APPROVED
    )

    assert accounts.last_payload == {"status": "Approved"}
    assert updated is not None
    assert updated.status is AccountStatus.APPROVED


def test_application_repository_roundtrip() -> None:
    client = FakeSupabaseClient()
    applications = client.table("applications")
    reviewer_id = uuid4()
    row = {
        "id": str(uuid4()),
        "reviewer_id": str(reviewer_id),
        "name": "Rita",
        "department": "Chemistry",
        "email": "r@b.com",
        "roles": ["Judge for Oral Presentations"],
        "status": "Pending",
        "created_at": None,
    }
    applications.queue("insert", [row])
    applications.queue("select", [row])

    repository = SupabaseApplicationRepository(client)
    created = repository.create_application(
        reviewer_id=reviewer_id,
        name="Rita",
        department="Chemistry",
        email="r@b.com",
        roles=[ReviewerRole.ORAL_JUDGE],
        status=AccountStatus.PENDING,
    )
    insert_payload = applications.last_payload
    fetched = repository.get_by_reviewer(reviewer_id)

    assert insert_payload is not None
    assert insert_payload["roles"] == ["Judge for Oral Presentations"]
    assert created.roles == [ReviewerRole.ORAL_JUDGE]
    assert fetched is not None
    assert fetched.reviewer_id == reviewer_id


def test_application_repository_translates_unique_violation() -> None:
    client = FakeSupabaseClient()
    client.table("applications").error = APIError(
        {"code": "23505", "message": "duplicate key value", "details": "", "hint": ""}
    )

    with pytest.raises(DuplicateKeyError):
        SupabaseApplicationRepository(client).create_application(
            reviewer_id=uuid4(),
            name="Rita",
            department="Chemistry",
            email="r@b.com",
            roles=[ReviewerRole.ABSTRACT_REVIEWER],
            status=AccountStatus.PENDING,
        )


def test_session_store_roundtrip() -> None:
    client = FakeSupabaseClient()
    sessions = client.table("web_sessions")
    user = SessionUser(
        id="abc", account_type="Committee", email="c@b.com", username=None, status="Approved"
    )
    expires_at = datetime.now(tz=UTC) + timedelta(days=7)
    store = SupabaseSessionStore(client)

    store.save(SessionRecord(id="token", user=user, expires_at=expires_at))
    saved = sessions.last_payload
    sessions.queue(
        "select",
        [{"id": "token", "data": user.to_dict(), "expires_at": expires_at.isoformat()}],
    )
    now = datetime.now(tz=UTC)
    record = store.get("token", now)

    assert saved == {
        "id": "token",
        "data": {
            "id": "abc",
            "accountType": "Committee",
            "email": "c@b.com",
            "username": None,
            "status": "Approved",
        },
        "expires_at": expires_at.isoformat(),
    }
    assert record is not None
    assert record.user == user
    assert ("gt", "expires_at", now.isoformat()) in sessions.last_filters


def test_session_store_missing_session() -> None:
    client = FakeSupabaseClient()

    assert SupabaseSessionStore(client).get("token", datetime.now(tz=UTC)) is None


def test_session_store_purges_expired_rows() -> None:
    client = FakeSupabaseClient()
    sessions = client.table("web_sessions")
    sessions.queue("delete", [{"id": "a"}, {"id": "b"}])
    now = datetime.now(tz=UTC)

    purged = SupabaseSessionStore(client).purge_expired(now)

    assert purged == 2
    assert sessions.last_filters == [("lte", "expires_at", now.isoformat())]
