"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID, uuid4

import pytest

from abstract_portal.adapters.bcrypt_password_hasher import BcryptPasswordHasher
from abstract_portal.config import Settings
from abstract_portal.containers import AppContainer
from abstract_portal.domain.accounts import (
    Account,
    AccountProfile,
    AccountStatus,
    AccountType,
)
from abstract_portal.domain.applications import Application, ReviewerRole
from abstract_portal.domain.errors import DuplicateKeyError
from abstract_portal.services.accounts import AccountRepository, AccountService
from abstract_portal.services.applications import (
    ApplicationRepository,
    ApplicationService,
)
from abstract_portal.services.auth import AuthService
from abstract_portal.services.sessions import InMemorySessionStore, SessionService


@dataclass
class InMemoryAccountRepository(AccountRepository):
    """In-memory account repository with unique email/username constraints."""

    accounts: dict[UUID, Account] = field(default_factory=dict)
    queries: list[tuple[str, object]] = field(default_factory=list)

    def get_by_username(self, username: str) -> Account | None:
        self.queries.append(("username", username))
        return next(
            (a for a in self.accounts.values() if a.username == username), None
        )

    def get_by_email(self, email: str) -> Account | None:
        self.queries.append(("email", email))
        return next((a for a in self.accounts.values() if a.email == email), None)

    def get_admin(self, username: str) -> Account | None:
        self.queries.append(("admin", username))
        return next(
            (
                a
                for a in self.accounts.values()
                if a.account_type is AccountType.ADMIN and a.username == username
            ),
            None,
        )

    def create_account(  # noqa: PLR0913
        self,
        account_type: AccountType,
        password_hash: str,
        email: str | None = None,
        username: str | None = None,
        subject_area: str | None = None,
    ) -> Account:
        for existing in self.accounts.values():
            if email is not None and existing.email == email:
                raise DuplicateKeyError(f"email {email}")
            if username is not None and existing.username == username:
                raise DuplicateKeyError(f"username {username}")
        account = Account(
            id=uuid4(),
            account_type=account_type,
            username=username,
            email=email,
            password_hash=password_hash,
            subject_area=subject_area,
            status=AccountStatus.PENDING,
            created_at=datetime.now(tz=UTC),
        )
        self.accounts[account.id] = account
        return account

    def list_by_status(self, status: AccountStatus) -> list[AccountProfile]:
        return [a.profile() for a in self.accounts.values() if a.status is status]

    def update_status(
        self, account_id: UUID, status: AccountStatus
    ) -> AccountProfile | None:
        current = self.accounts.get(account_id)
        if current is None:
            return None
        updated = Account(
            id=current.id,
            account_type=current.account_type,
            username=current.username,
            email=current.email,
            password_hash=current.password_hash,
            subject_area=current.subject_area,
            status=status,
            created_at=current.created_at,
        )
        self.accounts[account_id] = updated
        return updated.profile()

    def list_non_admin(self) -> list[AccountProfile]:
        return [
            a.profile()
            for a in self.accounts.values()
            if a.account_type is not AccountType.ADMIN
        ]

    def delete_non_admin(self, account_id: UUID) -> AccountProfile | None:
        current = self.accounts.get(account_id)
        if current is None or current.account_type is AccountType.ADMIN:
            return None
        del self.accounts[account_id]
        return current.profile()


@dataclass
class InMemoryApplicationRepository(ApplicationRepository):
    """In-memory application repository with a unique reviewer constraint."""

    applications: dict[UUID, Application] = field(default_factory=dict)

    def get_by_reviewer(self, reviewer_id: UUID) -> Application | None:
        return next(
            (a for a in self.applications.values() if a.reviewer_id == reviewer_id),
            None,
        )

    def create_application(  # noqa: PLR0913
        self,
        reviewer_id: UUID,
        name: str,
        department: str,
        email: str,
        roles: list[ReviewerRole],
        status: AccountStatus,
    ) -> Application:
        if self.get_by_reviewer(reviewer_id) is not None:
            raise DuplicateKeyError(f"reviewer_id {reviewer_id}")
        application = Application(
            id=uuid4(),
            reviewer_id=reviewer_id,
            name=name,
            department=department,
            email=email,
            roles=list(roles),
            status=status,
            created_at=datetime.now(tz=UTC),
        )
        self.applications[application.id] = application
        return application

    def list_by_status(self, status: AccountStatus) -> list[Application]:
        return [a for a in self.applications.values() if a.status is status]

    def update_status(
        self, application_id: UUID, status: AccountStatus
    ) -> Application | None:
        current = self.applications.get(application_id)
        if current is None:
            return None
        updated = Application(
            id=current.id,
            reviewer_id=current.reviewer_id,
            name=current.name,
            department=current.department,
            email=current.email,
            roles=current.roles,
            status=status,
            created_at=current.created_at,
        )
        self.applications[application_id] = updated
        return updated


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        admin_default_password="admin-secret",
        bcrypt_rounds=4,
        session_store="memory",
    )


@pytest.fixture
def hasher() -> BcryptPasswordHasher:
    return BcryptPasswordHasher(rounds=4)


@pytest.fixture
def account_repository() -> InMemoryAccountRepository:
    return InMemoryAccountRepository()


@pytest.fixture
def application_repository() -> InMemoryApplicationRepository:
    return InMemoryApplicationRepository()


@pytest.fixture
def account_service(
    account_repository: InMemoryAccountRepository, hasher: BcryptPasswordHasher
) -> AccountService:
    return AccountService(
        repository=account_repository,
        hasher=hasher,
        admin_password="admin-secret",
    )


@pytest.fixture
def application_service(
    application_repository: InMemoryApplicationRepository,
) -> ApplicationService:
    return ApplicationService(application_repository)


@pytest.fixture
def session_service() -> SessionService:
    return SessionService(store=InMemorySessionStore())


@pytest.fixture
def container(
    settings: Settings,
    account_service: AccountService,
    application_service: ApplicationService,
    session_service: SessionService,
) -> AppContainer:
    return AppContainer(
        settings=settings,
        account_service=account_service,
        application_service=application_service,
        session_service=session_service,
        auth_service=AuthService(
            account_service=account_service,
            session_service=session_service,
        ),
    )
