"""Dependency container wiring for the application."""

from dataclasses import dataclass
from datetime import timedelta

from supabase import create_client

from abstract_portal.adapters.bcrypt_password_hasher import BcryptPasswordHasher
from abstract_portal.adapters.supabase_account_repository import (
    SupabaseAccountRepository,
)
from abstract_portal.adapters.supabase_application_repository import (
    SupabaseApplicationRepository,
)
from abstract_portal.adapters.supabase_session_store import SupabaseSessionStore
from abstract_portal.config import Settings
from abstract_portal.services.accounts import AccountService
from abstract_portal.services.applications import ApplicationService
from abstract_portal.services.auth import AuthService
from abstract_portal.services.sessions import (
    InMemorySessionStore,
    SessionService,
    SessionStore,
)


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    account_service: AccountService
    application_service: ApplicationService
    session_service: SessionService
    auth_service: AuthService

    def initialize(self) -> bool:
        """Prepare the session store and seed the Admin account.

        Returns True when a new Admin account was created.
        """
        self.session_service.ensure_store()
        return self.account_service.ensure_admin_exists()


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    account_service = AccountService(
        repository=SupabaseAccountRepository(supabase_client),
        hasher=BcryptPasswordHasher(rounds=resolved_settings.bcrypt_rounds),
        admin_username=resolved_settings.admin_username,
        admin_password=resolved_settings.admin_default_password,
    )
    application_service = ApplicationService(
        SupabaseApplicationRepository(supabase_client)
    )
    session_store: SessionStore
    if resolved_settings.session_store == "memory":
        session_store = InMemorySessionStore()
    else:
        session_store = SupabaseSessionStore(supabase_client)
    session_service = SessionService(
        store=session_store,
        ttl=timedelta(days=resolved_settings.session_ttl_days),
    )
    auth_service = AuthService(
        account_service=account_service,
        session_service=session_service,
    )
    return AppContainer(
        settings=resolved_settings,
        account_service=account_service,
        application_service=application_service,
        session_service=session_service,
        auth_service=auth_service,
    )
