"""Credential checks and login sessions."""

import logging
from dataclasses import dataclass

from abstract_portal.domain.errors import AuthenticationError, ValidationError
from abstract_portal.domain.sessions import SessionUser
from abstract_portal.services.accounts import AccountService
from abstract_portal.services.sessions import SessionService

logger = logging.getLogger(__name__)


@dataclass
class AuthService:
    """Authenticate accounts and bind them to sessions."""

    account_service: AccountService
    session_service: SessionService

    def login(self, identifier: object, password: object) -> str:
        """Verify credentials and return a new session token.

        Unknown accounts and wrong passwords raise the same error so callers
        cannot tell which one failed.
        """
        cleaned = str(identifier or "").strip()
        secret = str(password or "")
        if not cleaned or not secret:
            raise ValidationError("Missing email/username or password")

        account = self.account_service.find_by_identifier(cleaned)
        if account is None or not self.account_service.verify_password(
            account, secret
        ):
            logger.info("Rejected login attempt")
            raise AuthenticationError("Invalid credentials")

        return self.session_service.start(
            SessionUser(
                id=str(account.id),
                account_type=account.account_type.value,
                email=account.email,
                username=account.username,
                status=account.status.value,
            )
        )

    def logout(self, session_id: str | None) -> None:
        """Destroy the session, if any."""
        self.session_service.end(session_id)
