"""Account lifecycle and lookup rules."""

import logging
import secrets
from dataclasses import dataclass, field
from typing import Protocol
from uuid import UUID

from abstract_portal.domain.accounts import (
    Account,
    AccountProfile,
    AccountStatus,
    AccountType,
)
from abstract_portal.domain.errors import DuplicateKeyError, ValidationError
from abstract_portal.services.passwords import PasswordHasher
from abstract_portal.services.validation import parse_id, parse_status

logger = logging.getLogger(__name__)

DEFAULT_ADMIN_USERNAME = "Admin"
DEFAULT_ADMIN_PASSWORD = "admin123"
_DUPLICATE_EMAIL = "An account with that email already exists"


class AccountRepository(Protocol):
    """Persistence interface for accounts."""

    def get_by_username(self, username: str) -> Account | None:
        """Return the account with this username, if present."""

    def get_by_email(self, email: str) -> Account | None:
        """Return the account with this normalized email, if present."""

    def get_admin(self, username: str) -> Account | None:
        """Return the Admin account with this username, if present."""

    def create_account(  # noqa: PLR0913
        self,
        account_type: AccountType,
        password_hash: str,
        email: str | None = None,
        username: str | None = None,
        subject_area: str | None = None,
    ) -> Account:
        """Insert an account; raise DuplicateKeyError on unique violations."""

    def list_by_status(self, status: AccountStatus) -> list[AccountProfile]:
        """Return accounts with the given status."""

    def update_status(
        self, account_id: UUID, status: AccountStatus
    ) -> AccountProfile | None:
        """Set an account status and return the updated row."""

    def list_non_admin(self) -> list[AccountProfile]:
        """Return every account whose type is not Admin."""

    def delete_non_admin(self, account_id: UUID) -> AccountProfile | None:
        """Delete the account unless it is an Admin; return the deleted row."""


def normalize_email(email: object) -> str:
    """Trim and lower-case an email address."""
    return str(email or "").strip().lower()


@dataclass
class AccountService:
    """Application service for account registration and administration."""

    repository: AccountRepository
    hasher: PasswordHasher
    admin_username: str = DEFAULT_ADMIN_USERNAME
    admin_password: str = DEFAULT_ADMIN_PASSWORD
    _decoy_hash: str | None = field(default=None, init=False, repr=False)

    def find_by_username(self, username: object) -> Account | None:
        """Return the account for a trimmed username."""
        cleaned = str(username or "").strip()
        if not cleaned:
            return None
        return self.repository.get_by_username(cleaned)

    def find_by_email(self, email: object) -> Account | None:
        """Return the account for a normalized email."""
        cleaned = normalize_email(email)
        if not cleaned:
            return None
        return self.repository.get_by_email(cleaned)

    def find_by_identifier(self, identifier: object) -> Account | None:
        """Look up by email when the identifier contains "@", else by username."""
        cleaned = str(identifier or "").strip()
        if not cleaned:
            return None
        if "@" in cleaned:
            return self.find_by_email(cleaned)
        return self.find_by_username(cleaned)

    def create_account(
        self,
        *,
        account_type: object,
        email: object,
        password: object,
        subject_area: object = None,
    ) -> Account:
        """Register a non-Admin account with a hashed password."""
        if not account_type or not password:
            raise ValidationError("accountType and password are required")
        try:
            kind = AccountType(account_type)
        except ValueError as exc:
            raise ValidationError("Invalid accountType") from exc
        if kind is AccountType.ADMIN:
            raise ValidationError("Admin accounts cannot be created via website")
        normalized_email = normalize_email(email)
        if not normalized_email:
            raise ValidationError("email is required")
        if self.repository.get_by_email(normalized_email) is not None:
            raise ValidationError(_DUPLICATE_EMAIL)

        password_hash = self.hasher.hash(str(password))
        area = str(subject_area).strip() if subject_area else None
        try:
            return self.repository.create_account(
                account_type=kind,
                password_hash=password_hash,
                email=normalized_email,
                subject_area=area or None,
            )
        except DuplicateKeyError as exc:
            raise ValidationError(_DUPLICATE_EMAIL) from exc

    def verify_password(self, account: Account | None, password: object) -> bool:
        """Return True when the plaintext matches the account's stored hash.

        A missing account is still checked against a throwaway hash, so the
        answer takes as long as a wrong password would.
        """
        if account is None:
            self.hasher.verify(str(password or ""), self._decoy())
            return False
        return self.hasher.verify(str(password or ""), account.password_hash)

    def _decoy(self) -> str:
        if self._decoy_hash is None:
            self._decoy_hash = self.hasher.hash(secrets.token_urlsafe(16))
        return self._decoy_hash

    def ensure_admin_exists(self) -> bool:
        """Create the bootstrap Admin account if missing; return True if created."""
        if self.repository.get_admin(self.admin_username) is not None:
            logger.info("Admin account %r already present", self.admin_username)
            return False
        if self.admin_password == DEFAULT_ADMIN_PASSWORD:
            logger.warning(
                "Seeding admin account with the built-in default password; "
                "set PORTAL_ADMIN_DEFAULT_PASSWORD to override it"
            )
        try:
            self.repository.create_account(
                account_type=AccountType.ADMIN,
                password_hash=self.hasher.hash(self.admin_password),
                username=self.admin_username,
            )
        except DuplicateKeyError:
            logger.info("Admin account %r created concurrently", self.admin_username)
            return False
        logger.info("Created admin account %r", self.admin_username)
        return True

    def get_all_status(self, status: object = AccountStatus.PENDING) -> list[AccountProfile]:
        """Return accounts with the given status, Pending by default."""
        resolved = parse_status(status, default=AccountStatus.PENDING)
        return self.repository.list_by_status(resolved)

    def set_account_status(
        self, account_id: object, status: object
    ) -> AccountProfile | None:
        """Record an approval decision for an account."""
        resolved_id = parse_id(account_id, "accountId")
        resolved = parse_status(status)
        updated = self.repository.update_status(resolved_id, resolved)
        if updated is not None:
            logger.info("Account %s set to %s", resolved_id, resolved.value)
        return updated

    def get_all_non_admin_accounts(self) -> list[AccountProfile]:
        """Return every non-Admin account without password hashes."""
        return self.repository.list_non_admin()

    def delete_account_by_id_non_admin(self, account_id: object) -> AccountProfile | None:
        """Delete a non-Admin account; Admin rows are never matched."""
        resolved_id = parse_id(account_id, "accountId")
        deleted = self.repository.delete_non_admin(resolved_id)
        if deleted is not None:
            logger.info("Deleted %s account %s", deleted.account_type.value, deleted.id)
        return deleted
