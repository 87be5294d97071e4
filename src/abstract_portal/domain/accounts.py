"""Account domain models."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from uuid import UUID


class AccountType(str, Enum):
    """Roles an account can hold."""

    STUDENT = "Student"
    REVIEWER = "Reviewer"
    COMMITTEE = "Committee"
    ADMIN = "Admin"


class AccountStatus(str, Enum):
    """Approval lifecycle shared by accounts and applications."""

    PENDING = "Pending"
    APPROVED = "Approved"
    DENIED = "Denied"


@dataclass(frozen=True)
class AccountProfile:
    """Account view without credentials, safe to render."""

    id: UUID
    account_type: AccountType
    username: str | None
    email: str | None
    subject_area: str | None
    status: AccountStatus
    created_at: datetime | None = None


@dataclass(frozen=True)
class Account:
    """Represents an account stored in the database."""

    id: UUID
    account_type: AccountType
    username: str | None
    email: str | None
    password_hash: str
    subject_area: str | None
    status: AccountStatus
    created_at: datetime | None = None

    def profile(self) -> AccountProfile:
        """Return the account without its password hash."""
        return AccountProfile(
            id=self.id,
            account_type=self.account_type,
            username=self.username,
            email=self.email,
            subject_area=self.subject_area,
            status=self.status,
            created_at=self.created_at,
        )
