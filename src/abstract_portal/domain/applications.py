"""Reviewer application domain models."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from uuid import UUID

from abstract_portal.domain.accounts import AccountStatus


class ReviewerRole(str, Enum):
    """Volunteer duties a reviewer can apply for."""

    ABSTRACT_REVIEWER = "Reviewer of Abstracts"
    ORAL_JUDGE = "Judge for Oral Presentations"
    POSTER_JUDGE = "Judge for Poster Presentations"


@dataclass(frozen=True)
class Application:
    """Represents a reviewer application stored in the database."""

    id: UUID
    reviewer_id: UUID
    name: str
    department: str
    email: str
    roles: list[ReviewerRole]
    status: AccountStatus
    created_at: datetime | None = None
