"""Reviewer application workflow."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from abstract_portal.domain.accounts import AccountStatus
from abstract_portal.domain.applications import Application, ReviewerRole
from abstract_portal.domain.errors import DuplicateKeyError, ValidationError
from abstract_portal.services.validation import parse_id, parse_status

logger = logging.getLogger(__name__)

_ALREADY_SUBMITTED = "Application already submitted"


class ApplicationRepository(Protocol):
    """Persistence interface for reviewer applications."""

    def get_by_reviewer(self, reviewer_id: UUID) -> Application | None:
        """Return the application submitted by a reviewer, if any."""

    def create_application(  # noqa: PLR0913
        self,
        reviewer_id: UUID,
        name: str,
        department: str,
        email: str,
        roles: list[ReviewerRole],
        status: AccountStatus,
    ) -> Application:
        """Insert an application; raise DuplicateKeyError if one exists."""

    def list_by_status(self, status: AccountStatus) -> list[Application]:
        """Return applications with the given status."""

    def update_status(
        self, application_id: UUID, status: AccountStatus
    ) -> Application | None:
        """Set an application status and return the updated row."""


def normalize_roles(roles: object) -> list[ReviewerRole]:
    """Accept a single role or a list of roles from form input."""
    if roles is None or roles == "":
        values: Iterable[object] = []
    elif isinstance(roles, (list, tuple)):
        values = roles
    else:
        values = [roles]
    resolved: list[ReviewerRole] = []
    for value in values:
        text = value.value if isinstance(value, ReviewerRole) else str(value).strip()
        if not text:
            continue
        try:
            role = ReviewerRole(text)
        except ValueError as exc:
            raise ValidationError(f"Invalid role: {text}") from exc
        if role not in resolved:
            resolved.append(role)
    return resolved


@dataclass
class ApplicationService:
    """Application service for reviewer volunteer applications."""

    repository: ApplicationRepository

    def create_reviewer_application_once(  # noqa: PLR0913
        self,
        reviewer_id: object,
        *,
        name: object,
        department: object,
        email: object,
        roles: object,
    ) -> Application:
        """Submit a reviewer's one and only application."""
        resolved_id = parse_id(reviewer_id, "reviewerId")
        if self.repository.get_by_reviewer(resolved_id) is not None:
            raise ValidationError(_ALREADY_SUBMITTED)
        cleaned_name = str(name or "").strip()
        cleaned_department = str(department or "").strip()
        cleaned_email = str(email or "").strip()
        if not cleaned_name or not cleaned_department or not cleaned_email:
            raise ValidationError("Missing required fields")
        resolved_roles = normalize_roles(roles)
        if not resolved_roles:
            raise ValidationError("At least one role is required")
        try:
            application = self.repository.create_application(
                reviewer_id=resolved_id,
                name=cleaned_name,
                department=cleaned_department,
                email=cleaned_email,
                roles=resolved_roles,
                status=AccountStatus.PENDING,
            )
        except DuplicateKeyError as exc:
            raise ValidationError(_ALREADY_SUBMITTED) from exc
        logger.info("Reviewer %s submitted application %s", resolved_id, application.id)
        return application

    def get_application_for_reviewer(self, reviewer_id: object) -> Application | None:
        """Return the reviewer's application, if submitted."""
        return self.repository.get_by_reviewer(parse_id(reviewer_id, "reviewerId"))

    def get_applications_by_status(
        self, status: object = AccountStatus.PENDING
    ) -> list[Application]:
        """Return applications with the given status, Pending by default."""
        resolved = parse_status(status, default=AccountStatus.PENDING)
        return self.repository.list_by_status(resolved)

    def set_application_status(
        self, application_id: object, status: object
    ) -> Application | None:
        """Record a committee decision on an application."""
        resolved_id = parse_id(application_id, "applicationId")
        resolved = parse_status(status)
        updated = self.repository.update_status(resolved_id, resolved)
        if updated is not None:
            logger.info("Application %s set to %s", resolved_id, resolved.value)
        return updated
