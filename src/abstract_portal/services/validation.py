"""Input coercion shared by the account and application services."""

from uuid import UUID

from abstract_portal.domain.accounts import AccountStatus
from abstract_portal.domain.errors import ValidationError


def parse_id(value: object, field_name: str) -> UUID:
    """Parse a record id from a path or form value."""
    if isinstance(value, UUID):
        return value
    raw = str(value or "").strip()
    if not raw:
        raise ValidationError(f"{field_name} is required")
    try:
        return UUID(raw)
    except ValueError as exc:
        raise ValidationError(f"Invalid {field_name}") from exc


def parse_status(value: object, *, default: AccountStatus | None = None) -> AccountStatus:
    """Parse an approval status, optionally defaulting blank input."""
    if isinstance(value, AccountStatus):
        return value
    raw = str(value or "").strip()
    if not raw and default is not None:
        return default
    try:
        return AccountStatus(raw)
    except ValueError as exc:
        raise ValidationError("Invalid status") from exc
