"""Translate Supabase/PostgREST failures into domain errors."""

from postgrest.exceptions import APIError

from abstract_portal.domain.errors import DuplicateKeyError

UNIQUE_VIOLATION = "23505"


def is_unique_violation(exc: APIError) -> bool:
    """Return True when Postgres rejected a write on a unique constraint."""
    return getattr(exc, "code", None) == UNIQUE_VIOLATION


def duplicate_key_error(exc: APIError, table: str) -> DuplicateKeyError:
    """Build the domain error for a unique-constraint rejection."""
    detail = getattr(exc, "message", None) or str(exc)
    return DuplicateKeyError(f"Duplicate key in {table}: {detail}")
