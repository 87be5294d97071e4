"""Password hashing interface."""

from typing import Protocol


class PasswordHasher(Protocol):
    """Slow adaptive hash used for password storage."""

    def hash(self, password: str) -> str:
        """Return an irreversible hash of the password."""

    def verify(self, password: str, password_hash: str) -> bool:
        """Return True when the password matches the stored hash."""
