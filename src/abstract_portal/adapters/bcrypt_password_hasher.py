"""bcrypt-backed password hasher."""

from dataclasses import dataclass

import bcrypt

from abstract_portal.domain.errors import ValidationError
from abstract_portal.services.passwords import PasswordHasher

_MAX_PASSWORD_BYTES = 72


@dataclass
class BcryptPasswordHasher(PasswordHasher):
    """Hash and verify passwords with bcrypt."""

    rounds: int = 10

    def hash(self, password: str) -> str:
        """Return a salted bcrypt hash for the password."""
        encoded = password.encode("utf-8")
        if len(encoded) > _MAX_PASSWORD_BYTES:
            raise ValidationError("password must be at most 72 bytes")
        return bcrypt.hashpw(encoded, bcrypt.gensalt(rounds=self.rounds)).decode(
            "utf-8"
        )

    def verify(self, password: str, password_hash: str) -> bool:
        """Compare in constant time; malformed hashes never match."""
        encoded = password.encode("utf-8")
        if not password_hash or len(encoded) > _MAX_PASSWORD_BYTES:
            return False
        try:
            return bcrypt.checkpw(encoded, password_hash.encode("utf-8"))
        except ValueError:
            return False
