"""Domain models for web sessions."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class SessionUser:
    """Account snapshot cached in a session at login time."""

    id: str
    account_type: str
    email: str | None
    username: str | None
    status: str

    def to_dict(self) -> dict[str, object]:
        """Return the snapshot as a JSON-compatible mapping."""
        return {
            "id": self.id,
            "accountType": self.account_type,
            "email": self.email,
            "username": self.username,
            "status": self.status,
        }

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> "SessionUser":
        """Build a snapshot from its stored mapping."""
        email = data.get("email")
        username = data.get("username")
        return cls(
            id=str(data["id"]),
            account_type=str(data.get("accountType", "")),
            email=str(email) if email else None,
            username=str(username) if username else None,
            status=str(data.get("status", "")),
        )


@dataclass(frozen=True)
class SessionRecord:
    """Represents a persisted web session."""

    id: str
    user: SessionUser
    expires_at: datetime
