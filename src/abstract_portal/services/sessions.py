"""Server-side web sessions with a sliding expiry."""

import logging
import secrets
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Protocol

from abstract_portal.domain.sessions import SessionRecord, SessionUser

logger = logging.getLogger(__name__)

DEFAULT_SESSION_TTL = timedelta(days=7)


class SessionStore(Protocol):
    """Persistence interface for web sessions."""

    def ping(self) -> None:
        """Raise if the store cannot be used."""

    def save(self, record: SessionRecord) -> None:
        """Create or replace a session record."""

    def get(self, session_id: str, now: datetime) -> SessionRecord | None:
        """Return an unexpired session record, if present."""

    def touch(self, session_id: str, expires_at: datetime) -> None:
        """Extend a session's expiry."""

    def delete(self, session_id: str) -> None:
        """Remove a session record."""

    def purge_expired(self, now: datetime) -> int:
        """Remove every session that expired at or before now; return the count."""


@dataclass
class InMemorySessionStore(SessionStore):
    """Process-local session store; sessions are lost on restart."""

    _records: dict[str, SessionRecord] = field(default_factory=dict)

    def ping(self) -> None:
        return None

    def save(self, record: SessionRecord) -> None:
        self._records[record.id] = record

    def get(self, session_id: str, now: datetime) -> SessionRecord | None:
        record = self._records.get(session_id)
        if record is None:
            return None
        if now >= record.expires_at:
            self._records.pop(session_id, None)
            return None
        return record

    def touch(self, session_id: str, expires_at: datetime) -> None:
        record = self._records.get(session_id)
        if record is not None:
            self._records[session_id] = SessionRecord(
                id=record.id, user=record.user, expires_at=expires_at
            )

    def delete(self, session_id: str) -> None:
        self._records.pop(session_id, None)

    def purge_expired(self, now: datetime) -> int:
        expired = [key for key, record in self._records.items() if record.expires_at <= now]
        for key in expired:
            del self._records[key]
        return len(expired)


@dataclass
class SessionService:
    """Issue, resolve, and destroy session tokens."""

    store: SessionStore
    ttl: timedelta = DEFAULT_SESSION_TTL

    def ensure_store(self) -> None:
        """Fall back to in-memory sessions if the durable store is unusable."""
        if isinstance(self.store, InMemorySessionStore):
            return
        try:
            self.store.ping()
        except Exception as exc:  # noqa: BLE001
            logger.warning(
                "Session store init failed (falling back to memory): %s", exc
            )
            self.store = InMemorySessionStore()

    def start(self, user: SessionUser) -> str:
        """Persist a new session for the user and return its token."""
        now = datetime.now(tz=UTC)
        purged = self.store.purge_expired(now)
        if purged:
            logger.info("Purged %d expired sessions", purged)
        session_id = secrets.token_urlsafe(32)
        expires_at = now + self.ttl
        self.store.save(SessionRecord(id=session_id, user=user, expires_at=expires_at))
        return session_id

    def get_user(self, session_id: str | None) -> SessionUser | None:
        """Resolve a token to its user snapshot, sliding the expiry forward."""
        if not session_id:
            return None
        now = datetime.now(tz=UTC)
        record = self.store.get(session_id, now)
        if record is None:
            return None
        self.store.touch(session_id, now + self.ttl)
        return record.user

    def end(self, session_id: str | None) -> bool:
        """Destroy a session; return False when there was nothing to destroy."""
        if not session_id:
            return False
        self.store.delete(session_id)
        return True
