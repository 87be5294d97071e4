"""Supabase-backed web session store."""

from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from abstract_portal.domain.sessions import SessionRecord, SessionUser
from abstract_portal.services.sessions import SessionStore

_TABLE = "web_sessions"


@dataclass
class SupabaseSessionStore(SessionStore):
    """Persist sessions in a Supabase table keyed by token."""

    client: Client

    def ping(self) -> None:
        """Issue a cheap query so startup fails fast on a missing table."""
        self.client.table(_TABLE).select("id").limit(1).execute()

    def save(self, record: SessionRecord) -> None:
        """Upsert the session row."""
        self.client.table(_TABLE).upsert(
            {
                "id": record.id,
                "data": record.user.to_dict(),
                "expires_at": record.expires_at.isoformat(),
            }
        ).execute()

    def get(self, session_id: str, now: datetime) -> SessionRecord | None:
        """Return the session if it has not expired."""
        response = (
            self.client.table(_TABLE)
            .select("id, data, expires_at")
            .eq("id", session_id)
            .gt("expires_at", now.isoformat())
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return SessionRecord(
            id=row["id"],
            user=SessionUser.from_dict(row["data"]),
            expires_at=datetime.fromisoformat(row["expires_at"]),
        )

    def touch(self, session_id: str, expires_at: datetime) -> None:
        """Push the expiry forward."""
        self.client.table(_TABLE).update(
            {"expires_at": expires_at.isoformat()}
        ).eq("id", session_id).execute()

    def delete(self, session_id: str) -> None:
        """Delete the session row."""
        self.client.table(_TABLE).delete().eq("id", session_id).execute()

    def purge_expired(self, now: datetime) -> int:
        """Delete rows whose expiry has passed."""
        response = (
            self.client.table(_TABLE)
            .delete()
            .lte("expires_at", now.isoformat())
            .execute()
        )
        return len(response.data or [])
