"""
Session Repository Interface.
The server-side session store used by admin authentication.
"""

from datetime import datetime
from typing import Optional, Protocol

from backoffice.domain.models.admin_session import AdminSession


class SessionRepository(Protocol):
    """Interface for session store operations. Expiry is enforced here."""

    def create(self, token_digest: str, admin_id: str, expires_at: datetime) -> AdminSession:
        """Store a new session."""
        ...

    def get_live(self, token_digest: str, now: datetime) -> Optional[AdminSession]:
        """Return the session if present and unexpired; drop it if expired."""
        ...

    def touch(self, session: AdminSession, expires_at: datetime) -> AdminSession:
        """Push the expiry of a live session forward."""
        ...

    def delete(self, token_digest: str) -> bool:
        """Remove a session. Returns False when there was nothing to remove."""
        ...

    def delete_for_admin(self, admin_id: str, commit: bool = True) -> int:
        """Remove every session belonging to an admin."""
        ...

    def purge_expired(self, now: datetime) -> int:
        """Remove all expired sessions."""
        ...
