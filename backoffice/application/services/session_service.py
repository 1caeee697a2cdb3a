"""Session authenticator — admin login, logout and session lookup.

Anonymous -> login -> Authenticated -> (logout | expiry) -> Anonymous.
The cookie carries an opaque token; the store keeps only its SHA-256.
"""

import hashlib
import secrets
from datetime import timedelta
from typing import Optional, Tuple

import structlog
from sqlalchemy.orm import Session

from backoffice.application.services.auth_service import authenticate_admin
from backoffice.core.exceptions import UnauthorizedException
from backoffice.domain.models.admin import Admin
from backoffice.domain.repositories.session_repository import SessionRepository
from backoffice.infrastructure.database import utcnow

logger = structlog.get_logger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


def token_digest(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()


class SessionAuthenticator:
    def __init__(self, db: Session, sessions: SessionRepository, ttl: timedelta):
        self.db = db
        self.sessions = sessions
        self.ttl = ttl

    def login(self, email: str, password: str, current_token: Optional[str] = None) -> Tuple[Admin, str]:
        """Check credentials and open a new session.

        Unknown email and wrong password fail the same way. A session the
        caller already holds is replaced, not kept alongside the new one.
        """
        admin = authenticate_admin(self.db, email, password)
        if admin is None:
            logger.info("Login rejected")
            raise UnauthorizedException(INVALID_CREDENTIALS)

        now = utcnow()
        self.sessions.purge_expired(now)
        if current_token:
            self.sessions.delete(token_digest(current_token))

        token = secrets.token_urlsafe(32)
        self.sessions.create(token_digest(token), admin.id, now + self.ttl)
        logger.info("Admin logged in", admin_id=admin.id)
        return admin, token

    def logout(self, token: Optional[str]) -> None:
        """Idempotent: no session, or an already destroyed one, is fine."""
        if not token:
            return
        if self.sessions.delete(token_digest(token)):
            logger.info("Admin logged out")

    def current_admin(self, token: Optional[str]) -> Optional[Admin]:
        """The admin behind a live session, or None. Slides the expiry."""
        if not token:
            return None

        now = utcnow()
        session = self.sessions.get_live(token_digest(token), now)
        if session is None:
            return None

        admin = self.db.get(Admin, session.admin_id)
        if admin is None:
            self.sessions.delete(session.token_digest)
            return None

        self.sessions.touch(session, now + self.ttl)
        return admin
