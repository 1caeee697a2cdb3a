"""
SQLAlchemy Implementation of the Session Repository.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from backoffice.domain.models.admin_session import AdminSession
from backoffice.domain.repositories.session_repository import SessionRepository


class SQLAlchemySessionRepository(SessionRepository):
    """Session store backed by the 'admin_sessions' table."""

    def __init__(self, db: Session):
        self.db = db

    def create(self, token_digest: str, admin_id: str, expires_at: datetime) -> AdminSession:
        session = AdminSession(token_digest=token_digest, admin_id=admin_id, expires_at=expires_at)
        self.db.add(session)
        self.db.commit()
        return session

    def get_live(self, token_digest: str, now: datetime) -> Optional[AdminSession]:
        session = self.db.get(AdminSession, token_digest)
        if session is None:
            return None
        if session.expires_at <= now:
            self.db.delete(session)
            self.db.commit()
            return None
        return session

    def touch(self, session: AdminSession, expires_at: datetime) -> AdminSession:
        session.expires_at = expires_at
        self.db.commit()
        return session

    def delete(self, token_digest: str) -> bool:
        deleted = (
            self.db.query(AdminSession)
            .filter(AdminSession.token_digest == token_digest)
            .delete(synchronize_session=False)
        )
        self.db.commit()
        return deleted > 0

    def delete_for_admin(self, admin_id: str, commit: bool = True) -> int:
        deleted = (
            self.db.query(AdminSession)
            .filter(AdminSession.admin_id == admin_id)
            .delete(synchronize_session=False)
        )
        if commit:
            self.db.commit()
        return deleted

    def purge_expired(self, now: datetime) -> int:
        deleted = (
            self.db.query(AdminSession)
            .filter(AdminSession.expires_at <= now)
            .delete(synchronize_session=False)
        )
        self.db.commit()
        return deleted
