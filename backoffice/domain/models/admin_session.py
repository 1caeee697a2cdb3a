"""AdminSession domain model — server-side session store, 'admin_sessions' table."""

from sqlalchemy import Column, DateTime, ForeignKey, String

from backoffice.infrastructure.database import Base, utcnow


class AdminSession(Base):
    __tablename__ = "admin_sessions"

    # SHA-256 of the cookie token; the token itself is never stored
    token_digest = Column(String(64), primary_key=True)
    admin_id = Column(String(24), ForeignKey("admins.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    expires_at = Column(DateTime, nullable=False, index=True)

    def __repr__(self):
        return f"<AdminSession admin={self.admin_id} expires={self.expires_at}>"
