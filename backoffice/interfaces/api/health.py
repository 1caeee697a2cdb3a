"""Health API route — process, database and caller session status."""

from typing import Optional

import structlog
from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backoffice.application.services.session_service import SessionAuthenticator
from backoffice.infrastructure.database import get_db
from backoffice.interfaces.api.deps import session_cookie
from backoffice.interfaces.deps import get_authenticator

router = APIRouter(prefix="/api", tags=["Health"])
logger = structlog.get_logger(__name__)


@router.get("/health")
def health(
    db: Session = Depends(get_db),
    token: Optional[str] = Depends(session_cookie),
    auth: SessionAuthenticator = Depends(get_authenticator),
):
    try:
        db.execute(text("SELECT 1"))
        logged_in = auth.current_admin(token) is not None
        database = "up"
    except SQLAlchemyError:
        logger.exception("Health check could not reach the database")
        logged_in = False
        database = "down"

    return {
        "status": "OK" if database == "up" else "DEGRADED",
        "database": database,
        "session": {"isLoggedIn": logged_in},
    }
