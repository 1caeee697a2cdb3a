"""FastAPI dependency — session cookie auth."""

from typing import Optional

from fastapi import Depends, Response
from fastapi.security import APIKeyCookie

from backoffice.application.services.session_service import SessionAuthenticator
from backoffice.config import get_settings
from backoffice.core.exceptions import UnauthorizedException
from backoffice.domain.models.admin import Admin
from backoffice.interfaces.deps import get_authenticator

settings = get_settings()

session_cookie = APIKeyCookie(name=settings.SESSION_COOKIE_NAME, auto_error=False)


def _cookie_policy() -> dict:
    # Cross-site cookies need SameSite=None, which browsers only accept over HTTPS
    if settings.is_production:
        return {"secure": True, "samesite": "none"}
    return {"secure": False, "samesite": "lax"}


def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.SESSION_TTL_HOURS * 60 * 60,
        httponly=True,
        path="/",
        **_cookie_policy(),
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(key=settings.SESSION_COOKIE_NAME, path="/", httponly=True, **_cookie_policy())


def get_current_admin(
    token: Optional[str] = Depends(session_cookie),
    auth: SessionAuthenticator = Depends(get_authenticator),
) -> Optional[Admin]:
    """The logged-in admin, or None. Not being logged in is not an error here."""
    return auth.current_admin(token)


def require_admin(admin: Optional[Admin] = Depends(get_current_admin)) -> Admin:
    """Gate for endpoints that need a live admin session."""
    if admin is None:
        raise UnauthorizedException("Not authenticated")
    return admin
