"""Admin API routes — login, logout, check-session, plus admin CRUD."""

from typing import Optional

from fastapi import APIRouter, Depends, Response

from backoffice.application.services.families import ADMINS
from backoffice.application.services.session_service import SessionAuthenticator
from backoffice.domain.models.admin import Admin
from backoffice.domain.schemas.admin import AdminRead, LoginRequest, SessionStatus
from backoffice.interfaces.api.crud import build_crud_router
from backoffice.interfaces.api.deps import (
    clear_session_cookie,
    get_current_admin,
    require_admin,
    session_cookie,
    set_session_cookie,
)
from backoffice.interfaces.deps import get_admin_service, get_authenticator

router = APIRouter(prefix="/api/admin", tags=["Admins"])


@router.post("/login")
def login(
    body: LoginRequest,
    response: Response,
    token: Optional[str] = Depends(session_cookie),
    auth: SessionAuthenticator = Depends(get_authenticator),
):
    admin, new_token = auth.login(body.email, body.password, current_token=token)
    set_session_cookie(response, new_token)
    return {"message": "Login successful", "admin": AdminRead.model_validate(admin)}


@router.post("/logout")
def logout(
    response: Response,
    token: Optional[str] = Depends(session_cookie),
    auth: SessionAuthenticator = Depends(get_authenticator),
):
    auth.logout(token)
    clear_session_cookie(response)
    return {"message": "Logged out successfully"}


@router.get("/check-session")
def check_session(admin: Optional[Admin] = Depends(get_current_admin)):
    if admin is None:
        return SessionStatus(is_logged_in=False)
    return SessionStatus(is_logged_in=True, admin=AdminRead.model_validate(admin))


# After the fixed paths above, so /check-session is not read as an id
router.include_router(build_crud_router(ADMINS, get_admin_service, write_dependencies=[Depends(require_admin)]))
