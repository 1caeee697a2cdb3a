"""User API routes — /api/user. Create and update accept an ``image`` file."""

from fastapi import APIRouter

from backoffice.application.services.families import USERS
from backoffice.interfaces.api.crud import build_crud_router
from backoffice.interfaces.deps import get_user_service

router = APIRouter(prefix="/api/user", tags=["Users"])
router.include_router(build_crud_router(USERS, get_user_service))
