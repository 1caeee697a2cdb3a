"""Role API routes."""

from fastapi import APIRouter

from backoffice.application.services.families import ROLES
from backoffice.interfaces.api.crud import build_crud_router
from backoffice.interfaces.deps import get_role_service

router = APIRouter(prefix="/api/role", tags=["Roles"])
router.include_router(build_crud_router(ROLES, get_role_service))
