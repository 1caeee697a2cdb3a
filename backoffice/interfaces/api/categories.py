"""Category API routes."""

from fastapi import APIRouter

from backoffice.application.services.families import CATEGORIES
from backoffice.interfaces.api.crud import build_crud_router
from backoffice.interfaces.deps import get_category_service

router = APIRouter(prefix="/api/category", tags=["Categories"])
router.include_router(build_crud_router(CATEGORIES, get_category_service))
