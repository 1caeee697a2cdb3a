"""Products API routes — /api/product. Category counts follow every write."""

from fastapi import APIRouter

from backoffice.application.services.families import PRODUCTS
from backoffice.interfaces.api.crud import build_crud_router
from backoffice.interfaces.deps import get_product_service

router = APIRouter(prefix="/api/product", tags=["Products"])
router.include_router(build_crud_router(PRODUCTS, get_product_service))
