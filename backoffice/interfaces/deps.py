"""
API Dependencies — repositories and services wired per request.
"""

from datetime import timedelta
from functools import lru_cache

from fastapi import Depends
from sqlalchemy.orm import Session

from backoffice.application.services.asset_service import AssetCoordinator, ImageHost
from backoffice.application.services.counter_service import CategoryCounter
from backoffice.application.services.entity_service import AdminService, EntityService, ProductService
from backoffice.application.services.families import ADMINS, CATEGORIES, PRODUCTS, ROLES, USERS
from backoffice.application.services.integrity import IntegrityChecker
from backoffice.application.services.session_service import SessionAuthenticator
from backoffice.config import get_settings
from backoffice.infrastructure.cloudinary_client import CloudinaryClient, CloudinaryConfig
from backoffice.infrastructure.database import get_db
from backoffice.infrastructure.repositories.base_repository import SQLAlchemyRepository
from backoffice.infrastructure.repositories.session_repository import SQLAlchemySessionRepository


@lru_cache
def get_image_host() -> ImageHost:
    """Image host client, configured once from settings."""
    return CloudinaryClient(CloudinaryConfig.from_settings(get_settings()))


def get_asset_coordinator(host: ImageHost = Depends(get_image_host)) -> AssetCoordinator:
    return AssetCoordinator(host, allowed_formats=get_settings().ALLOWED_IMAGE_FORMATS)


def get_role_service(db: Session = Depends(get_db)) -> EntityService:
    return EntityService(ROLES, SQLAlchemyRepository(db, ROLES.model), IntegrityChecker(db))


def get_user_service(
    db: Session = Depends(get_db),
    assets: AssetCoordinator = Depends(get_asset_coordinator),
) -> EntityService:
    return EntityService(USERS, SQLAlchemyRepository(db, USERS.model), IntegrityChecker(db), assets)


def get_admin_service(
    db: Session = Depends(get_db),
    assets: AssetCoordinator = Depends(get_asset_coordinator),
) -> AdminService:
    return AdminService(
        ADMINS,
        SQLAlchemyRepository(db, ADMINS.model),
        IntegrityChecker(db),
        assets,
        SQLAlchemySessionRepository(db),
    )


def get_category_service(db: Session = Depends(get_db)) -> EntityService:
    return EntityService(CATEGORIES, SQLAlchemyRepository(db, CATEGORIES.model), IntegrityChecker(db))


def get_product_service(
    db: Session = Depends(get_db),
    assets: AssetCoordinator = Depends(get_asset_coordinator),
) -> ProductService:
    return ProductService(
        PRODUCTS,
        SQLAlchemyRepository(db, PRODUCTS.model),
        IntegrityChecker(db),
        assets,
        CategoryCounter(db),
    )


def get_authenticator(db: Session = Depends(get_db)) -> SessionAuthenticator:
    ttl = timedelta(hours=get_settings().SESSION_TTL_HOURS)
    return SessionAuthenticator(db, SQLAlchemySessionRepository(db), ttl)
