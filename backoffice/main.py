"""FastAPI application — main entry point."""

import structlog
from contextlib import asynccontextmanager

from fastapi import FastAPI
from sqlalchemy.exc import SQLAlchemyError

from backoffice.config import get_settings
from backoffice.infrastructure.database import engine, Base, SessionLocal
from backoffice.core.logging import configure_logging
from backoffice.core.middleware import setup_middleware
from backoffice.core.exceptions import setup_exception_handlers

# Import all models so SQLAlchemy knows about them
from backoffice.domain.models.role import Role
from backoffice.domain.models.user import User
from backoffice.domain.models.admin import Admin
from backoffice.domain.models.category import Category
from backoffice.domain.models.product import Product
from backoffice.domain.models.admin_session import AdminSession

# Import routers
from backoffice.interfaces.api.roles import router as roles_router
from backoffice.interfaces.api.users import router as users_router
from backoffice.interfaces.api.admins import router as admins_router
from backoffice.interfaces.api.categories import router as categories_router
from backoffice.interfaces.api.products import router as products_router
from backoffice.interfaces.api.health import router as health_router

settings = get_settings()

# Configure logging immediately
configure_logging()
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan — startup and shutdown events."""
    logger.info("Starting back-office API...", env=settings.ENVIRONMENT)

    # No degraded mode: without a database the process does not start
    try:
        Base.metadata.create_all(bind=engine)
    except SQLAlchemyError:
        logger.exception("Database connection failed")
        raise
    logger.info("Database tables created/verified")

    from backoffice.application.services.auth_service import ensure_bootstrap_admin
    db = SessionLocal()
    try:
        ensure_bootstrap_admin(db, settings)
    finally:
        db.close()

    yield

    engine.dispose()
    logger.info("Back-office API stopped")


app = FastAPI(
    title="Back-office API",
    description="Roles, users, admins, categories and products, with session auth for admins",
    version="1.0.0",
    lifespan=lifespan,
)

# Setup Middleware (CORS, Correlation ID, Logging)
setup_middleware(app)

# Error bodies always carry a top-level "message"
setup_exception_handlers(app)

# Include routers
app.include_router(roles_router)
app.include_router(users_router)
app.include_router(admins_router)
app.include_router(categories_router)
app.include_router(products_router)
app.include_router(health_router)


@app.get("/")
def root():
    return {
        "name": "Back-office API",
        "version": "1.0.0",
        "status": "running",
        "docs": "/docs",
    }
