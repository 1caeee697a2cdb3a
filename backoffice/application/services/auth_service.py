"""Auth service — password hashing, credential checks and first-admin bootstrap."""

from typing import Optional

import structlog
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from backoffice.config import Settings
from backoffice.domain.models.admin import Admin
from backoffice.domain.models.role import Role

logger = structlog.get_logger(__name__)
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_admin_by_email(db: Session, email: str) -> Optional[Admin]:
    return db.query(Admin).filter(Admin.email == email).first()


def authenticate_admin(db: Session, email: str, password: str) -> Optional[Admin]:
    admin = get_admin_by_email(db, email)
    if admin is None:
        # Same hashing cost as a real check, so timing does not reveal unknown emails
        pwd_context.dummy_verify()
        return None
    if not verify_password(password, admin.password_hash):
        return None
    return admin


def ensure_bootstrap_admin(db: Session, settings: Settings) -> Optional[Admin]:
    """Create the first role and admin when the admins table is empty."""
    if not settings.BOOTSTRAP_ADMIN_PASSWORD:
        return None
    if db.query(Admin.id).first() is not None:
        return None

    role = db.query(Role).filter(Role.name == settings.BOOTSTRAP_ROLE_NAME).first()
    if role is None:
        role = Role(name=settings.BOOTSTRAP_ROLE_NAME, status="active", limit=1)
        db.add(role)
        db.flush()

    admin = Admin(
        username=settings.BOOTSTRAP_ADMIN_USERNAME,
        email=settings.BOOTSTRAP_ADMIN_EMAIL,
        password_hash=hash_password(settings.BOOTSTRAP_ADMIN_PASSWORD),
        role_id=role.id,
    )
    db.add(admin)
    db.commit()
    db.refresh(admin)
    logger.info("Bootstrap admin created", email=admin.email, role=role.name)
    return admin
