"""SQLAlchemy engine, session factory and declarative base."""

import secrets
import time
from datetime import datetime, timezone
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from backoffice.config import get_settings

settings = get_settings()

connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(settings.DATABASE_URL, pool_pre_ping=True, connect_args=connect_args)
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)

Base = declarative_base()


def new_object_id() -> str:
    """24 hex chars: 4-byte creation timestamp followed by 8 random bytes."""
    return f"{int(time.time()):08x}{secrets.token_hex(8)}"


def utcnow() -> datetime:
    """Naive UTC, so comparisons behave the same on SQLite and PostgreSQL."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
