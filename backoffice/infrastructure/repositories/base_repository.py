"""
SQLAlchemy implementation of the Base Repository.
"""

from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from sqlalchemy.orm import Session

from backoffice.domain.repositories.base import BaseRepository
from backoffice.infrastructure.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class SQLAlchemyRepository(BaseRepository[ModelType], Generic[ModelType]):
    """Generic repository implementation for SQLAlchemy models."""

    def __init__(self, db: Session, model: Type[ModelType]):
        self.db = db
        self.model = model

    def get_by_id(self, id: str) -> Optional[ModelType]:
        return self.db.query(self.model).filter(self.model.id == id).first()

    def list(self) -> List[ModelType]:
        return self.db.query(self.model).order_by(self.model.id).all()

    def create(self, values: Dict[str, Any], commit: bool = True) -> ModelType:
        db_obj = self.model(**values)
        self.db.add(db_obj)
        if commit:
            self.commit()
            self.db.refresh(db_obj)
        else:
            self.db.flush()
        return db_obj

    def update(self, db_obj: ModelType, values: Dict[str, Any], commit: bool = True) -> ModelType:
        for field, value in values.items():
            if hasattr(db_obj, field):
                setattr(db_obj, field, value)

        self.db.add(db_obj)
        if commit:
            self.commit()
            self.db.refresh(db_obj)
        else:
            self.db.flush()
        return db_obj

    def delete(self, db_obj: ModelType, commit: bool = True) -> None:
        self.db.delete(db_obj)
        if commit:
            self.commit()
        else:
            self.db.flush()

    def refresh(self, db_obj: ModelType) -> ModelType:
        self.db.refresh(db_obj)
        return db_obj

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()
