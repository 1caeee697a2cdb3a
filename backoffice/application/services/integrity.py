"""Referential integrity: references resolve and unique fields stay unique."""

from typing import Any, Mapping, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from backoffice.application.services.families import EntityFamily
from backoffice.core.exceptions import ConflictError, InvalidReferenceError


class IntegrityChecker:
    """Read-only checks run before any write."""

    def __init__(self, db: Session):
        self.db = db

    def check_references(self, family: EntityFamily, data: Mapping[str, Any]) -> None:
        for field, ref in family.references.items():
            value = data.get(field)
            if value is None:
                continue
            exists = self.db.query(ref.model.id).filter(ref.model.id == value).first()
            if exists is None:
                raise InvalidReferenceError(
                    f"Invalid reference: {field} {value} does not exist",
                    details={"field": field, "value": value},
                )

    def check_unique(
        self,
        family: EntityFamily,
        data: Mapping[str, Any],
        exclude_id: Optional[str] = None,
    ) -> None:
        """One query over every unique field sent; a match on any of them conflicts."""
        model = family.model
        fields = [name for name in family.unique_fields if data.get(name) is not None]
        if not fields:
            return

        query = self.db.query(model.id).filter(or_(*(getattr(model, name) == data[name] for name in fields)))
        if exclude_id is not None:
            query = query.filter(model.id != exclude_id)

        if query.first() is not None:
            raise ConflictError(family.conflict_message, details={"fields": fields})

    def check_not_referenced(self, family: EntityFamily, record: Any) -> None:
        """Deletes are restricted while other rows still point at the record."""
        for inbound in family.referenced_by:
            count = (
                self.db.query(inbound.model)
                .filter(getattr(inbound.model, inbound.column) == record.id)
                .count()
            )
            if count:
                raise ConflictError(
                    f"{family.label} is still referenced by {count} {inbound.label}(s)",
                    details={"referenced_by": inbound.label, "count": count},
                )
