"""Entity service — create/read/update/delete for any entity family.

Order of every write: validate -> check references and uniqueness ->
image host call -> database write (record plus side tables, one
transaction). When the database write fails after an upload, the new
image is released again.
"""

from typing import Any, Dict, List, Mapping, Optional

import structlog
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from backoffice.application.services.asset_service import AssetCoordinator
from backoffice.application.services.auth_service import hash_password
from backoffice.application.services.counter_service import CategoryCounter
from backoffice.application.services.families import EntityFamily
from backoffice.application.services.integrity import IntegrityChecker
from backoffice.application.services.validation import validate_create, validate_update
from backoffice.core.exceptions import ConflictError, EntityNotFoundException, UpstreamError
from backoffice.domain.repositories.base import BaseRepository
from backoffice.domain.repositories.session_repository import SessionRepository
from backoffice.domain.schemas.asset import ImageRef, IncomingFile
from backoffice.domain.schemas.common import OBJECT_ID_PATTERN

logger = structlog.get_logger(__name__)


def _image_columns(ref: Optional[ImageRef]) -> Dict[str, Optional[str]]:
    if ref is None:
        return {"image_public_id": None, "image_url": None}
    return {"image_public_id": ref.public_id, "image_url": ref.url}


class EntityService:
    def __init__(
        self,
        family: EntityFamily,
        repo: BaseRepository,
        integrity: IntegrityChecker,
        assets: Optional[AssetCoordinator] = None,
    ):
        self.family = family
        self.repo = repo
        self.integrity = integrity
        # Families without images never touch the image host
        self.assets = assets if family.has_image else None

    # Reads

    def list(self) -> List[Any]:
        return self.repo.list()

    def get(self, entity_id: str) -> Any:
        record = self.repo.get_by_id(entity_id.lower()) if OBJECT_ID_PATTERN.fullmatch(entity_id) else None
        if record is None:
            raise EntityNotFoundException(f"{self.family.label} not found", details={"id": entity_id})
        return record

    # Writes

    def create(self, payload: Mapping[str, Any], image: Optional[IncomingFile] = None) -> Any:
        data = validate_create(self.family.create_schema, payload)
        image = self._accepted_image(image)
        self.integrity.check_references(self.family, data)
        self.integrity.check_unique(self.family, data)

        values = self._to_columns(data)
        new_image = self.assets.attach(image) if self.assets else None
        if new_image is not None:
            values.update(_image_columns(new_image))

        try:
            record = self.repo.create(values, commit=False)
            self._after_create(record)
            self.repo.commit()
        except IntegrityError as exc:
            self._abort(new_image)
            raise ConflictError(self.family.conflict_message) from exc
        except SQLAlchemyError as exc:
            self._abort(new_image)
            raise UpstreamError("Database write failed") from exc

        self.repo.refresh(record)
        logger.info(f"{self.family.label} created", entity_id=record.id)
        return record

    def update(self, entity_id: str, payload: Mapping[str, Any], image: Optional[IncomingFile] = None) -> Any:
        data = validate_update(
            self.family.update_schema,
            payload,
            reject_unknown=self.family.reject_unknown_fields,
        )
        image = self._accepted_image(image)
        record = self.get(entity_id)

        self.integrity.check_references(self.family, data)
        if self.family.unique_on_update:
            self.integrity.check_unique(self.family, data, exclude_id=record.id)

        values = self._to_columns(data)
        previous = {column: getattr(record, column) for column in values}

        new_image = None
        if self.assets is not None and image is not None:
            new_image = self.assets.replace(record.image, image)
            values.update(_image_columns(new_image))

        try:
            self.repo.update(record, values, commit=False)
            self._after_update(record, previous)
            self.repo.commit()
        except IntegrityError as exc:
            self._abort(new_image)
            raise ConflictError(self.family.conflict_message) from exc
        except SQLAlchemyError as exc:
            self._abort(new_image)
            raise UpstreamError("Database write failed") from exc

        self.repo.refresh(record)
        logger.info(f"{self.family.label} updated", entity_id=record.id, fields=sorted(values))
        return record

    def delete(self, entity_id: str) -> None:
        record = self.get(entity_id)
        self.integrity.check_not_referenced(self.family, record)
        image = record.image if self.assets else None

        try:
            self._before_delete(record)
            self.repo.delete(record, commit=False)
            self._after_delete(record)
            self.repo.commit()
        except SQLAlchemyError as exc:
            self.repo.rollback()
            raise UpstreamError("Database write failed") from exc

        logger.info(f"{self.family.label} deleted", entity_id=entity_id)
        # The record is gone even if this fails; the error still reaches the caller
        if self.assets is not None:
            self.assets.release(image)

    # Hooks for families with side tables; they run inside the write transaction

    def _after_create(self, record: Any) -> None:
        pass

    def _after_update(self, record: Any, previous: Dict[str, Any]) -> None:
        pass

    def _before_delete(self, record: Any) -> None:
        pass

    def _after_delete(self, record: Any) -> None:
        pass

    # Helpers

    def _accepted_image(self, image: Optional[IncomingFile]) -> Optional[IncomingFile]:
        if self.assets is None:
            return None
        self.assets.check(image)
        return image

    def _to_columns(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        values: Dict[str, Any] = {}
        for key, value in data.items():
            if key == self.family.credential_field:
                values["password_hash"] = hash_password(value)
            elif key in self.family.references:
                values[self.family.references[key].column] = value
            else:
                values[key] = value
        return values

    def _abort(self, new_image: Optional[ImageRef]) -> None:
        self.repo.rollback()
        if new_image is None or self.assets is None:
            return
        logger.warning("Database write failed, releasing uploaded image", public_id=new_image.public_id)
        try:
            self.assets.release(new_image)
        except UpstreamError:
            logger.exception("Could not release orphaned image", public_id=new_image.public_id)


class ProductService(EntityService):
    """Products keep their category's counter in step."""

    def __init__(
        self,
        family: EntityFamily,
        repo: BaseRepository,
        integrity: IntegrityChecker,
        assets: Optional[AssetCoordinator],
        counter: CategoryCounter,
    ):
        super().__init__(family, repo, integrity, assets)
        self.counter = counter

    def _after_create(self, record: Any) -> None:
        self.counter.increment(record.category_id)

    def _after_update(self, record: Any, previous: Dict[str, Any]) -> None:
        if "category_id" in previous:
            self.counter.move(previous["category_id"], record.category_id)

    def _after_delete(self, record: Any) -> None:
        self.counter.decrement(record.category_id)


class AdminService(EntityService):
    """Deleting an admin also ends all of their sessions."""

    def __init__(
        self,
        family: EntityFamily,
        repo: BaseRepository,
        integrity: IntegrityChecker,
        assets: Optional[AssetCoordinator],
        sessions: SessionRepository,
    ):
        super().__init__(family, repo, integrity, assets)
        self.sessions = sessions

    def _before_delete(self, record: Any) -> None:
        self.sessions.delete_for_admin(record.id, commit=False)
