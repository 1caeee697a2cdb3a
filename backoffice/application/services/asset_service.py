"""Keeps a record's hosted image in step with the record."""

from typing import Iterable, Optional, Protocol

import structlog

from backoffice.core.exceptions import ValidationError
from backoffice.domain.schemas.asset import ImageRef, IncomingFile

logger = structlog.get_logger(__name__)


class ImageHost(Protocol):
    def upload(self, file: IncomingFile) -> ImageRef:
        ...

    def destroy(self, public_id: str) -> None:
        ...


class AssetCoordinator:
    """Upload on create, replace on update, release on delete.

    Replace destroys the old asset before uploading the new one, so a failed
    upload leaves the slot empty rather than orphaning an asset.
    """

    def __init__(self, host: ImageHost, allowed_formats: Iterable[str] = ("jpg", "jpeg", "png")):
        self.host = host
        self.allowed_formats = tuple(fmt.lower() for fmt in allowed_formats)

    def check(self, file: Optional[IncomingFile]) -> None:
        """Reject files the image host would refuse, before anything is written."""
        if file is None:
            return
        if not file.content:
            raise ValidationError("Uploaded image is empty")
        if file.extension not in self.allowed_formats:
            raise ValidationError(
                f"Only {', '.join(self.allowed_formats)} images are allowed",
                details={"filename": file.filename},
            )

    def attach(self, file: Optional[IncomingFile]) -> Optional[ImageRef]:
        if file is None:
            return None
        self.check(file)
        ref = self.host.upload(file)
        logger.info("Image uploaded", public_id=ref.public_id)
        return ref

    def replace(self, old: Optional[ImageRef], file: Optional[IncomingFile]) -> Optional[ImageRef]:
        if file is None:
            return old
        self.check(file)
        self.release(old)
        return self.attach(file)

    def release(self, ref: Optional[ImageRef]) -> None:
        if ref is None or not ref.public_id:
            return
        self.host.destroy(ref.public_id)
        logger.info("Image released", public_id=ref.public_id)
