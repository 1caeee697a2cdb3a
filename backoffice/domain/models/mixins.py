"""Column mixins shared by several entity tables."""

from typing import Optional

from sqlalchemy import Column, DateTime, String
from sqlalchemy.sql import func

from backoffice.domain.schemas.asset import ImageRef


class ImageMixin:
    """Pointer to an image stored on the external image host."""

    image_public_id = Column(String(255), nullable=True)
    image_url = Column(String(1024), nullable=True)

    @property
    def image(self) -> Optional[ImageRef]:
        if not self.image_public_id:
            return None
        return ImageRef(public_id=self.image_public_id, url=self.image_url or "")


class TimestampMixin:
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
