"""Cloudinary image host client — upload and destroy through the Cloudinary SDK.

- Credentials go with every call; the SDK's global ``cloudinary.config`` is never touched
- Uploads land in the configured folder, scaled down to fit a square box
- A destroy answered with ``not found`` counts as already released
"""

import io
import logging
from dataclasses import dataclass
from typing import Any, Dict, Tuple

import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError

from backoffice.config import Settings
from backoffice.core.exceptions import UpstreamError
from backoffice.domain.schemas.asset import ImageRef, IncomingFile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CloudinaryConfig:
    cloud_name: str
    api_key: str
    api_secret: str
    folder: str = "user-profiles"
    max_dimension: int = 500
    allowed_formats: Tuple[str, ...] = ("jpg", "jpeg", "png")
    timeout: float = 30.0

    @classmethod
    def from_settings(cls, settings: Settings) -> "CloudinaryConfig":
        return cls(
            cloud_name=settings.CLOUDINARY_CLOUD_NAME,
            api_key=settings.CLOUDINARY_API_KEY,
            api_secret=settings.CLOUDINARY_API_SECRET,
            folder=settings.CLOUDINARY_FOLDER,
            max_dimension=settings.IMAGE_MAX_DIMENSION,
            allowed_formats=tuple(settings.ALLOWED_IMAGE_FORMATS),
            timeout=settings.IMAGE_HOST_TIMEOUT,
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.cloud_name and self.api_key and self.api_secret)


class CloudinaryClient:
    """Image host client for Cloudinary.

    Configuration is handed in at construction and passed to the SDK per
    call, so two clients with different accounts can live side by side.
    """

    def __init__(self, config: CloudinaryConfig):
        self.config = config

    def _options(self) -> Dict[str, Any]:
        if not self.config.is_configured:
            raise UpstreamError("Image host is not configured")
        return {
            "cloud_name": self.config.cloud_name,
            "api_key": self.config.api_key,
            "api_secret": self.config.api_secret,
            "timeout": self.config.timeout,
        }

    def upload(self, file: IncomingFile) -> ImageRef:
        options = self._options()
        size = self.config.max_dimension
        try:
            result = cloudinary.uploader.upload(
                io.BytesIO(file.content),
                filename=file.filename,
                folder=self.config.folder,
                allowed_formats=list(self.config.allowed_formats),
                transformation=[{"width": size, "height": size, "crop": "limit"}],
                **options,
            )
        except CloudinaryError as e:
            logger.warning(f"Cloudinary upload of {file.filename} failed: {e}")
            raise UpstreamError(
                "Image host request failed",
                details={"operation": "upload", "reason": str(e)},
            ) from e

        logger.info(f"Uploaded {file.filename} as {result['public_id']}")
        return ImageRef(public_id=result["public_id"], url=result["secure_url"])

    def destroy(self, public_id: str) -> None:
        options = self._options()
        try:
            result = cloudinary.uploader.destroy(public_id, invalidate=True, **options)
        except CloudinaryError as e:
            logger.warning(f"Cloudinary destroy of {public_id} failed: {e}")
            raise UpstreamError(
                "Image host request failed",
                details={"operation": "destroy", "reason": str(e)},
            ) from e

        outcome = result.get("result")
        if outcome == "not found":
            logger.warning(f"Cloudinary asset {public_id} already gone")
            return
        if outcome != "ok":
            raise UpstreamError("Image host refused to delete asset", details={"public_id": public_id, "result": outcome})
        logger.info(f"Destroyed {public_id}")
