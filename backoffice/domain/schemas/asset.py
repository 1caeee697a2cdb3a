"""Image asset value types."""

from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel


class ImageRef(BaseModel):
    """Where an entity's image lives on the image host."""
    public_id: str
    url: str


@dataclass(frozen=True)
class IncomingFile:
    """An uploaded file, already read from the request."""
    filename: str
    content: bytes
    content_type: Optional[str] = None

    @property
    def extension(self) -> str:
        return self.filename.rsplit(".", 1)[-1].lower() if "." in self.filename else ""
