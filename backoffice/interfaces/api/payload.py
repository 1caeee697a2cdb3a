"""Request body reader for create/update endpoints: JSON or multipart."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from fastapi import Request
from starlette.datastructures import UploadFile

from backoffice.core.exceptions import ValidationError
from backoffice.domain.schemas.asset import IncomingFile

IMAGE_FIELD = "image"
FORM_CONTENT_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")


@dataclass
class RequestPayload:
    data: Dict[str, Any] = field(default_factory=dict)
    image: Optional[IncomingFile] = None


async def read_payload(request: Request) -> RequestPayload:
    """Fields plus the optional ``image`` file.

    Empty form values count as not sent, which is how dashboard forms
    leave a field untouched on update.
    """
    content_type = request.headers.get("content-type", "")

    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        payload = RequestPayload()
        for key, value in form.multi_items():
            if isinstance(value, UploadFile):
                if key == IMAGE_FIELD and value.filename:
                    payload.image = IncomingFile(
                        filename=value.filename,
                        content=await value.read(),
                        content_type=value.content_type,
                    )
                continue
            if value != "":
                payload.data[key] = value
        return payload

    body = await request.body()
    if not body.strip():
        return RequestPayload()
    try:
        data = await request.json()
    except ValueError as exc:
        raise ValidationError("Malformed JSON body") from exc
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return RequestPayload(data=data)
