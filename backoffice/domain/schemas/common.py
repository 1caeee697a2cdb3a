"""Field types shared by the entity schemas."""

import re
from datetime import datetime
from typing import Annotated, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field

USERNAME_PATTERN = re.compile(r"[A-Za-z]{3,}")
EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
OBJECT_ID_PATTERN = re.compile(r"[0-9a-fA-F]{24}")

PASSWORD_MIN_LENGTH = 8


def _check_username(value: str) -> str:
    if not USERNAME_PATTERN.fullmatch(value):
        raise ValueError("Username must be at least 3 letters with no numbers or special chars")
    return value


def _check_email(value: str) -> str:
    if not EMAIL_PATTERN.fullmatch(value):
        raise ValueError("Invalid email format")
    return value


def _check_password(value: str) -> str:
    if len(value) < PASSWORD_MIN_LENGTH:
        raise ValueError(f"Password must be at least {PASSWORD_MIN_LENGTH} characters")
    return value


def _check_object_id(value: str) -> str:
    if not OBJECT_ID_PATTERN.fullmatch(value):
        raise ValueError("Reference must be a 24-character hex id")
    return value.lower()


Username = Annotated[str, AfterValidator(_check_username)]
Email = Annotated[str, AfterValidator(_check_email)]
Password = Annotated[str, AfterValidator(_check_password)]
ObjectIdStr = Annotated[str, AfterValidator(_check_object_id)]


class ReadSchema(BaseModel):
    """Base for response bodies: ids leave the API as ``_id``."""
    id: str = Field(serialization_alias="_id")

    model_config = ConfigDict(from_attributes=True)


class TimestampedReadSchema(ReadSchema):
    created_at: Optional[datetime] = Field(default=None, serialization_alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, serialization_alias="updatedAt")
