"""Pydantic schemas for User."""

from typing import Optional

from pydantic import BaseModel

from backoffice.domain.schemas.asset import ImageRef
from backoffice.domain.schemas.common import Email, Password, TimestampedReadSchema, Username


class UserCreate(BaseModel):
    username: Username
    email: Email
    password: Password


class UserUpdate(BaseModel):
    username: Optional[Username] = None
    email: Optional[Email] = None
    password: Optional[Password] = None


class UserRead(TimestampedReadSchema):
    username: str
    email: str
    image: Optional[ImageRef] = None
