"""Pydantic schemas for Admin and the admin session."""

from typing import Optional

from pydantic import BaseModel, Field

from backoffice.domain.schemas.asset import ImageRef
from backoffice.domain.schemas.common import Email, ObjectIdStr, Password, ReadSchema, Username
from backoffice.domain.schemas.role import RoleRead


class AdminCreate(BaseModel):
    username: Username
    email: Email
    password: Password
    role: ObjectIdStr


class AdminUpdate(BaseModel):
    username: Optional[Username] = None
    email: Optional[Email] = None
    password: Optional[Password] = None
    role: Optional[ObjectIdStr] = None


class AdminRead(ReadSchema):
    username: str
    email: str
    image: Optional[ImageRef] = None
    role: Optional[RoleRead] = None


class LoginRequest(BaseModel):
    email: str
    password: str


class SessionStatus(BaseModel):
    is_logged_in: bool = Field(serialization_alias="isLoggedIn")
    admin: Optional[AdminRead] = None
