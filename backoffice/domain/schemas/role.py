"""Pydantic schemas for Role."""

from typing import Annotated, Literal, Optional

from pydantic import BaseModel, StringConstraints

from backoffice.domain.schemas.common import ReadSchema

RoleName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=3)]
RoleStatus = Literal["active", "inactive"]


class RoleCreate(BaseModel):
    name: RoleName
    status: RoleStatus
    limit: int


class RoleUpdate(BaseModel):
    name: Optional[RoleName] = None
    status: Optional[RoleStatus] = None
    limit: Optional[int] = None


class RoleRead(ReadSchema):
    name: str
    status: str
    limit: int
