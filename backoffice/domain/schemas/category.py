"""Pydantic schemas for Category.

``count`` is maintained by the product service and is not accepted as input.
"""

from typing import Annotated, Optional

from pydantic import BaseModel, StringConstraints

from backoffice.domain.schemas.common import ReadSchema

CategoryName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=2)]


class CategoryCreate(BaseModel):
    name: CategoryName


class CategoryUpdate(BaseModel):
    name: Optional[CategoryName] = None


class CategoryRead(ReadSchema):
    name: str
    count: int
