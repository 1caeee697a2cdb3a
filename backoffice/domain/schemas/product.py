"""Pydantic schemas for Product domain."""

from typing import Annotated, Optional

from pydantic import BaseModel, Field, StringConstraints

from backoffice.domain.schemas.asset import ImageRef
from backoffice.domain.schemas.category import CategoryRead
from backoffice.domain.schemas.common import ObjectIdStr, TimestampedReadSchema

ProductName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=3, max_length=100)]
Price = Annotated[float, Field(ge=0, allow_inf_nan=False)]


class ProductCreate(BaseModel):
    name: ProductName
    price: Price
    category: ObjectIdStr


class ProductUpdate(BaseModel):
    name: Optional[ProductName] = None
    price: Optional[Price] = None
    category: Optional[ObjectIdStr] = None


class ProductRead(TimestampedReadSchema):
    name: str
    price: float
    image: Optional[ImageRef] = None
    category: Optional[CategoryRead] = None
