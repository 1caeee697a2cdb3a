"""Entity family descriptors.

Each family says how its payloads are validated, which fields must be
unique, which fields point at other tables and which tables point at it.
The generic EntityService does the rest.
"""

from dataclasses import dataclass, field
from typing import Mapping, Optional, Tuple, Type

from pydantic import BaseModel

from backoffice.domain.models.admin import Admin
from backoffice.domain.models.category import Category
from backoffice.domain.models.product import Product
from backoffice.domain.models.role import Role
from backoffice.domain.models.user import User
from backoffice.domain.schemas.admin import AdminCreate, AdminRead, AdminUpdate
from backoffice.domain.schemas.category import CategoryCreate, CategoryRead, CategoryUpdate
from backoffice.domain.schemas.product import ProductCreate, ProductRead, ProductUpdate
from backoffice.domain.schemas.role import RoleCreate, RoleRead, RoleUpdate
from backoffice.domain.schemas.user import UserCreate, UserRead, UserUpdate


@dataclass(frozen=True)
class Reference:
    """Outbound foreign key: payload field -> local column -> target model."""
    model: type
    column: str


@dataclass(frozen=True)
class InboundReference:
    """Another table whose rows point at this family."""
    model: type
    column: str
    label: str


@dataclass(frozen=True)
class EntityFamily:
    name: str
    label: str
    model: type
    create_schema: Type[BaseModel]
    update_schema: Type[BaseModel]
    read_schema: Type[BaseModel]
    unique_fields: Tuple[str, ...] = ()
    unique_on_update: bool = True
    conflict_message: str = "Record already exists"
    references: Mapping[str, Reference] = field(default_factory=dict)
    referenced_by: Tuple[InboundReference, ...] = ()
    has_image: bool = False
    credential_field: Optional[str] = None
    reject_unknown_fields: bool = False


ROLES = EntityFamily(
    name="role",
    label="Role",
    model=Role,
    create_schema=RoleCreate,
    update_schema=RoleUpdate,
    read_schema=RoleRead,
    unique_fields=("name",),
    unique_on_update=False,
    conflict_message="Role already exists!",
    referenced_by=(InboundReference(Admin, "role_id", "admin"),),
    reject_unknown_fields=True,
)

USERS = EntityFamily(
    name="user",
    label="User",
    model=User,
    create_schema=UserCreate,
    update_schema=UserUpdate,
    read_schema=UserRead,
    unique_fields=("username", "email"),
    conflict_message="Username or email already exists",
    has_image=True,
    credential_field="password",
)

ADMINS = EntityFamily(
    name="admin",
    label="Admin",
    model=Admin,
    create_schema=AdminCreate,
    update_schema=AdminUpdate,
    read_schema=AdminRead,
    unique_fields=("username", "email"),
    conflict_message="Username or email already exists",
    references={"role": Reference(Role, "role_id")},
    has_image=True,
    credential_field="password",
)

CATEGORIES = EntityFamily(
    name="category",
    label="Category",
    model=Category,
    create_schema=CategoryCreate,
    update_schema=CategoryUpdate,
    read_schema=CategoryRead,
    unique_fields=("name",),
    conflict_message="Category already exists!",
    referenced_by=(InboundReference(Product, "category_id", "product"),),
    reject_unknown_fields=True,
)

PRODUCTS = EntityFamily(
    name="product",
    label="Product",
    model=Product,
    create_schema=ProductCreate,
    update_schema=ProductUpdate,
    read_schema=ProductRead,
    references={"category": Reference(Category, "category_id")},
    has_image=True,
)
