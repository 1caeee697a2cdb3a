"""Product domain model — maps to the 'products' table."""

from sqlalchemy import Column, Float, ForeignKey, String
from sqlalchemy.orm import relationship

from backoffice.domain.models.mixins import ImageMixin, TimestampMixin
from backoffice.infrastructure.database import Base, new_object_id


class Product(ImageMixin, TimestampMixin, Base):
    __tablename__ = "products"

    id = Column(String(24), primary_key=True, default=new_object_id)
    name = Column(String(100), nullable=False)
    price = Column(Float, nullable=False)
    category_id = Column(String(24), ForeignKey("categories.id"), nullable=False, index=True)

    category = relationship("Category", lazy="joined")

    def __repr__(self):
        return f"<Product {self.name} - {self.price}>"
