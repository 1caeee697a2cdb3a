"""Category domain model — maps to the 'categories' table."""

from sqlalchemy import CheckConstraint, Column, Integer, String

from backoffice.infrastructure.database import Base, new_object_id


class Category(Base):
    __tablename__ = "categories"
    __table_args__ = (CheckConstraint("count >= 0", name="ck_categories_count_non_negative"),)

    id = Column(String(24), primary_key=True, default=new_object_id)
    name = Column(String(200), unique=True, nullable=False, index=True)
    # Denormalized number of products in this category, kept by CategoryCounter
    count = Column(Integer, nullable=False, default=0)

    def __repr__(self):
        return f"<Category {self.name} ({self.count})>"
