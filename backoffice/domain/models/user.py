"""User domain model — maps to the 'users' table."""

from sqlalchemy import Column, String

from backoffice.domain.models.mixins import ImageMixin, TimestampMixin
from backoffice.infrastructure.database import Base, new_object_id


class User(ImageMixin, TimestampMixin, Base):
    __tablename__ = "users"

    id = Column(String(24), primary_key=True, default=new_object_id)
    username = Column(String(100), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)

    def __repr__(self):
        return f"<User {self.username}>"
