"""Admin domain model — maps to the 'admins' table."""

from sqlalchemy import Column, ForeignKey, String
from sqlalchemy.orm import relationship

from backoffice.domain.models.mixins import ImageMixin
from backoffice.infrastructure.database import Base, new_object_id


class Admin(ImageMixin, Base):
    __tablename__ = "admins"

    id = Column(String(24), primary_key=True, default=new_object_id)
    username = Column(String(100), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role_id = Column(String(24), ForeignKey("roles.id"), nullable=False, index=True)

    role = relationship("Role", lazy="joined")

    def __repr__(self):
        return f"<Admin {self.email}>"
