"""Role domain model — maps to the 'roles' table."""

from sqlalchemy import Column, Integer, String

from backoffice.infrastructure.database import Base, new_object_id


class Role(Base):
    __tablename__ = "roles"

    id = Column(String(24), primary_key=True, default=new_object_id)
    # Not unique at the table level; only the create path rejects duplicates
    name = Column(String(200), nullable=False, index=True)
    status = Column(String(20), nullable=False)
    limit = Column(Integer, nullable=False)

    def __repr__(self):
        return f"<Role {self.name} ({self.status})>"
