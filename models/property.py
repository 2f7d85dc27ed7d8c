from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from .base import Base, TimestampMixin


class Property(TimestampMixin, Base):
     """
     Property model - a rentable unit.
     """
     __tablename__ = "properties"

     id = Column(Integer, primary_key=True, autoincrement=True)
     name = Column(String(255), nullable=False)
     address = Column(String(500), nullable=False)

     # Relationships
     owners = relationship("User", secondary="property_owners", back_populates="owned_properties")
     tenancies = relationship("Tenant", back_populates="property", cascade="all, delete-orphan")
     expenses = relationship("Expense", back_populates="property", cascade="all, delete-orphan")

     def __repr__(self):
          return f"<Property(id={self.id}, name='{self.name}')>"

     @property
     def owner_ids(self) -> list[str]:
          return [owner.id for owner in self.owners]
