"""
PropertyOwner model - links owner users to the properties they own.
A property has one or more owners; ownership is additive.
"""
from sqlalchemy import Column, Integer, String, ForeignKey
from .base import Base


class PropertyOwner(Base):
     """Association row: one (property, owner user) pair."""
     __tablename__ = "property_owners"

     property_id = Column(Integer, ForeignKey("properties.id", ondelete="CASCADE"), primary_key=True)
     user_id = Column(String(128), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)

     def __repr__(self):
          return f"<PropertyOwner(property_id={self.property_id}, user_id={self.user_id})>"
