from sqlalchemy import Column, Integer, String, Numeric, Boolean, Date, ForeignKey
from sqlalchemy.orm import relationship
from .base import Base, TimestampMixin


class Tenant(TimestampMixin, Base):
     """
     Tenant model - a tenancy (lease) binding one tenant user to one property.

     Invoices are generated from active tenancies only. Ending a lease
     deactivates the row rather than deleting it.
     """
     __tablename__ = "tenants"

     id = Column(Integer, primary_key=True, autoincrement=True)
     user_id = Column(String(128), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
     property_id = Column(Integer, ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True)

     # Lease terms
     fixed_monthly_rent = Column(Numeric(12, 2), nullable=False)
     pays_utilities = Column(Boolean, default=False, nullable=False)
     start_date = Column(Date, nullable=False)
     end_date = Column(Date, nullable=True)
     active = Column(Boolean, default=True, nullable=False)

     # Relationships
     user = relationship("User", back_populates="tenancies")
     property = relationship("Property", back_populates="tenancies")
     invoices = relationship("Invoice", back_populates="tenant", cascade="all, delete-orphan")

     def __repr__(self):
          return f"<Tenant(id={self.id}, user_id='{self.user_id}', property_id={self.property_id})>"
