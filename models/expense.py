import enum
from sqlalchemy import Column, Integer, String, Numeric, DateTime, ForeignKey, Enum, func
from sqlalchemy.orm import relationship
from .base import Base


class ExpenseType(str, enum.Enum):
     FIXED_SERVICE = "fixed_service"
     MAINTENANCE_OTHER = "maintenance_other"


class Expense(Base):
     """
     Expense model - property costs (fixed services, maintenance).
     Only used for dashboard aggregation.
     """
     __tablename__ = "expenses"

     id = Column(Integer, primary_key=True, autoincrement=True)
     property_id = Column(Integer, ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True)
     type = Column(
          Enum(ExpenseType, name="expense_type", values_callable=lambda e: [m.value for m in e]),
          nullable=False,
     )
     amount = Column(Numeric(12, 2), nullable=False)
     description = Column(String(500), nullable=False)
     date = Column(DateTime, nullable=False)
     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     property = relationship("Property", back_populates="expenses")

     def __repr__(self):
          return f"<Expense(id={self.id}, property_id={self.property_id}, amount={self.amount})>"
