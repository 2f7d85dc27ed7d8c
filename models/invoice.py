import enum
from datetime import datetime
from decimal import Decimal
from sqlalchemy import (
     Column, Integer, String, Numeric, DateTime, ForeignKey, Enum, UniqueConstraint,
)
from sqlalchemy.orm import relationship
from .base import Base, TimestampMixin


class InvoiceStatus(str, enum.Enum):
     """Enumeration for invoice payment status."""
     PENDING = "pending"
     PARTIAL = "partial"
     PAID = "paid"


class Invoice(TimestampMixin, Base):
     """
     Invoice model - one billing record for one tenancy in one calendar month.

     total_due is fixed at creation (rent_amount + utilities_amount) and only
     changes when the owner edits utilities_amount. submitted_payment_amount
     accumulates tenant submissions and is cleared when the owner rejects one.
     """
     __tablename__ = "invoices"

     id = Column(Integer, primary_key=True, autoincrement=True)

     # Foreign keys
     tenant_id = Column(
          Integer,
          ForeignKey("tenants.id", ondelete="CASCADE"),
          nullable=False,
          index=True
     )
     user_id = Column(String(128), ForeignKey("users.id"), nullable=False, index=True)
     property_id = Column(Integer, ForeignKey("properties.id"), nullable=False, index=True)

     # Billing period, YYYY-MM
     month = Column(String(7), nullable=False, index=True)

     # Amounts
     rent_amount = Column(Numeric(12, 2), nullable=False)
     utilities_amount = Column(Numeric(12, 2), nullable=False, default=Decimal("0"))
     total_due = Column(Numeric(12, 2), nullable=False)
     status = Column(
          Enum(
               InvoiceStatus,
               name="invoice_status",
               create_constraint=True,
               values_callable=lambda e: [m.value for m in e],
          ),
          default=InvoiceStatus.PENDING,
          nullable=False,
          index=True
     )

     # Payment submission
     submitted_payment_amount = Column(Numeric(12, 2), nullable=True)
     payment_proof_url = Column(String(2000), nullable=True)
     submission_date = Column(DateTime, nullable=True)
     payment_date = Column(DateTime, nullable=True)

     # The generator pre-checks (tenant_id, month); the constraint backs it up
     __table_args__ = (
          UniqueConstraint("tenant_id", "month", name="uq_invoices_tenant_month"),
     )

     def __repr__(self):
          return f"<Invoice(id={self.id}, month='{self.month}', total_due={self.total_due}, status='{self.status.value}')>"

     # Must precede the `property` relationship, which rebinds the name in this class body
     @property
     def remaining_balance(self) -> Decimal:
          """total_due minus everything the tenant has submitted so far."""
          return Decimal(self.total_due) - Decimal(self.submitted_payment_amount or 0)

     @property
     def awaiting_verification(self) -> bool:
          return self.status == InvoiceStatus.PENDING and bool(self.payment_proof_url)

     # Relationships
     tenant = relationship("Tenant", back_populates="invoices")
     user = relationship("User")
     property = relationship("Property")

     def mark_as_paid(self, when: datetime) -> None:
          """Mark the invoice as paid. Proof fields are kept."""
          self.status = InvoiceStatus.PAID
          self.payment_date = when
          self.updated_at = when

     def mark_as_partial(self, when: datetime) -> None:
          """Accept the submitted amount as a partial payment."""
          self.status = InvoiceStatus.PARTIAL
          self.updated_at = when

     def reject_submission(self, when: datetime) -> None:
          """Clear the submission so the tenant pays again from scratch."""
          self.status = InvoiceStatus.PENDING
          self.payment_proof_url = None
          self.submitted_payment_amount = None
          self.submission_date = None
          self.updated_at = when
