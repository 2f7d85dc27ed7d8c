# services/invoice_service.py
"""
Invoice Service - Business logic layer for invoice operations.

Monthly generation, the owner's utilities edit, and the owner-driven
verification transitions (mark paid, accept as partial, reject). Payment
submission lives in payment_service.
"""
import logging
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from database import atomic_batch
from models import Invoice, InvoiceStatus, Tenant
from utils.clock import utcnow
from .account_service import AccountContext, get_accessible_invoice, owned_property_ids
from .exceptions import BusinessRuleError

logger = logging.getLogger(__name__)


def format_period(year: int, month: int) -> str:
     """Combine the year and month pickers into the YYYY-MM period key."""
     if not 1 <= month <= 12:
          raise BusinessRuleError("Month must be between 1 and 12")
     if not 1000 <= year <= 9999:
          raise BusinessRuleError("Year must have four digits")
     return f"{year:04d}-{month:02d}"


class InvoiceService:
     """Service class for invoice-related business logic."""

     @staticmethod
     def list_invoices(
          db: Session,
          account: AccountContext,
          month: Optional[str] = None,
          status: Optional[InvoiceStatus] = None,
     ) -> list[Invoice]:
          """Invoices visible to the account, newest period first."""
          query = db.query(Invoice)
          if account.is_owner:
               property_ids = owned_property_ids(db, account.uid)
               if not property_ids:
                    return []
               query = query.filter(Invoice.property_id.in_(property_ids))
          else:
               query = query.filter(Invoice.user_id == account.uid)
               if account.tenancy_id is not None:
                    query = query.filter(Invoice.tenant_id == account.tenancy_id)

          if month:
               query = query.filter(Invoice.month == month)
          if status is not None:
               query = query.filter(Invoice.status == status)

          return query.order_by(Invoice.month.desc(), Invoice.id).all()

     @staticmethod
     def generate_monthly_invoices(
          db: Session,
          account: AccountContext,
          year: int,
          month: int,
          now: Optional[datetime] = None,
     ) -> tuple[str, list[Invoice]]:
          """
          Create one invoice per active tenancy on the owner's properties.

          Tenancies that already have an invoice for the period are skipped,
          so running this twice for the same month creates nothing the
          second time. New invoices are written in a single batch.

          Args:
               db: SQLAlchemy database session
               account: the owner running the generator
               year: four-digit year
               month: month number, 1-12
               now: timestamp for the new documents (defaults to current UTC)

          Returns:
               (period, created invoices); an empty list is a valid outcome

          Raises:
               StorageError: the batch could not be written; nothing was saved
          """
          account.require_owner()
          period = format_period(year, month)
          now = now or utcnow()

          property_ids = owned_property_ids(db, account.uid)
          if not property_ids:
               return period, []

          tenancies = (
               db.query(Tenant)
               .filter(Tenant.active.is_(True), Tenant.property_id.in_(property_ids))
               .order_by(Tenant.id)
               .all()
          )
          if not tenancies:
               return period, []
          already_billed = {
               row[0]
               for row in db.query(Invoice.tenant_id).filter(
                    Invoice.month == period,
                    Invoice.tenant_id.in_([t.id for t in tenancies]),
               )
          }

          new_invoices = []
          for tenancy in tenancies:
               if tenancy.id in already_billed:
                    continue
               rent = Decimal(tenancy.fixed_monthly_rent)
               new_invoices.append(Invoice(
                    tenant_id=tenancy.id,
                    user_id=tenancy.user_id,
                    property_id=tenancy.property_id,
                    month=period,
                    rent_amount=rent,
                    utilities_amount=Decimal("0"),
                    total_due=rent,
                    status=InvoiceStatus.PENDING,
                    submitted_payment_amount=None,
                    payment_proof_url=None,
                    submission_date=None,
                    payment_date=None,
                    created_at=now,
                    updated_at=now,
               ))

          if new_invoices:
               with atomic_batch(db, f"generate invoices for {period}"):
                    db.add_all(new_invoices)

          logger.info(
               "Generated %d invoice(s) for %s (%d active tenancies)",
               len(new_invoices), period, len(tenancies),
          )
          return period, new_invoices

     @staticmethod
     def update_utilities(
          db: Session,
          account: AccountContext,
          invoice_id: int,
          utilities_amount: Decimal,
          now: Optional[datetime] = None,
     ) -> Invoice:
          """Owner sets the utilities charge; total_due = rent + utilities."""
          account.require_owner()
          invoice = get_accessible_invoice(db, account, invoice_id)
          if invoice.status == InvoiceStatus.PAID:
               raise BusinessRuleError("Paid invoices can no longer be edited")
          if utilities_amount < 0:
               raise BusinessRuleError("Utilities amount cannot be negative")

          with atomic_batch(db, f"update utilities on invoice {invoice_id}"):
               invoice.utilities_amount = utilities_amount
               invoice.total_due = Decimal(invoice.rent_amount) + utilities_amount
               invoice.updated_at = now or utcnow()
          return invoice

     @staticmethod
     def mark_paid(
          db: Session,
          account: AccountContext,
          invoice_id: int,
          now: Optional[datetime] = None,
     ) -> Invoice:
          """Owner accepts the payment. Proof and submitted amount are kept."""
          account.require_owner()
          invoice = get_accessible_invoice(db, account, invoice_id)
          if invoice.status == InvoiceStatus.PAID:
               raise BusinessRuleError("Invoice is already paid")

          with atomic_batch(db, f"mark invoice {invoice_id} paid"):
               invoice.mark_as_paid(now or utcnow())
          logger.info("Invoice %s marked paid by %s", invoice_id, account.uid)
          return invoice

     @staticmethod
     def mark_partial(
          db: Session,
          account: AccountContext,
          invoice_id: int,
          now: Optional[datetime] = None,
     ) -> Invoice:
          """Owner accepts a short payment; the rest stays payable."""
          account.require_owner()
          invoice = get_accessible_invoice(db, account, invoice_id)
          if invoice.status == InvoiceStatus.PAID:
               raise BusinessRuleError("Paid invoices cannot be reopened")
          if not invoice.submitted_payment_amount:
               raise BusinessRuleError("There is no submitted payment to accept")

          with atomic_batch(db, f"mark invoice {invoice_id} partial"):
               invoice.mark_as_partial(now or utcnow())
          logger.info("Invoice %s accepted as partial by %s", invoice_id, account.uid)
          return invoice

     @staticmethod
     def reject_payment(
          db: Session,
          account: AccountContext,
          invoice_id: int,
          now: Optional[datetime] = None,
     ) -> Invoice:
          """
          Owner rejects the submitted proof.

          Clears payment_proof_url, submitted_payment_amount and
          submission_date and returns the invoice to pending. Amounts due are
          not touched.
          """
          account.require_owner()
          invoice = get_accessible_invoice(db, account, invoice_id)
          if invoice.status == InvoiceStatus.PAID:
               raise BusinessRuleError("Paid invoices cannot be reopened")

          with atomic_batch(db, f"reject payment on invoice {invoice_id}"):
               invoice.reject_submission(now or utcnow())
          logger.info("Payment on invoice %s rejected by %s", invoice_id, account.uid)
          return invoice

     @staticmethod
     def delete_invoice(db: Session, account: AccountContext, invoice_id: int) -> None:
          account.require_owner()
          invoice = get_accessible_invoice(db, account, invoice_id)
          with atomic_batch(db, f"delete invoice {invoice_id}"):
               db.delete(invoice)
