# services/payment_service.py
"""
Payment Service - tenant payment submission and reconciliation.

A tenant selects some of their outstanding invoices, states how much they
paid and attaches a proof reference. The amount is spread over the
selection by an AllocationPolicy and every selected invoice is updated in
one batch, then waits for the owner's verification.
"""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, ROUND_DOWN
from typing import Iterable, Optional, Sequence

from sqlalchemy.orm import Session

from database import atomic_batch
from models import Invoice, InvoiceStatus
from utils.clock import utcnow
from .account_service import AccountContext
from .exceptions import BusinessRuleError, NotFoundError, PermissionDeniedError

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


class AllocationPolicy(ABC):
     """Decides how much of one payment each selected invoice receives."""

     @abstractmethod
     def allocate(self, invoices: Sequence[Invoice], amount: Decimal) -> dict[int, Decimal]:
          """Return {invoice_id: allocated amount}; no value may exceed its remaining balance."""


class EvenSplitAllocation(AllocationPolicy):
     """
     Divide the amount evenly over the selection, capping each invoice at
     its own remaining balance: min(remaining_i, amount / n).

     Shares are truncated to whole cents. Any part of the amount above the
     capped shares is not credited to any invoice.
     """

     def allocate(self, invoices: Sequence[Invoice], amount: Decimal) -> dict[int, Decimal]:
          if not invoices:
               return {}
          share = Decimal(amount) / len(invoices)
          return {
               inv.id: min(inv.remaining_balance, share).quantize(CENT, rounding=ROUND_DOWN)
               for inv in invoices
          }


@dataclass
class Allocation:
     invoice_id: int
     allocated: Decimal
     remaining_balance: Decimal


class PaymentService:
     """Service class for tenant payment submission."""

     default_policy: AllocationPolicy = EvenSplitAllocation()

     @staticmethod
     def payable_invoices(db: Session, account: AccountContext) -> list[Invoice]:
          """The tenant's invoices that can still be selected for payment."""
          tenancy_id = account.require_tenancy()
          invoices = (
               db.query(Invoice)
               .filter(
                    Invoice.tenant_id == tenancy_id,
                    Invoice.user_id == account.uid,
                    Invoice.status != InvoiceStatus.PAID,
               )
               .order_by(Invoice.month)
               .all()
          )
          return [inv for inv in invoices if inv.remaining_balance > 0]

     @staticmethod
     def submit_payment(
          db: Session,
          account: AccountContext,
          invoice_ids: Iterable[int],
          proof_url: str,
          amount: Optional[Decimal] = None,
          policy: Optional[AllocationPolicy] = None,
          now: Optional[datetime] = None,
     ) -> tuple[Decimal, list[Allocation]]:
          """
          Apply one payment to a selection of the tenant's own invoices.

          Args:
               db: SQLAlchemy database session
               account: the tenant submitting
               invoice_ids: selection; repeated ids count once
               proof_url: receipt reference stored on every selected invoice
               amount: total paid; defaults to the selection's remaining balance
               policy: allocation strategy (even split with cap by default)
               now: submission timestamp (defaults to current UTC)

          Returns:
               (amount applied, per-invoice allocations)

          Raises:
               NotFoundError: an id does not exist
               PermissionDeniedError: an invoice is not the tenant's
               BusinessRuleError: an invoice has nothing left to pay, the amount
                    is not positive, or it credits no invoice a single cent
               StorageError: the batch failed; no invoice was changed
          """
          tenancy_id = account.require_tenancy()
          policy = policy or PaymentService.default_policy
          now = now or utcnow()

          selected_ids = list(dict.fromkeys(invoice_ids))
          if not selected_ids:
               raise BusinessRuleError("Select at least one invoice to pay")
          if not proof_url:
               raise BusinessRuleError("A proof of payment is required")

          found = {
               inv.id: inv
               for inv in db.query(Invoice).filter(Invoice.id.in_(selected_ids)).all()
          }
          missing = [i for i in selected_ids if i not in found]
          if missing:
               raise NotFoundError(f"Invoice with ID {missing[0]} not found")

          selection = [found[i] for i in selected_ids]
          for inv in selection:
               if inv.user_id != account.uid or inv.tenant_id != tenancy_id:
                    raise PermissionDeniedError(f"Invoice {inv.id} does not belong to you")
               if inv.status == InvoiceStatus.PAID or inv.remaining_balance <= 0:
                    raise BusinessRuleError(f"Invoice {inv.id} ({inv.month}) has no outstanding balance")

          total = Decimal(amount) if amount is not None else sum(
               (inv.remaining_balance for inv in selection), Decimal("0")
          )
          if total <= 0:
               raise BusinessRuleError("Payment amount must be greater than zero")

          shares = policy.allocate(selection, total)
          if not any(shares.values()):
               raise BusinessRuleError("Payment amount is too small to split over the selected invoices")
          for inv in selection:
               if shares[inv.id] > inv.remaining_balance:
                    raise BusinessRuleError(f"Allocation exceeds the balance of invoice {inv.id}")

          with atomic_batch(db, f"submit payment for invoices {selected_ids}"):
               for inv in selection:
                    inv.status = InvoiceStatus.PENDING
                    inv.submitted_payment_amount = Decimal(inv.submitted_payment_amount or 0) + shares[inv.id]
                    inv.payment_proof_url = proof_url
                    inv.submission_date = now
                    inv.updated_at = now

          allocations = [
               Allocation(invoice_id=inv.id, allocated=shares[inv.id], remaining_balance=inv.remaining_balance)
               for inv in selection
          ]
          logger.info(
               "Tenant %s submitted %s across %d invoice(s)", account.uid, total, len(selection)
          )
          return total, allocations
