# routers/invoices.py
"""
Invoice API routes.

Role-based access:
- Owner: invoices of tenancies on their own properties; generates invoices,
  edits utilities and finalizes submitted payments
- Tenant: only invoices of their own tenancy (read-only here; payments are
  submitted through /api/payments)
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import get_current_account, get_owner_account
from models import InvoiceStatus
from routers.responses import build_invoice_response
from schemas.common import ActionResult
from schemas.invoice import (
     InvoiceActionResponse,
     InvoiceGenerateRequest,
     InvoiceGenerateResponse,
     InvoiceListResponse,
     InvoiceStatusEnum,
     UtilitiesUpdate,
)
from services.account_service import AccountContext, get_accessible_invoice
from services.invoice_service import InvoiceService

router = APIRouter(prefix="/api/invoices", tags=["invoices"])


@router.get(
     "",
     response_model=InvoiceListResponse,
     summary="List invoices visible to the current account"
)
def list_invoices(
     month: Optional[str] = Query(None, pattern=r"^\d{4}-\d{2}$", description="Filter by period, YYYY-MM"),
     status: Optional[InvoiceStatusEnum] = Query(None, description="Filter by status"),
     db: Session = Depends(get_session),
     account: AccountContext = Depends(get_current_account)
):
     """
     Retrieve invoices, newest period first.

     - **month**: only invoices of this billing period
     - **status**: pending, partial or paid
     """
     invoices = InvoiceService.list_invoices(
          db,
          account,
          month=month,
          status=InvoiceStatus(status.value) if status else None,
     )
     return InvoiceListResponse(
          invoices=[build_invoice_response(inv) for inv in invoices],
          total=len(invoices),
     )


@router.post(
     "/generate",
     response_model=InvoiceGenerateResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Generate monthly invoices"
)
def generate_invoices(
     body: InvoiceGenerateRequest,
     db: Session = Depends(get_session),
     account: AccountContext = Depends(get_owner_account)
):
     """
     Create one pending invoice per active tenancy for the chosen month.

     Tenancies already invoiced for that month are skipped; `created` may be 0.
     """
     period, created = InvoiceService.generate_monthly_invoices(db, account, body.year, body.month)
     return InvoiceGenerateResponse(month=period, created=len(created))


@router.get(
     "/{invoice_id}",
     response_model=InvoiceActionResponse,
     summary="Get invoice by ID"
)
def get_invoice(
     invoice_id: int,
     db: Session = Depends(get_session),
     account: AccountContext = Depends(get_current_account)
):
     invoice = get_accessible_invoice(db, account, invoice_id)
     return InvoiceActionResponse(invoice=build_invoice_response(invoice))


@router.patch(
     "/{invoice_id}/utilities",
     response_model=InvoiceActionResponse,
     summary="Set the utilities charge"
)
def update_utilities(
     invoice_id: int,
     body: UtilitiesUpdate,
     db: Session = Depends(get_session),
     account: AccountContext = Depends(get_owner_account)
):
     """Sets utilities_amount and recomputes total_due = rent + utilities."""
     invoice = InvoiceService.update_utilities(db, account, invoice_id, body.utilities_amount)
     return InvoiceActionResponse(invoice=build_invoice_response(invoice))


@router.patch(
     "/{invoice_id}/mark-paid",
     response_model=InvoiceActionResponse,
     summary="Mark invoice as paid"
)
def mark_invoice_paid(
     invoice_id: int,
     db: Session = Depends(get_session),
     account: AccountContext = Depends(get_owner_account)
):
     """Accept the submitted payment. Sets payment_date; the proof is kept."""
     invoice = InvoiceService.mark_paid(db, account, invoice_id)
     return InvoiceActionResponse(invoice=build_invoice_response(invoice))


@router.patch(
     "/{invoice_id}/mark-partial",
     response_model=InvoiceActionResponse,
     summary="Accept a partial payment"
)
def mark_invoice_partial(
     invoice_id: int,
     db: Session = Depends(get_session),
     account: AccountContext = Depends(get_owner_account)
):
     invoice = InvoiceService.mark_partial(db, account, invoice_id)
     return InvoiceActionResponse(invoice=build_invoice_response(invoice))


@router.patch(
     "/{invoice_id}/reject",
     response_model=InvoiceActionResponse,
     summary="Reject the submitted payment"
)
def reject_invoice_payment(
     invoice_id: int,
     db: Session = Depends(get_session),
     account: AccountContext = Depends(get_owner_account)
):
     """
     Back to pending with proof, submitted amount and submission date cleared.
     The tenant must submit again.
     """
     invoice = InvoiceService.reject_payment(db, account, invoice_id)
     return InvoiceActionResponse(invoice=build_invoice_response(invoice))


@router.delete(
     "/{invoice_id}",
     response_model=ActionResult,
     summary="Delete invoice"
)
def delete_invoice(
     invoice_id: int,
     db: Session = Depends(get_session),
     account: AccountContext = Depends(get_owner_account)
):
     """
     Delete an invoice by ID.

     Note: This permanently removes the invoice record.
     """
     InvoiceService.delete_invoice(db, account, invoice_id)
     return ActionResult()
