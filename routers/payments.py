# routers/payments.py
"""
Payment API.

POST /api/payments: tenant submits one payment (amount + proof reference)
across several of their invoices.
POST /api/payments/{invoice_id}/verify-receipt: owner asks the AI judge
whether the submitted receipt matches the invoice. Advisory only; it never
changes the invoice.
"""
from fastapi import APIRouter, Depends, status
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from database import get_session
from dependencies import get_current_account, get_owner_account, get_receipt_verifier
from routers.responses import build_invoice_response
from schemas.invoice import InvoiceListResponse
from schemas.payment import (
     PaymentAllocation,
     PaymentSubmitRequest,
     PaymentSubmitResponse,
     ReceiptVerificationRequest,
     ReceiptVerificationResponse,
)
from services.account_service import AccountContext, get_accessible_invoice
from services.exceptions import BusinessRuleError
from services.payment_service import PaymentService
from services.receipt_verifier import ReceiptVerifier

router = APIRouter(prefix="/api/payments", tags=["payments"])


@router.get(
     "/payable",
     response_model=InvoiceListResponse,
     summary="Invoices the tenant can select for payment"
)
def list_payable_invoices(
     db: Session = Depends(get_session),
     account: AccountContext = Depends(get_current_account),
):
     invoices = PaymentService.payable_invoices(db, account)
     return InvoiceListResponse(
          invoices=[build_invoice_response(inv) for inv in invoices],
          total=len(invoices),
     )


@router.post(
     "",
     response_model=PaymentSubmitResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Submit a payment"
)
def submit_payment(
     body: PaymentSubmitRequest,
     db: Session = Depends(get_session),
     account: AccountContext = Depends(get_current_account),
):
     """
     Spread one payment over the selected invoices.

     1. Every invoice must be the tenant's own and still have a balance.
     2. The amount (default: sum of remaining balances) is split evenly,
        each invoice capped at its remaining balance.
     3. All selected invoices are updated in one batch and wait for the
        owner's verification.

     Re-fetch the state afterwards to see the updated invoices.
     """
     total, allocations = PaymentService.submit_payment(
          db,
          account,
          body.invoice_ids,
          proof_url=body.payment_proof_url,
          amount=body.amount,
     )
     return PaymentSubmitResponse(
          amount=total,
          allocations=[
               PaymentAllocation(
                    invoice_id=a.invoice_id,
                    allocated=a.allocated,
                    remaining_balance=a.remaining_balance,
               )
               for a in allocations
          ],
     )


def _build_verification_request(
     db: Session,
     account: AccountContext,
     invoice_id: int,
) -> ReceiptVerificationRequest:
     """Load the invoice and the names the judge needs (blocking ORM work)."""
     invoice = get_accessible_invoice(db, account, invoice_id)
     if not invoice.payment_proof_url:
          raise BusinessRuleError("This invoice has no submitted receipt to verify")

     return ReceiptVerificationRequest(
          receipt=invoice.payment_proof_url,
          invoice_id=invoice.id,
          expected_amount=invoice.total_due,
          tenant_name=invoice.user.name if invoice.user else "",
          property_name=invoice.property.name if invoice.property else "",
     )


@router.post(
     "/{invoice_id}/verify-receipt",
     response_model=ReceiptVerificationResponse,
     summary="AI check of a submitted receipt"
)
async def verify_receipt(
     invoice_id: int,
     db: Session = Depends(get_session),
     account: AccountContext = Depends(get_owner_account),
     verifier: ReceiptVerifier = Depends(get_receipt_verifier),
):
     """
     Ask the AI judge whether the receipt matches total_due.

     Returns {is_accurate, extracted_amount, notes}. A judgement of
     "inaccurate" is a normal answer; failures to reach the service come
     back as an error.
     """
     # Database access stays off the event loop
     request = await run_in_threadpool(_build_verification_request, db, account, invoice_id)
     result = await verifier.verify(request)
     return ReceiptVerificationResponse(invoice_id=request.invoice_id, result=result)
