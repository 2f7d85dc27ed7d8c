"""
Pydantic schemas for tenant payment submission and receipt verification.
"""
from decimal import Decimal
from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict

from .common import ActionResult


class PaymentSubmitRequest(BaseModel):
     """Request body for POST /api/payments."""

     invoice_ids: List[int] = Field(..., min_length=1, description="Invoices to pay; duplicates are ignored")
     amount: Optional[Decimal] = Field(
          None,
          gt=0,
          max_digits=12,
          decimal_places=2,
          description="Total paid; defaults to the sum of the remaining balances",
     )
     payment_proof_url: str = Field(
          ...,
          min_length=1,
          max_length=2000,
          description="Reference to the uploaded receipt (URL or data URI); only data URIs can be AI-verified",
     )

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "invoice_ids": [3, 5],
                    "amount": 1000.00,
                    "payment_proof_url": "https://example.com/receipt-aug.jpg",
               }
          }
     )


class PaymentAllocation(BaseModel):
     invoice_id: int
     allocated: Decimal
     remaining_balance: Decimal


class PaymentSubmitResponse(ActionResult):
     amount: Decimal
     allocations: List[PaymentAllocation]


class ReceiptVerificationRequest(BaseModel):
     """What the AI judge is given for one receipt."""

     receipt: str = Field(..., description="Receipt image as a data:<mime>;base64 URI")
     invoice_id: int
     expected_amount: Decimal
     tenant_name: str
     property_name: str


class ReceiptVerificationResult(BaseModel):
     """Advisory judgement; a negative finding is still a successful call."""

     is_accurate: bool = Field(..., description="Receipt matches the expected amount")
     extracted_amount: Optional[Decimal] = Field(None, description="Amount read from the receipt, if any")
     notes: str = Field("", description="Discrepancies or remarks")


class ReceiptVerificationResponse(ActionResult):
     invoice_id: int
     result: ReceiptVerificationResult
