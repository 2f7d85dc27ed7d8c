"""
Pydantic schemas for Invoice API request/response validation.
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict
from enum import Enum

from .common import ActionResult


class InvoiceStatusEnum(str, Enum):
     """Invoice payment status options."""
     PENDING = "pending"
     PARTIAL = "partial"
     PAID = "paid"


class InvoiceGenerateRequest(BaseModel):
     """Billing period picked as two separate components."""
     year: int = Field(..., ge=1000, le=9999, description="Four-digit year")
     month: int = Field(..., ge=1, le=12, description="Month number, 1-12")

     model_config = ConfigDict(
          json_schema_extra={"example": {"year": 2024, "month": 8}}
     )


class InvoiceGenerateResponse(ActionResult):
     month: str = Field(..., description="Billing period, YYYY-MM")
     created: int = Field(..., ge=0, description="Number of new invoices; 0 when all already exist")


class UtilitiesUpdate(BaseModel):
     """Owner edit of the utilities charge; total_due is recomputed."""
     utilities_amount: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)

     model_config = ConfigDict(
          json_schema_extra={"example": {"utilities_amount": 80.00}}
     )


class InvoiceResponse(BaseModel):
     """Schema for invoice response."""
     id: int
     tenant_id: int
     user_id: str
     property_id: int
     month: str
     rent_amount: Decimal
     utilities_amount: Decimal
     total_due: Decimal
     status: InvoiceStatusEnum
     submitted_payment_amount: Optional[Decimal] = None
     payment_proof_url: Optional[str] = None
     submission_date: Optional[datetime] = None
     payment_date: Optional[datetime] = None
     remaining_balance: Decimal
     created_at: datetime
     updated_at: datetime

     # Optional related data
     tenant_name: Optional[str] = None
     property_name: Optional[str] = None

     model_config = ConfigDict(
          from_attributes=True,
          json_schema_extra={
               "example": {
                    "id": 2,
                    "tenant_id": 1,
                    "user_id": "u-tenant-1",
                    "property_id": 1,
                    "month": "2024-08",
                    "rent_amount": 1200.00,
                    "utilities_amount": 80.00,
                    "total_due": 1280.00,
                    "status": "pending",
                    "submitted_payment_amount": 1280.00,
                    "payment_proof_url": "https://example.com/receipt1.jpg",
                    "submission_date": "2024-08-04T14:30:00",
                    "payment_date": None,
                    "remaining_balance": 0.00,
                    "created_at": "2024-08-01T09:00:00",
                    "updated_at": "2024-08-04T14:30:00",
                    "tenant_name": "John Doe",
                    "property_name": "Main House A"
               }
          }
     )


class InvoiceListResponse(BaseModel):
     """Schema for invoice list response."""
     invoices: List[InvoiceResponse]
     total: int


class InvoiceActionResponse(ActionResult):
     invoice: InvoiceResponse
