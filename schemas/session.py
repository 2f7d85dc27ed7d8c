"""
Pydantic schemas for role resolution, the state snapshot and dashboards.
"""
from decimal import Decimal
from typing import Optional, List
from pydantic import BaseModel

from .expense import ExpenseResponse
from .invoice import InvoiceResponse
from .property import PropertyResponse
from .tenancy import TenancyResponse


class AccountResponse(BaseModel):
     uid: str
     email: Optional[str] = None
     roles: List[str]
     active_role: str
     tenancy_id: Optional[int] = None
     tenancy_ids: List[int] = []
     requires_tenancy_selection: bool = False


class StateResponse(BaseModel):
     account: AccountResponse
     properties: List[PropertyResponse]
     tenancies: List[TenancyResponse]
     invoices: List[InvoiceResponse]
     expenses: List[ExpenseResponse]


class OwnerDashboardResponse(BaseModel):
     unverified_payments: List[InvoiceResponse]
     total_income: Decimal
     total_outstanding: Decimal
     total_expenses: Decimal


class TenantDashboardResponse(BaseModel):
     outstanding_balance: Decimal
     year: Optional[str] = None
     available_years: List[str]
     invoices: List[InvoiceResponse]
