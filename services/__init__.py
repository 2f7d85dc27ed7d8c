# services/__init__.py
from .account_service import AccountContext, resolve_account
from .invoice_service import InvoiceService, format_period
from .payment_service import (
     AllocationPolicy,
     EvenSplitAllocation,
     PaymentService,
)
from .tenancy_service import TenancyService
from .property_service import PropertyService
from .expense_service import ExpenseService
from .identity_service import IdentityService
from .app_state import AppState

__all__ = [
     "AccountContext",
     "resolve_account",
     "InvoiceService",
     "format_period",
     "AllocationPolicy",
     "EvenSplitAllocation",
     "PaymentService",
     "TenancyService",
     "PropertyService",
     "ExpenseService",
     "IdentityService",
     "AppState",
]
