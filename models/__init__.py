from .base import Base
from .user import User, Role
from .property_owner import PropertyOwner
from .property import Property
from .tenant import Tenant
from .invoice import Invoice, InvoiceStatus
from .expense import Expense, ExpenseType

__all__ = [
     "Base",
     "User",
     "Role",
     "PropertyOwner",
     "Property",
     "Tenant",
     "Invoice",
     "InvoiceStatus",
     "Expense",
     "ExpenseType",
]
