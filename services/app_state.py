# services/app_state.py
"""
Account-scoped application state.

Holds the collections a signed-in user can see and reloads all of them in
one refresh() after every mutation; nothing is patched incrementally.
Dashboards are computed from the loaded snapshot.
"""
from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from models import Expense, Invoice, InvoiceStatus, Property, Tenant
from .account_service import AccountContext
from .expense_service import ExpenseService
from .invoice_service import InvoiceService
from .property_service import PropertyService
from .tenancy_service import TenancyService

ZERO = Decimal("0")


class AppState:

     def __init__(self, db: Session, account: AccountContext):
          self.db = db
          self.account = account
          self.properties: list[Property] = []
          self.tenancies: list[Tenant] = []
          self.invoices: list[Invoice] = []
          self.expenses: list[Expense] = []

     def refresh(self) -> "AppState":
          """Reload every collection for the account."""
          self.properties = PropertyService.list_properties(self.db, self.account)
          self.tenancies = TenancyService.list_tenancies(self.db, self.account)
          self.invoices = InvoiceService.list_invoices(self.db, self.account)
          self.expenses = (
               ExpenseService.list_expenses(self.db, self.account) if self.account.is_owner else []
          )
          return self

     def owner_dashboard(self) -> dict:
          unverified = [inv for inv in self.invoices if inv.awaiting_verification]
          total_income = sum(
               (Decimal(inv.total_due) for inv in self.invoices if inv.status == InvoiceStatus.PAID), ZERO
          )
          total_outstanding = sum(
               (inv.remaining_balance for inv in self.invoices if inv.status != InvoiceStatus.PAID), ZERO
          )
          total_expenses = sum((Decimal(exp.amount) for exp in self.expenses), ZERO)
          return {
               "unverified_payments": unverified,
               "total_income": total_income,
               "total_outstanding": total_outstanding,
               "total_expenses": total_expenses,
          }

     def tenant_dashboard(self, year: Optional[str] = None) -> dict:
          outstanding = sum(
               (inv.remaining_balance for inv in self.invoices if inv.status != InvoiceStatus.PAID), ZERO
          )
          years = sorted({inv.month[:4] for inv in self.invoices}, reverse=True)
          selected = year or (years[0] if years else None)
          invoices = sorted(
               (inv for inv in self.invoices if selected and inv.month.startswith(selected)),
               key=lambda inv: inv.month,
               reverse=True,
          )
          return {
               "outstanding_balance": outstanding,
               "year": selected,
               "available_years": years,
               "invoices": invoices,
          }
