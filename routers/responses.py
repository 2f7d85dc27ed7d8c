# routers/responses.py
"""
Builders that turn ORM rows into API response schemas with related names.
"""
from models import Expense, Invoice, Property, Tenant
from schemas.expense import ExpenseResponse
from schemas.invoice import InvoiceResponse
from schemas.property import PropertyResponse
from schemas.session import AccountResponse
from schemas.tenancy import TenancyResponse
from services.account_service import AccountContext


def build_invoice_response(invoice: Invoice) -> InvoiceResponse:
     return InvoiceResponse(
          id=invoice.id,
          tenant_id=invoice.tenant_id,
          user_id=invoice.user_id,
          property_id=invoice.property_id,
          month=invoice.month,
          rent_amount=invoice.rent_amount,
          utilities_amount=invoice.utilities_amount,
          total_due=invoice.total_due,
          status=invoice.status.value,
          submitted_payment_amount=invoice.submitted_payment_amount,
          payment_proof_url=invoice.payment_proof_url,
          submission_date=invoice.submission_date,
          payment_date=invoice.payment_date,
          remaining_balance=invoice.remaining_balance,
          created_at=invoice.created_at,
          updated_at=invoice.updated_at,
          tenant_name=invoice.user.name if invoice.user else None,
          property_name=invoice.property.name if invoice.property else None,
     )


def build_tenancy_response(tenancy: Tenant) -> TenancyResponse:
     return TenancyResponse(
          id=tenancy.id,
          user_id=tenancy.user_id,
          property_id=tenancy.property_id,
          fixed_monthly_rent=tenancy.fixed_monthly_rent,
          pays_utilities=tenancy.pays_utilities,
          start_date=tenancy.start_date,
          end_date=tenancy.end_date,
          active=tenancy.active,
          created_at=tenancy.created_at,
          updated_at=tenancy.updated_at,
          tenant_name=tenancy.user.name if tenancy.user else None,
          tenant_email=tenancy.user.email if tenancy.user else None,
          property_name=tenancy.property.name if tenancy.property else None,
     )


def build_property_response(prop: Property) -> PropertyResponse:
     return PropertyResponse(
          id=prop.id,
          name=prop.name,
          address=prop.address,
          owner_ids=prop.owner_ids,
          created_at=prop.created_at,
          updated_at=prop.updated_at,
     )


def build_expense_response(expense: Expense) -> ExpenseResponse:
     return ExpenseResponse(
          id=expense.id,
          property_id=expense.property_id,
          type=expense.type.value,
          amount=expense.amount,
          description=expense.description,
          date=expense.date,
     )


def build_account_response(account: AccountContext) -> AccountResponse:
     return AccountResponse(
          uid=account.uid,
          email=account.email,
          roles=[r.value for r in account.roles],
          active_role=account.active_role.value,
          tenancy_id=account.tenancy_id,
          tenancy_ids=account.tenancy_ids,
          requires_tenancy_selection=account.requires_tenancy_selection,
     )
