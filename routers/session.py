# routers/session.py
"""
Session API routes: role resolution, the wholesale state snapshot and
the role-specific dashboards.

Clients switch role with the X-Active-Role header (owner or tenant, limited
to the user's own roles) and pick a tenancy with X-Tenancy-Id when they have
several.
"""
from typing import Optional, Union

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from database import get_session
from dependencies import get_current_account
from routers.responses import (
     build_account_response,
     build_expense_response,
     build_invoice_response,
     build_property_response,
     build_tenancy_response,
)
from schemas.session import (
     AccountResponse,
     OwnerDashboardResponse,
     StateResponse,
     TenantDashboardResponse,
)
from services.account_service import AccountContext
from services.app_state import AppState

router = APIRouter(prefix="/api", tags=["session"])


@router.get("/session", response_model=AccountResponse, summary="Resolve role and tenancy")
def get_account(account: AccountContext = Depends(get_current_account)):
     return build_account_response(account)


@router.get("/state", response_model=StateResponse, summary="Reload everything the account can see")
def get_state(
     db: Session = Depends(get_session),
     account: AccountContext = Depends(get_current_account)
):
     """Call after every mutation; the snapshot is always rebuilt in full."""
     state = AppState(db, account).refresh()
     return StateResponse(
          account=build_account_response(account),
          properties=[build_property_response(p) for p in state.properties],
          tenancies=[build_tenancy_response(t) for t in state.tenancies],
          invoices=[build_invoice_response(i) for i in state.invoices],
          expenses=[build_expense_response(e) for e in state.expenses],
     )


@router.get(
     "/dashboard",
     response_model=Union[OwnerDashboardResponse, TenantDashboardResponse],
     summary="Dashboard for the active role"
)
def get_dashboard(
     year: Optional[str] = Query(None, pattern=r"^\d{4}$", description="Tenant view: invoices of this year"),
     db: Session = Depends(get_session),
     account: AccountContext = Depends(get_current_account)
):
     state = AppState(db, account).refresh()
     if account.is_owner:
          summary = state.owner_dashboard()
          return OwnerDashboardResponse(
               unverified_payments=[build_invoice_response(i) for i in summary["unverified_payments"]],
               total_income=summary["total_income"],
               total_outstanding=summary["total_outstanding"],
               total_expenses=summary["total_expenses"],
          )

     summary = state.tenant_dashboard(year)
     return TenantDashboardResponse(
          outstanding_balance=summary["outstanding_balance"],
          year=summary["year"],
          available_years=summary["available_years"],
          invoices=[build_invoice_response(i) for i in summary["invoices"]],
     )
