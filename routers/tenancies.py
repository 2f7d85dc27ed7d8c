# routers/tenancies.py
"""
Tenancy API routes.

Owners onboard tenants onto their properties. Onboarding an e-mail that
already has an account reuses that user; otherwise a user is created and a
password-set link is returned for the owner to pass on.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import get_current_account, get_owner_account
from routers.responses import build_tenancy_response
from schemas.common import ActionResult
from schemas.tenancy import (
     TenancyCreate,
     TenancyCreateResponse,
     TenancyDeactivate,
     TenancyListResponse,
     TenancyResponse,
     TenancyUpdate,
)
from services.account_service import AccountContext
from services.tenancy_service import TenancyService

router = APIRouter(prefix="/api/tenancies", tags=["tenancies"])


@router.get("", response_model=TenancyListResponse, summary="List tenancies")
def list_tenancies(
     db: Session = Depends(get_session),
     account: AccountContext = Depends(get_current_account)
):
     tenancies = TenancyService.list_tenancies(db, account)
     return TenancyListResponse(
          tenancies=[build_tenancy_response(t) for t in tenancies],
          total=len(tenancies),
     )


@router.post(
     "",
     response_model=TenancyCreateResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Onboard a tenant"
)
def create_tenancy(
     body: TenancyCreate,
     db: Session = Depends(get_session),
     account: AccountContext = Depends(get_owner_account)
):
     """
     - **email**: matched case-insensitively against existing users
     - **fixed_monthly_rent**: billed on every generated invoice
     - **start_date**: lease start
     """
     tenancy, is_new_user, link = TenancyService.onboard_tenant(db, account, body)
     return TenancyCreateResponse(tenancy_id=tenancy.id, is_new_user=is_new_user, link=link)


@router.put("/{tenancy_id}", response_model=TenancyResponse, summary="Update tenancy")
def update_tenancy(
     tenancy_id: int,
     body: TenancyUpdate,
     db: Session = Depends(get_session),
     account: AccountContext = Depends(get_owner_account)
):
     tenancy = TenancyService.update_tenancy(db, account, tenancy_id, body)
     return build_tenancy_response(tenancy)


@router.post("/{tenancy_id}/deactivate", response_model=TenancyResponse, summary="End a lease")
def deactivate_tenancy(
     tenancy_id: int,
     body: TenancyDeactivate,
     db: Session = Depends(get_session),
     account: AccountContext = Depends(get_owner_account)
):
     """The tenancy is kept but no longer receives invoices."""
     tenancy = TenancyService.deactivate_tenancy(db, account, tenancy_id, body.end_date)
     return build_tenancy_response(tenancy)


@router.delete("/{tenancy_id}", response_model=ActionResult, summary="Delete tenancy")
def delete_tenancy(
     tenancy_id: int,
     db: Session = Depends(get_session),
     account: AccountContext = Depends(get_owner_account)
):
     """
     Permanently removes the tenancy and its invoices. Prefer deactivating.
     """
     TenancyService.delete_tenancy(db, account, tenancy_id)
     return ActionResult()
