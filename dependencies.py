"""
Shared FastAPI dependencies: the resolved account for a request and the
receipt verifier.
"""
from typing import Optional

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from auth import verify_token
from database import get_session
from services.account_service import AccountContext, resolve_account
from services.receipt_verifier import ReceiptVerifier


def get_current_account(
    token: dict = Depends(verify_token),
    db: Session = Depends(get_session),
    x_active_role: Optional[str] = Header(None, description="Role switcher: owner or tenant"),
    x_tenancy_id: Optional[int] = Header(None, description="Tenancy to act for when several exist"),
) -> AccountContext:
    return resolve_account(db, token, requested_role=x_active_role, tenancy_id=x_tenancy_id)


def get_owner_account(account: AccountContext = Depends(get_current_account)) -> AccountContext:
    account.require_owner()
    return account


_receipt_verifier: Optional[ReceiptVerifier] = None


def get_receipt_verifier() -> ReceiptVerifier:
    global _receipt_verifier
    if _receipt_verifier is None:
        _receipt_verifier = ReceiptVerifier()
    return _receipt_verifier
