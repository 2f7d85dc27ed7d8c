# routers/auth.py
"""
Identity API routes: register, sign in, password links, account deletion.
Signing out is dropping the bearer token on the client.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from auth import verify_token
from database import get_session
from models import User
from schemas.auth import (
     AuthResponse,
     LoginRequest,
     PasswordResetRequest,
     RegisterRequest,
     SetPasswordRequest,
     UserResponse,
)
from schemas.common import ActionResult
from services.identity_service import IdentityService

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _user_response(user: User) -> UserResponse:
     return UserResponse(
          id=user.id,
          name=user.name,
          email=user.email,
          phone=user.phone,
          roles=[r.value for r in user.role_list],
     )


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(body: RegisterRequest, db: Session = Depends(get_session)):
     user, token = IdentityService.register(db, body)
     return AuthResponse(token=token, user=_user_response(user))


@router.post("/login", response_model=AuthResponse)
def login(body: LoginRequest, db: Session = Depends(get_session)):
     user, token = IdentityService.login(db, body)
     return AuthResponse(token=token, user=_user_response(user))


@router.post("/set-password", response_model=ActionResult)
def set_password(body: SetPasswordRequest, db: Session = Depends(get_session)):
     IdentityService.set_password(db, body.token, body.password)
     return ActionResult()


@router.post("/password-reset", response_model=ActionResult)
def request_password_reset(body: PasswordResetRequest, db: Session = Depends(get_session)):
     IdentityService.request_password_reset(db, body.email)
     return ActionResult()


@router.delete("/account", response_model=ActionResult)
def delete_account(token: dict = Depends(verify_token), db: Session = Depends(get_session)):
     IdentityService.delete_account(db, token.get("id"))
     return ActionResult()
