"""
Pydantic schemas for the identity endpoints.
"""
from typing import List, Optional
from pydantic import BaseModel, EmailStr, Field

from .common import ActionResult


class RegisterRequest(BaseModel):
     name: str = Field(..., min_length=1, max_length=200)
     email: EmailStr
     password: str = Field(..., min_length=8)
     phone: Optional[str] = None


class LoginRequest(BaseModel):
     email: EmailStr
     password: str


class SetPasswordRequest(BaseModel):
     token: str = Field(..., min_length=1)
     password: str = Field(..., min_length=8)


class PasswordResetRequest(BaseModel):
     email: EmailStr


class UserResponse(BaseModel):
     id: str
     name: str
     email: str
     phone: Optional[str] = None
     roles: List[str]


class AuthResponse(ActionResult):
     token: str
     user: UserResponse
