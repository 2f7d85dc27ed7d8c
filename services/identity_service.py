# services/identity_service.py
"""
Identity Service - account creation, sign-in and password links.
"""
import logging
import uuid

from sqlalchemy.orm import Session

from auth import (
     create_access_token,
     decode_password_set_token,
     generate_password_set_link,
     hash_password,
     verify_password,
)
from database import atomic_batch
from models import Role, User
from schemas.auth import LoginRequest, RegisterRequest
from utils.clock import utcnow
from utils.email import EmailDeliveryError, send_password_link_email
from .exceptions import IdentityError, NotFoundError
from .tenancy_service import find_user_by_email

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL_MESSAGE = "This email is already in use by another user."


class IdentityService:

     @staticmethod
     def register(db: Session, data: RegisterRequest) -> tuple[User, str]:
          """Create an owner account and sign it in."""
          if find_user_by_email(db, data.email) is not None:
               raise IdentityError(DUPLICATE_EMAIL_MESSAGE)

          now = utcnow()
          user = User(
               id=uuid.uuid4().hex,
               name=data.name,
               email=str(data.email).lower(),
               phone=data.phone,
               roles=Role.OWNER.value,
               password=hash_password(data.password),
               created_at=now,
               updated_at=now,
          )
          with atomic_batch(db, "register user"):
               db.add(user)
          return user, create_access_token(user.id, user.email)

     @staticmethod
     def login(db: Session, data: LoginRequest) -> tuple[User, str]:
          user = find_user_by_email(db, data.email)
          if user is None or not verify_password(data.password, user.password):
               raise IdentityError("Invalid credentials")
          return user, create_access_token(user.id, user.email)

     @staticmethod
     def set_password(db: Session, token: str, password: str) -> User:
          """Consume a password-set link (first password or reset)."""
          email = decode_password_set_token(token)
          if email is None:
               raise IdentityError("This link is invalid or has expired")
          user = find_user_by_email(db, email)
          if user is None:
               raise NotFoundError("No account exists for this link")
          with atomic_batch(db, f"set password for {user.id}"):
               user.password = hash_password(password)
               user.updated_at = utcnow()
          return user

     @staticmethod
     def request_password_reset(db: Session, email: str) -> None:
          """E-mail a password link. Unknown addresses are ignored silently."""
          user = find_user_by_email(db, email)
          if user is None:
               logger.info("Password reset requested for unknown e-mail")
               return
          try:
               send_password_link_email(user.email, generate_password_set_link(user.email), name=user.name)
          except EmailDeliveryError as e:
               logger.error(f"Could not send password e-mail to user {user.id}: {e}")
               raise IdentityError("The password e-mail could not be sent. Please try again later.") from e

     @staticmethod
     def delete_account(db: Session, uid: str) -> None:
          """Remove the user together with their tenancies and invoices."""
          user = db.get(User, uid)
          if user is None:
               raise NotFoundError("Account not found")
          with atomic_batch(db, f"delete account {uid}"):
               db.delete(user)
