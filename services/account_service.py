# services/account_service.py
"""
Role resolution and ownership scoping.

Turns an authenticated identity {id, email} into an AccountContext: the
user's declared roles, the role the request acts under, and, for tenants,
the tenancy backing the session. Every other service scopes its reads and
writes through the helpers here.
"""
import logging
import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models import Invoice, Property, PropertyOwner, Role, Tenant, User
from .exceptions import NotFoundError, PermissionDeniedError, StorageError

load_dotenv()

logger = logging.getLogger(__name__)

# Role given to an identity that has no user profile yet. "none" denies access.
ROLE_FALLBACK = os.getenv("ROLE_FALLBACK", Role.OWNER.value).lower()


@dataclass
class AccountContext:
     uid: str
     email: Optional[str]
     roles: list[Role]
     active_role: Role
     tenancy_id: Optional[int] = None
     tenancy_ids: list[int] = field(default_factory=list)
     has_profile: bool = True

     @property
     def is_owner(self) -> bool:
          return self.active_role == Role.OWNER

     @property
     def is_tenant(self) -> bool:
          return self.active_role == Role.TENANT

     @property
     def requires_tenancy_selection(self) -> bool:
          return self.is_tenant and self.tenancy_id is None and len(self.tenancy_ids) > 1

     def require_owner(self) -> None:
          if not self.is_owner:
               raise PermissionDeniedError("This action is only available to property owners")

     def require_tenancy(self) -> int:
          """The tenancy a tenant session acts for."""
          if not self.is_tenant:
               raise PermissionDeniedError("This action is only available to tenants")
          if self.tenancy_id is None:
               if self.requires_tenancy_selection:
                    raise PermissionDeniedError("Select which tenancy you are acting for")
               raise PermissionDeniedError("No tenancy is linked to your account")
          return self.tenancy_id


def resolve_account(
     db: Session,
     identity: dict,
     requested_role: Optional[str] = None,
     tenancy_id: Optional[int] = None,
     fallback_role: Optional[str] = None,
) -> AccountContext:
     """
     Resolve the role and tenancy for a signed-in identity.

     - Tenant-only users act as tenants; users holding both roles act as
       owners unless `requested_role` switches to one of their own roles.
     - An identity without a user profile gets `fallback_role`
       (ROLE_FALLBACK, "owner" unless configured), every time.
     - A tenant with one tenancy is bound to it; with several, `tenancy_id`
       must pick one, otherwise the context reports that a selection is needed.

     Raises:
          StorageError: the profile or tenancies could not be read
          PermissionDeniedError: role switch outside the user's roles, unknown
               tenancy, or no profile while the fallback is "none"
     """
     uid = identity.get("id")
     email = identity.get("email")
     fallback = (fallback_role or ROLE_FALLBACK).lower()

     try:
          user = db.get(User, uid)
          tenancy_ids = [
               row[0]
               for row in db.query(Tenant.id).filter(Tenant.user_id == uid).order_by(Tenant.id).all()
          ]
     except SQLAlchemyError as exc:
          logger.exception("Role resolution failed for uid=%s", uid)
          raise StorageError("Could not load your account. Please sign in again.") from exc

     roles = user.role_list if user is not None else []
     if not roles:
          if fallback == "none":
               raise PermissionDeniedError("No account profile found for this sign-in")
          roles = [Role(fallback)]
          logger.warning("No profile for uid=%s; falling back to role '%s'", uid, fallback)

     active_role = Role.OWNER if Role.OWNER in roles else roles[0]
     if requested_role:
          try:
               requested = Role(requested_role.lower())
          except ValueError:
               raise PermissionDeniedError(f"Unknown role '{requested_role}'")
          if requested not in roles:
               raise PermissionDeniedError(f"Your account does not hold the '{requested.value}' role")
          active_role = requested

     bound = None
     if active_role == Role.TENANT:
          if tenancy_id is not None:
               if tenancy_id not in tenancy_ids:
                    raise PermissionDeniedError("That tenancy does not belong to your account")
               bound = tenancy_id
          elif len(tenancy_ids) == 1:
               bound = tenancy_ids[0]

     return AccountContext(
          uid=uid,
          email=email if user is None else user.email,
          roles=roles,
          active_role=active_role,
          tenancy_id=bound,
          tenancy_ids=tenancy_ids,
          has_profile=user is not None,
     )


def owned_property_ids(db: Session, uid: str) -> set[int]:
     rows = db.query(PropertyOwner.property_id).filter(PropertyOwner.user_id == uid).all()
     return {row[0] for row in rows}


def get_owned_property(db: Session, account: AccountContext, property_id: int) -> Property:
     account.require_owner()
     prop = db.get(Property, property_id)
     if prop is None:
          raise NotFoundError(f"Property with ID {property_id} not found")
     if account.uid not in prop.owner_ids:
          raise PermissionDeniedError("You do not own this property")
     return prop


def get_owned_tenancy(db: Session, account: AccountContext, tenancy_id: int) -> Tenant:
     account.require_owner()
     tenancy = db.get(Tenant, tenancy_id)
     if tenancy is None:
          raise NotFoundError(f"Tenancy with ID {tenancy_id} not found")
     if tenancy.property_id not in owned_property_ids(db, account.uid):
          raise PermissionDeniedError("This tenancy is not on one of your properties")
     return tenancy


def can_access_invoice(db: Session, account: AccountContext, invoice: Invoice) -> bool:
     """Owners see invoices of their properties; tenants only their own."""
     if account.is_owner:
          return invoice.property_id in owned_property_ids(db, account.uid)
     if invoice.user_id != account.uid:
          return False
     return account.tenancy_id is None or invoice.tenant_id == account.tenancy_id


def get_accessible_invoice(db: Session, account: AccountContext, invoice_id: int) -> Invoice:
     invoice = db.get(Invoice, invoice_id)
     if invoice is None:
          raise NotFoundError(f"Invoice with ID {invoice_id} not found")
     if not can_access_invoice(db, account, invoice):
          raise PermissionDeniedError("You do not have permission to view this invoice")
     return invoice
