# services/property_service.py
"""
Property Service - owner-scoped property management.
"""
from typing import Optional

from sqlalchemy.orm import Session

from database import atomic_batch
from models import Property, Role, User
from schemas.property import PropertyCreate, PropertyUpdate
from utils.clock import utcnow
from .account_service import AccountContext, get_owned_property, owned_property_ids
from .exceptions import NotFoundError, PermissionDeniedError
from .tenancy_service import TenancyService, find_user_by_email


class PropertyService:

     @staticmethod
     def list_properties(db: Session, account: AccountContext) -> list[Property]:
          if account.is_owner:
               property_ids = owned_property_ids(db, account.uid)
          else:
               property_ids = {t.property_id for t in TenancyService.list_tenancies(db, account)}
          if not property_ids:
               return []
          return db.query(Property).filter(Property.id.in_(property_ids)).order_by(Property.id).all()

     @staticmethod
     def add_property(db: Session, account: AccountContext, data: PropertyCreate) -> Property:
          """The creating owner becomes the property's first owner."""
          account.require_owner()
          owner = db.get(User, account.uid)
          if owner is None:
               raise PermissionDeniedError("Create your account profile before adding properties")

          now = utcnow()
          prop = Property(name=data.name, address=data.address, created_at=now, updated_at=now)
          with atomic_batch(db, "add property"):
               prop.owners.append(owner)
               db.add(prop)
          return prop

     @staticmethod
     def update_property(
          db: Session, account: AccountContext, property_id: int, data: PropertyUpdate
     ) -> Property:
          prop = get_owned_property(db, account, property_id)
          with atomic_batch(db, f"update property {property_id}"):
               if data.name is not None:
                    prop.name = data.name
               if data.address is not None:
                    prop.address = data.address
               prop.updated_at = utcnow()
          return prop

     @staticmethod
     def add_owner(
          db: Session, account: AccountContext, property_id: int, email: str
     ) -> Property:
          """Add a co-owner. Ownership is additive; existing owners stay."""
          prop = get_owned_property(db, account, property_id)
          user: Optional[User] = find_user_by_email(db, email)
          if user is None:
               raise NotFoundError(f"No user with e-mail {email}")

          with atomic_batch(db, f"add owner to property {property_id}"):
               user.grant_role(Role.OWNER)
               if user not in prop.owners:
                    prop.owners.append(user)
               prop.updated_at = utcnow()
          return prop

     @staticmethod
     def delete_property(db: Session, account: AccountContext, property_id: int) -> None:
          prop = get_owned_property(db, account, property_id)
          with atomic_batch(db, f"delete property {property_id}"):
               db.delete(prop)
