# services/tenancy_service.py
"""
Tenancy Service - onboarding, editing and ending tenancies.

Onboarding reuses an existing user when the e-mail matches (granting the
tenant role) and otherwise creates one, together with the tenancy, in a
single batch.
"""
import logging
import uuid
from datetime import date, datetime
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from auth import generate_password_set_link
from database import atomic_batch
from models import Role, Tenant, User
from schemas.tenancy import TenancyCreate, TenancyUpdate
from utils.clock import utcnow
from .account_service import (
     AccountContext,
     get_owned_property,
     get_owned_tenancy,
     owned_property_ids,
)

logger = logging.getLogger(__name__)


def find_user_by_email(db: Session, email: str) -> Optional[User]:
     return db.query(User).filter(func.lower(User.email) == email.strip().lower()).first()


class TenancyService:

     @staticmethod
     def list_tenancies(db: Session, account: AccountContext) -> list[Tenant]:
          if account.is_owner:
               property_ids = owned_property_ids(db, account.uid)
               if not property_ids:
                    return []
               query = db.query(Tenant).filter(Tenant.property_id.in_(property_ids))
          else:
               query = db.query(Tenant).filter(Tenant.user_id == account.uid)
               if account.tenancy_id is not None:
                    query = query.filter(Tenant.id == account.tenancy_id)
          return query.order_by(Tenant.id).all()

     @staticmethod
     def onboard_tenant(
          db: Session,
          account: AccountContext,
          data: TenancyCreate,
          now: Optional[datetime] = None,
     ) -> tuple[Tenant, bool, Optional[str]]:
          """
          Create a tenancy for a (new or existing) user on an owned property.

          Returns:
               (tenancy, is_new_user, password-set link for new users)
          """
          get_owned_property(db, account, data.property_id)
          now = now or utcnow()

          with atomic_batch(db, f"onboard tenant {data.email}"):
               user = find_user_by_email(db, data.email)
               is_new_user = user is None
               if is_new_user:
                    user = User(
                         id=uuid.uuid4().hex,
                         name=data.name,
                         email=str(data.email).lower(),
                         phone=data.phone,
                         roles=Role.TENANT.value,
                         created_at=now,
                         updated_at=now,
                    )
                    db.add(user)
               elif not user.has_role(Role.TENANT):
                    user.grant_role(Role.TENANT)
                    user.updated_at = now

               tenancy = Tenant(
                    user=user,
                    property_id=data.property_id,
                    fixed_monthly_rent=data.fixed_monthly_rent,
                    pays_utilities=data.pays_utilities,
                    start_date=data.start_date,
                    end_date=None,
                    active=True,
                    created_at=now,
                    updated_at=now,
               )
               db.add(tenancy)

          link = generate_password_set_link(user.email) if is_new_user else None
          logger.info(
               "Tenancy %s created for %s user %s on property %s",
               tenancy.id, "new" if is_new_user else "existing", user.id, data.property_id,
          )
          return tenancy, is_new_user, link

     @staticmethod
     def update_tenancy(
          db: Session,
          account: AccountContext,
          tenancy_id: int,
          data: TenancyUpdate,
          now: Optional[datetime] = None,
     ) -> Tenant:
          tenancy = get_owned_tenancy(db, account, tenancy_id)
          if data.property_id is not None and data.property_id != tenancy.property_id:
               get_owned_property(db, account, data.property_id)
          now = now or utcnow()

          with atomic_batch(db, f"update tenancy {tenancy_id}"):
               if data.property_id is not None:
                    tenancy.property_id = data.property_id
               if data.fixed_monthly_rent is not None:
                    tenancy.fixed_monthly_rent = data.fixed_monthly_rent
               if data.pays_utilities is not None:
                    tenancy.pays_utilities = data.pays_utilities
               if data.start_date is not None:
                    tenancy.start_date = data.start_date
               if data.phone is not None:
                    tenancy.user.phone = data.phone
                    tenancy.user.updated_at = now
               tenancy.updated_at = now
          return tenancy

     @staticmethod
     def deactivate_tenancy(
          db: Session,
          account: AccountContext,
          tenancy_id: int,
          end_date: Optional[date] = None,
     ) -> Tenant:
          """End the lease; the tenancy stops receiving invoices but is kept."""
          tenancy = get_owned_tenancy(db, account, tenancy_id)
          with atomic_batch(db, f"deactivate tenancy {tenancy_id}"):
               tenancy.active = False
               tenancy.end_date = end_date or date.today()
               tenancy.updated_at = utcnow()
          return tenancy

     @staticmethod
     def delete_tenancy(db: Session, account: AccountContext, tenancy_id: int) -> None:
          """Hard delete; the tenancy's invoices go with it."""
          tenancy = get_owned_tenancy(db, account, tenancy_id)
          with atomic_batch(db, f"delete tenancy {tenancy_id}"):
               db.delete(tenancy)
