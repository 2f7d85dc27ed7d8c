"""Shared fixtures: an in-memory database, sample records and an API client."""
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["ROLE_FALLBACK"] = "owner"

import uuid
from datetime import date
from decimal import Decimal
from typing import Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from auth import create_access_token
from database import get_session
from dependencies import get_receipt_verifier
from main import app
from models import Base, Invoice, InvoiceStatus, Property, Role, Tenant, User
from services.account_service import resolve_account


class Factory:
    """Creates committed sample records."""

    def __init__(self, db):
        self.db = db

    def _save(self, obj):
        self.db.add(obj)
        self.db.commit()
        return obj

    def user(self, name: str = "Jane Smith", email: Optional[str] = None, roles: str = Role.OWNER.value,
             uid: Optional[str] = None) -> User:
        uid = uid or uuid.uuid4().hex
        return self._save(User(
            id=uid,
            name=name,
            email=email or f"{uid}@example.com",
            phone="+1 555 0100",
            roles=roles,
        ))

    def owner(self, **kwargs) -> User:
        return self.user(roles=Role.OWNER.value, **kwargs)

    def tenant_user(self, **kwargs) -> User:
        return self.user(roles=Role.TENANT.value, **kwargs)

    def property(self, owner: User, name: str = "Main House A") -> Property:
        return self._save(Property(name=name, address="12 High Street", owners=[owner]))

    def tenancy(self, user: User, prop: Property, rent: str = "1000.00", active: bool = True) -> Tenant:
        return self._save(Tenant(
            user=user,
            property=prop,
            fixed_monthly_rent=Decimal(rent),
            pays_utilities=False,
            start_date=date(2024, 1, 1),
            active=active,
        ))

    def invoice(
        self,
        tenancy: Tenant,
        month: str = "2024-08",
        total: str = "1000.00",
        submitted: Optional[str] = None,
        status: InvoiceStatus = InvoiceStatus.PENDING,
        proof: Optional[str] = None,
    ) -> Invoice:
        return self._save(Invoice(
            tenant_id=tenancy.id,
            user_id=tenancy.user_id,
            property_id=tenancy.property_id,
            month=month,
            rent_amount=Decimal(total),
            utilities_amount=Decimal("0"),
            total_due=Decimal(total),
            status=status,
            submitted_payment_amount=Decimal(submitted) if submitted is not None else None,
            payment_proof_url=proof,
        ))


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(engine):
    TestingSession = sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)
    session = TestingSession()
    yield session
    session.close()


@pytest.fixture
def factory(db_session):
    return Factory(db_session)


@pytest.fixture
def account_for(db_session):
    """Resolve the AccountContext for a user, as a request would."""
    def _resolve(user: User, role: Optional[str] = None, tenancy_id: Optional[int] = None):
        return resolve_account(
            db_session,
            {"id": user.id, "email": user.email},
            requested_role=role,
            tenancy_id=tenancy_id,
        )
    return _resolve


@pytest.fixture
def receipt_verifier():
    """Stand-in verifier; tests set verify.return_value or side_effect."""
    verifier = MagicMock()
    verifier.verify = AsyncMock()
    return verifier


@pytest.fixture
def client(db_session, receipt_verifier):
    def _get_session():
        yield db_session

    app.dependency_overrides[get_session] = _get_session
    app.dependency_overrides[get_receipt_verifier] = lambda: receipt_verifier
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def auth_headers(user: User, role: Optional[str] = None, tenancy_id: Optional[int] = None) -> dict:
    headers = {"Authorization": f"Bearer {create_access_token(user.id, user.email)}"}
    if role:
        headers["X-Active-Role"] = role
    if tenancy_id is not None:
        headers["X-Tenancy-Id"] = str(tenancy_id)
    return headers


@pytest.fixture
def headers_for():
    return auth_headers
