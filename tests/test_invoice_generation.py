"""Tests for monthly invoice generation and the owner's utilities edit."""
from datetime import datetime
from decimal import Decimal
from unittest.mock import patch

import pytest
from sqlalchemy.exc import SQLAlchemyError

from models import Invoice, InvoiceStatus
from services.exceptions import BusinessRuleError, PermissionDeniedError, StorageError
from services.invoice_service import InvoiceService, format_period

NOW = datetime(2024, 8, 1, 9, 0, 0)


@pytest.fixture
def owner_with_tenancies(factory):
    """One owner, two active tenancies and one ended lease."""
    owner = factory.owner(name="Olivia Owner")
    prop = factory.property(owner)
    first = factory.tenancy(factory.tenant_user(name="John Doe"), prop, rent="1200.00")
    second = factory.tenancy(factory.tenant_user(name="Mary Major"), prop, rent="850.00")
    ended = factory.tenancy(factory.tenant_user(name="Old Tenant"), prop, rent="700.00", active=False)
    return owner, [first, second], ended


def test_format_period():
    """Test the year and month pickers combine into YYYY-MM."""
    assert format_period(2024, 3) == "2024-03"
    assert format_period(2024, 12) == "2024-12"

    with pytest.raises(BusinessRuleError):
        format_period(2024, 13)
    with pytest.raises(BusinessRuleError):
        format_period(24, 1)


def test_generate_creates_one_invoice_per_active_tenancy(db_session, account_for, owner_with_tenancies):
    """Test every active tenancy gets a pending invoice for its rent."""
    owner, active, ended = owner_with_tenancies

    period, created = InvoiceService.generate_monthly_invoices(
        db_session, account_for(owner), 2024, 8, now=NOW
    )

    assert period == "2024-08"
    assert len(created) == 2
    by_tenancy = {inv.tenant_id: inv for inv in db_session.query(Invoice).all()}
    assert set(by_tenancy) == {t.id for t in active}
    assert ended.id not in by_tenancy

    invoice = by_tenancy[active[0].id]
    assert invoice.month == "2024-08"
    assert invoice.rent_amount == Decimal("1200.00")
    assert invoice.utilities_amount == Decimal("0")
    assert invoice.total_due == Decimal("1200.00")
    assert invoice.status == InvoiceStatus.PENDING
    assert invoice.submitted_payment_amount is None
    assert invoice.payment_proof_url is None
    assert invoice.user_id == active[0].user_id
    assert invoice.property_id == active[0].property_id


def test_generate_twice_for_same_month_creates_nothing(db_session, account_for, owner_with_tenancies):
    """Test running the generator again for a month is a no-op."""
    owner, _, _ = owner_with_tenancies
    account = account_for(owner)

    InvoiceService.generate_monthly_invoices(db_session, account, 2024, 8, now=NOW)
    period, created = InvoiceService.generate_monthly_invoices(db_session, account, 2024, 8, now=NOW)

    assert period == "2024-08"
    assert created == []
    assert db_session.query(Invoice).filter(Invoice.month == "2024-08").count() == 2


def test_generate_only_fills_missing_tenancies(db_session, factory, account_for, owner_with_tenancies):
    """Test a tenancy onboarded mid-month is picked up on the next run."""
    owner, active, _ = owner_with_tenancies
    account = account_for(owner)
    InvoiceService.generate_monthly_invoices(db_session, account, 2024, 8, now=NOW)

    late = factory.tenancy(factory.tenant_user(), active[0].property, rent="500.00")
    _, created = InvoiceService.generate_monthly_invoices(db_session, account, 2024, 8, now=NOW)

    assert [inv.tenant_id for inv in created] == [late.id]
    assert db_session.query(Invoice).count() == 3


def test_generate_with_no_tenancies_returns_zero(db_session, factory, account_for):
    """Test an owner without tenancies gets an empty, successful run."""
    owner = factory.owner()
    factory.property(owner)

    period, created = InvoiceService.generate_monthly_invoices(db_session, account_for(owner), 2024, 8)

    assert period == "2024-08"
    assert created == []


def test_generate_ignores_other_owners_properties(db_session, factory, account_for, owner_with_tenancies):
    """Test the run is scoped to the owner's own properties."""
    owner, _, _ = owner_with_tenancies
    other_owner = factory.owner(name="Someone Else")
    foreign = factory.tenancy(factory.tenant_user(), factory.property(other_owner, name="Elsewhere"))

    InvoiceService.generate_monthly_invoices(db_session, account_for(owner), 2024, 8, now=NOW)

    assert db_session.query(Invoice).filter(Invoice.tenant_id == foreign.id).count() == 0


def test_tenant_cannot_generate(db_session, account_for, owner_with_tenancies):
    """Test generation is an owner action."""
    _, active, _ = owner_with_tenancies
    tenant = active[0].user

    with pytest.raises(PermissionDeniedError):
        InvoiceService.generate_monthly_invoices(db_session, account_for(tenant), 2024, 8)


def test_generate_failure_writes_nothing(db_session, account_for, owner_with_tenancies):
    """Test a failed batch leaves no partial invoice run behind."""
    owner, _, _ = owner_with_tenancies
    account = account_for(owner)

    with patch.object(db_session, "commit", side_effect=SQLAlchemyError("write failed")):
        with pytest.raises(StorageError):
            InvoiceService.generate_monthly_invoices(db_session, account, 2024, 8, now=NOW)

    assert db_session.query(Invoice).count() == 0


def test_update_utilities_recomputes_total(db_session, factory, account_for, owner_with_tenancies):
    """Test total_due follows rent + utilities."""
    owner, active, _ = owner_with_tenancies
    invoice = factory.invoice(active[0], total="1200.00")

    updated = InvoiceService.update_utilities(db_session, account_for(owner), invoice.id, Decimal("80.00"))

    assert updated.utilities_amount == Decimal("80.00")
    assert updated.total_due == Decimal("1280.00")
    assert updated.remaining_balance == Decimal("1280.00")


def test_update_utilities_rejected_on_paid_invoice(db_session, factory, account_for, owner_with_tenancies):
    """Test a paid invoice can no longer be edited."""
    owner, active, _ = owner_with_tenancies
    invoice = factory.invoice(active[0], status=InvoiceStatus.PAID)

    with pytest.raises(BusinessRuleError):
        InvoiceService.update_utilities(db_session, account_for(owner), invoice.id, Decimal("50.00"))
