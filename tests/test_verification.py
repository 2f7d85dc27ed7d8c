"""Tests for the owner's verification transitions: mark paid, partial, reject."""
from datetime import datetime
from decimal import Decimal

import pytest

from models import Invoice, InvoiceStatus, Property
from services.exceptions import BusinessRuleError, PermissionDeniedError
from services.invoice_service import InvoiceService
from services.payment_service import PaymentService

NOW = datetime(2024, 9, 5, 10, 0, 0)
PROOF = "https://example.com/receipt.jpg"


@pytest.fixture
def setup(factory):
    owner = factory.owner(name="Olivia Owner")
    tenancy = factory.tenancy(factory.tenant_user(name="John Doe"), factory.property(owner))
    invoice = factory.invoice(tenancy, total="1280.00", submitted="1280.00", proof=PROOF)
    return owner, tenancy, invoice


def test_invoice_balance_helpers_are_properties():
    """Test the `property` relationship does not hide the computed attributes."""
    assert isinstance(Invoice.__dict__["remaining_balance"], property)
    assert isinstance(Invoice.__dict__["awaiting_verification"], property)
    assert Invoice.property.property.mapper.class_ is Property


def test_mark_paid_keeps_proof(db_session, account_for, setup):
    """Test accepting a payment sets payment_date and keeps the receipt."""
    owner, _, invoice = setup

    result = InvoiceService.mark_paid(db_session, account_for(owner), invoice.id, now=NOW)

    assert result.status == InvoiceStatus.PAID
    assert result.payment_date == NOW
    assert result.payment_proof_url == PROOF
    assert result.submitted_payment_amount == Decimal("1280.00")


def test_reject_clears_submission(db_session, account_for, setup):
    """Test rejection returns the invoice to pending with no submission."""
    owner, _, invoice = setup

    result = InvoiceService.reject_payment(db_session, account_for(owner), invoice.id, now=NOW)

    assert result.status == InvoiceStatus.PENDING
    assert result.payment_proof_url is None
    assert result.submitted_payment_amount is None
    assert result.submission_date is None
    assert result.total_due == Decimal("1280.00")
    assert result.rent_amount == Decimal("1280.00")
    assert result.utilities_amount == Decimal("0")
    assert result.remaining_balance == Decimal("1280.00")
    assert not result.awaiting_verification


def test_mark_partial_keeps_submitted_amount(db_session, factory, account_for, setup):
    """Test a short payment is accepted and the rest stays payable."""
    owner, tenancy, _ = setup
    invoice = factory.invoice(tenancy, month="2024-09", total="1000.00", submitted="400.00", proof=PROOF)

    result = InvoiceService.mark_partial(db_session, account_for(owner), invoice.id, now=NOW)

    assert result.status == InvoiceStatus.PARTIAL
    assert result.submitted_payment_amount == Decimal("400.00")
    assert result.remaining_balance == Decimal("600.00")
    assert result.payment_date is None


def test_mark_partial_without_submission(db_session, factory, account_for, setup):
    """Test there must be something to accept."""
    owner, tenancy, _ = setup
    invoice = factory.invoice(tenancy, month="2024-09")

    with pytest.raises(BusinessRuleError):
        InvoiceService.mark_partial(db_session, account_for(owner), invoice.id)


@pytest.mark.parametrize("action", [
    InvoiceService.mark_paid,
    InvoiceService.mark_partial,
    InvoiceService.reject_payment,
])
def test_paid_is_terminal(db_session, account_for, setup, action):
    """Test no verification action reopens a paid invoice."""
    owner, _, invoice = setup
    account = account_for(owner)
    InvoiceService.mark_paid(db_session, account, invoice.id, now=NOW)

    with pytest.raises(BusinessRuleError):
        action(db_session, account, invoice.id)

    assert invoice.status == InvoiceStatus.PAID


def test_tenant_cannot_verify(db_session, account_for, setup):
    """Test verification is owner-only."""
    _, tenancy, invoice = setup

    with pytest.raises(PermissionDeniedError):
        InvoiceService.mark_paid(db_session, account_for(tenancy.user), invoice.id)


def test_other_owner_cannot_verify(db_session, factory, account_for, setup):
    """Test owners only act on invoices of their own properties."""
    _, _, invoice = setup
    stranger = factory.owner(name="Someone Else")

    with pytest.raises(PermissionDeniedError):
        InvoiceService.reject_payment(db_session, account_for(stranger), invoice.id)


def test_resubmit_after_rejection(db_session, factory, account_for, setup):
    """Test the tenant pays again from scratch after a rejection."""
    owner, tenancy, _ = setup
    invoice = factory.invoice(tenancy, month="2024-09", total="1000.00")
    tenant = account_for(tenancy.user)

    PaymentService.submit_payment(db_session, tenant, [invoice.id], proof_url=PROOF, amount=Decimal("900"))
    InvoiceService.reject_payment(db_session, account_for(owner), invoice.id)
    PaymentService.submit_payment(
        db_session, tenant, [invoice.id], proof_url="https://example.com/second.jpg", amount=Decimal("1000")
    )

    assert invoice.submitted_payment_amount == Decimal("1000.00")
    assert invoice.payment_proof_url == "https://example.com/second.jpg"
    assert invoice.status == InvoiceStatus.PENDING
