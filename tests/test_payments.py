"""Tests for payment submission and the even-split allocation."""
from datetime import datetime
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import patch

import pytest
from sqlalchemy.exc import SQLAlchemyError

from models import Invoice, InvoiceStatus
from services.exceptions import (
    BusinessRuleError,
    NotFoundError,
    PermissionDeniedError,
    StorageError,
)
from services.payment_service import AllocationPolicy, EvenSplitAllocation, PaymentService

NOW = datetime(2024, 9, 4, 14, 30, 0)
PROOF = "https://example.com/receipt-aug.jpg"


@pytest.fixture
def tenancy(factory):
    owner = factory.owner()
    return factory.tenancy(factory.tenant_user(name="John Doe"), factory.property(owner))


def _invoice(inv_id, total, submitted=None):
    return SimpleNamespace(
        id=inv_id,
        remaining_balance=Decimal(total) - Decimal(submitted or 0),
    )


def test_even_split_divides_evenly():
    """Test both invoices receive half when neither is capped."""
    shares = EvenSplitAllocation().allocate(
        [_invoice(1, "850"), _invoice(2, "1215")], Decimal("1000")
    )
    assert shares == {1: Decimal("500.00"), 2: Decimal("500.00")}


def test_even_split_caps_at_remaining_balance():
    """Test no invoice receives more than it still owes."""
    shares = EvenSplitAllocation().allocate(
        [_invoice(1, "200"), _invoice(2, "1000")], Decimal("1000")
    )
    assert shares == {1: Decimal("200.00"), 2: Decimal("500.00")}


def test_even_split_truncates_to_cents():
    """Test shares never round up past the paid amount."""
    shares = EvenSplitAllocation().allocate(
        [_invoice(1, "500"), _invoice(2, "500"), _invoice(3, "500")], Decimal("100")
    )
    assert shares == {1: Decimal("33.33"), 2: Decimal("33.33"), 3: Decimal("33.33")}
    assert sum(shares.values()) <= Decimal("100")


def test_submit_payment_updates_every_selected_invoice(db_session, factory, account_for, tenancy):
    """Test one payment is spread over the selection in a single batch."""
    first = factory.invoice(tenancy, month="2024-07", total="850.00")
    second = factory.invoice(tenancy, month="2024-08", total="1215.00")

    total, allocations = PaymentService.submit_payment(
        db_session,
        account_for(tenancy.user),
        [first.id, second.id],
        proof_url=PROOF,
        amount=Decimal("1000"),
        now=NOW,
    )

    assert total == Decimal("1000")
    assert [(a.invoice_id, a.allocated) for a in allocations] == [
        (first.id, Decimal("500.00")),
        (second.id, Decimal("500.00")),
    ]

    db_session.expire_all()
    stored = {inv.id: inv for inv in db_session.query(Invoice).all()}
    assert stored[first.id].submitted_payment_amount == Decimal("500.00")
    assert stored[first.id].remaining_balance == Decimal("350.00")
    assert stored[second.id].remaining_balance == Decimal("715.00")
    for inv in stored.values():
        assert inv.status == InvoiceStatus.PENDING
        assert inv.payment_proof_url == PROOF
        assert inv.submission_date == NOW
        assert inv.awaiting_verification


def test_submit_payment_defaults_to_remaining_balance(db_session, factory, account_for, tenancy):
    """Test a single invoice paid without an amount is fully covered."""
    invoice = factory.invoice(tenancy, total="1280.00", submitted="280.00")

    total, allocations = PaymentService.submit_payment(
        db_session, account_for(tenancy.user), [invoice.id], proof_url=PROOF, now=NOW
    )

    assert total == Decimal("1000.00")
    assert allocations[0].allocated == Decimal("1000.00")
    assert allocations[0].remaining_balance == Decimal("0.00")
    assert invoice.submitted_payment_amount == Decimal("1280.00")


def test_submit_payment_accumulates_on_partial_invoice(db_session, factory, account_for, tenancy):
    """Test a second submission adds to the amount already accepted."""
    invoice = factory.invoice(tenancy, total="1000.00", submitted="400.00", status=InvoiceStatus.PARTIAL)

    PaymentService.submit_payment(
        db_session, account_for(tenancy.user), [invoice.id], proof_url=PROOF, amount=Decimal("600"), now=NOW
    )

    assert invoice.status == InvoiceStatus.PENDING
    assert invoice.submitted_payment_amount == Decimal("1000.00")
    assert invoice.remaining_balance == Decimal("0.00")


def test_submit_payment_counts_repeated_ids_once(db_session, factory, account_for, tenancy):
    """Test a duplicated selection does not double the share."""
    invoice = factory.invoice(tenancy, total="1000.00")

    _, allocations = PaymentService.submit_payment(
        db_session,
        account_for(tenancy.user),
        [invoice.id, invoice.id],
        proof_url=PROOF,
        amount=Decimal("300"),
    )

    assert len(allocations) == 1
    assert allocations[0].allocated == Decimal("300.00")


def test_submit_payment_rejects_paid_invoice(db_session, factory, account_for, tenancy):
    """Test paid invoices cannot be selected."""
    paid = factory.invoice(tenancy, status=InvoiceStatus.PAID, submitted="1000.00", proof=PROOF)

    with pytest.raises(BusinessRuleError):
        PaymentService.submit_payment(db_session, account_for(tenancy.user), [paid.id], proof_url=PROOF)


def test_submit_payment_rejects_foreign_invoice(db_session, factory, account_for, tenancy):
    """Test a tenant cannot pay someone else's invoice."""
    other = factory.tenancy(factory.tenant_user(), tenancy.property)
    foreign = factory.invoice(other)

    with pytest.raises(PermissionDeniedError):
        PaymentService.submit_payment(db_session, account_for(tenancy.user), [foreign.id], proof_url=PROOF)


def test_submit_payment_unknown_invoice(db_session, account_for, tenancy):
    """Test a missing id is reported."""
    with pytest.raises(NotFoundError):
        PaymentService.submit_payment(db_session, account_for(tenancy.user), [999], proof_url=PROOF)


def test_submit_payment_requires_proof(db_session, factory, account_for, tenancy):
    """Test a submission without a receipt is refused."""
    invoice = factory.invoice(tenancy)

    with pytest.raises(BusinessRuleError):
        PaymentService.submit_payment(db_session, account_for(tenancy.user), [invoice.id], proof_url="")


def test_submit_payment_rejects_amount_that_credits_nothing(db_session, factory, account_for, tenancy):
    """Test one cent over two invoices truncates to zero shares and is refused."""
    first = factory.invoice(tenancy, month="2024-07")
    second = factory.invoice(tenancy, month="2024-08")

    with pytest.raises(BusinessRuleError):
        PaymentService.submit_payment(
            db_session, account_for(tenancy.user), [first.id, second.id], proof_url=PROOF, amount=Decimal("0.01")
        )

    assert first.payment_proof_url is None
    assert second.submitted_payment_amount is None


def test_owner_cannot_submit_payment(db_session, factory, account_for, tenancy):
    """Test submission is a tenant action."""
    invoice = factory.invoice(tenancy)
    owner = tenancy.property.owners[0]

    with pytest.raises(PermissionDeniedError):
        PaymentService.submit_payment(db_session, account_for(owner), [invoice.id], proof_url=PROOF)


def test_failed_submission_changes_no_invoice(db_session, factory, account_for, tenancy):
    """Test a failed batch leaves every selected invoice untouched."""
    first = factory.invoice(tenancy, month="2024-07", total="850.00")
    second = factory.invoice(tenancy, month="2024-08", total="1215.00")
    account = account_for(tenancy.user)

    with patch.object(db_session, "commit", side_effect=SQLAlchemyError("write failed")):
        with pytest.raises(StorageError):
            PaymentService.submit_payment(
                db_session, account, [first.id, second.id], proof_url=PROOF, amount=Decimal("1000")
            )

    for inv in db_session.query(Invoice).all():
        assert inv.submitted_payment_amount is None
        assert inv.payment_proof_url is None
        assert inv.submission_date is None


def test_custom_policy_is_used(db_session, factory, account_for, tenancy):
    """Test the allocation strategy can be swapped without touching the engine."""

    class OldestFirst(AllocationPolicy):
        def allocate(self, invoices, amount):
            shares, left = {}, amount
            for inv in sorted(invoices, key=lambda i: i.month):
                shares[inv.id] = min(inv.remaining_balance, left)
                left -= shares[inv.id]
            return shares

    older = factory.invoice(tenancy, month="2024-07", total="850.00")
    newer = factory.invoice(tenancy, month="2024-08", total="1215.00")

    _, allocations = PaymentService.submit_payment(
        db_session,
        account_for(tenancy.user),
        [newer.id, older.id],
        proof_url=PROOF,
        amount=Decimal("1000"),
        policy=OldestFirst(),
    )

    allocated = {a.invoice_id: a.allocated for a in allocations}
    assert allocated[older.id] == Decimal("850.00")
    assert allocated[newer.id] == Decimal("150.00")


def test_payable_invoices_excludes_paid(db_session, factory, account_for, tenancy):
    """Test only invoices with a balance are offered for payment."""
    open_invoice = factory.invoice(tenancy, month="2024-08")
    factory.invoice(tenancy, month="2024-07", status=InvoiceStatus.PAID, submitted="1000.00")
    factory.invoice(tenancy, month="2024-06", submitted="1000.00")

    payable = PaymentService.payable_invoices(db_session, account_for(tenancy.user))

    assert [inv.id for inv in payable] == [open_invoice.id]
