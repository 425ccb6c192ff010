"""
Unit tests for value objects.
"""

import dataclasses
from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from fixitnow.domain.exceptions.validation_error import (
    RequiredFieldError,
    ValidationError,
)
from fixitnow.domain.value_objects.actor import ActorKind, ActorRef, CashParty
from fixitnow.domain.value_objects.bank_account import BankAccount
from fixitnow.domain.value_objects.cash_payment import CashDispute, CashPaymentDetails
from fixitnow.domain.value_objects.invoice import Invoice, InvoiceLineItem
from fixitnow.domain.value_objects.job_status import JobStatus
from fixitnow.domain.value_objects.location import JobLocation, LocationPoint
from fixitnow.domain.value_objects.payment_status import (
    DisputeStatus,
    InvoicePaymentStatus,
    PaymentStatus,
    PayoutStatus,
)
from fixitnow.domain.value_objects.pricing import Budget
from fixitnow.domain.value_objects.status_history import StatusHistoryEntry
from fixitnow.domain.value_objects.timestamps import from_iso


class TestJobStatus:
    """Test JobStatus value object."""

    def test_enum_values(self):
        expected_values = ["pending", "accepted", "in_progress", "completed", "cancelled"]
        assert JobStatus.values() == expected_values

    def test_forward_transitions(self):
        assert JobStatus.PENDING.can_transition_to(JobStatus.ACCEPTED) is True
        assert JobStatus.PENDING.can_transition_to(JobStatus.CANCELLED) is True
        assert JobStatus.ACCEPTED.can_transition_to(JobStatus.IN_PROGRESS) is True
        assert JobStatus.ACCEPTED.can_transition_to(JobStatus.COMPLETED) is True
        assert JobStatus.IN_PROGRESS.can_transition_to(JobStatus.COMPLETED) is True
        assert JobStatus.IN_PROGRESS.can_transition_to(JobStatus.CANCELLED) is True

    def test_rejected_transitions(self):
        assert JobStatus.PENDING.can_transition_to(JobStatus.IN_PROGRESS) is False
        assert JobStatus.PENDING.can_transition_to(JobStatus.COMPLETED) is False
        assert JobStatus.IN_PROGRESS.can_transition_to(JobStatus.ACCEPTED) is False
        assert JobStatus.ACCEPTED.can_transition_to(JobStatus.PENDING) is False

    def test_terminal_states_have_no_exits(self):
        for terminal in (JobStatus.COMPLETED, JobStatus.CANCELLED):
            assert terminal.is_terminal() is True
            assert terminal.can_be_cancelled() is False
            for target in JobStatus:
                assert terminal.can_transition_to(target) is False

    def test_self_transition_is_not_allowed(self):
        for status in JobStatus:
            assert status.can_transition_to(status) is False


class TestPaymentStatus:
    """Test payment related enums."""

    def test_is_settled(self):
        assert PaymentStatus.PAID.is_settled() is True
        assert PaymentStatus.CASH_VERIFIED.is_settled() is True
        assert PaymentStatus.PENDING.is_settled() is False
        assert PaymentStatus.CASH_PENDING.is_settled() is False

    def test_payout_transitions(self):
        assert PayoutStatus.PENDING.can_transition_to(PayoutStatus.PROCESSING) is True
        assert PayoutStatus.PENDING.can_transition_to(PayoutStatus.CANCELLED) is True
        assert PayoutStatus.PROCESSING.can_transition_to(PayoutStatus.COMPLETED) is True
        assert PayoutStatus.PROCESSING.can_transition_to(PayoutStatus.FAILED) is True
        assert PayoutStatus.PENDING.can_transition_to(PayoutStatus.COMPLETED) is False
        assert PayoutStatus.COMPLETED.can_transition_to(PayoutStatus.FAILED) is False

    def test_outstanding_payouts(self):
        assert PayoutStatus.PENDING.is_outstanding() is True
        assert PayoutStatus.PROCESSING.is_outstanding() is True
        assert PayoutStatus.COMPLETED.is_outstanding() is False
        assert PayoutStatus.FAILED.is_outstanding() is False


class TestActorRef:
    """Test ActorRef value object."""

    def test_cash_party(self):
        assert ActorRef.user(uuid4()).cash_party == CashParty.CUSTOMER
        assert ActorRef.professional(uuid4()).cash_party == CashParty.PROFESSIONAL
        assert ActorRef.admin(uuid4()).cash_party is None

    def test_immutability(self):
        actor = ActorRef.user(uuid4())
        with pytest.raises(dataclasses.FrozenInstanceError):
            actor.kind = ActorKind.ADMIN


class TestLocationPoint:
    """Test LocationPoint sanitization rules."""

    def test_well_formed_point(self):
        point = LocationPoint.from_raw({"type": "Point", "coordinates": [77.59, 12.97]})

        assert point.type == "Point"
        assert point.longitude == 77.59
        assert point.latitude == 12.97
        assert point.to_dict() == {"type": "Point", "coordinates": [77.59, 12.97]}

    @pytest.mark.parametrize(
        "raw",
        [
            None,
            {},
            {"type": "Point"},
            {"coordinates": [1, 2]},
            {"type": "Point", "coordinates": []},
            {"type": "Point", "coordinates": [1]},
            {"type": "Point", "coordinates": [1, 2, 3]},
            {"type": "Point", "coordinates": ["a", "b"]},
            {"type": "Point", "coordinates": [True, 2]},
            {"type": "", "coordinates": [1, 2]},
            "Point(1 2)",
        ],
    )
    def test_malformed_points_are_absent(self, raw):
        assert LocationPoint.from_raw(raw) is None


class TestJobLocation:
    """Test JobLocation value object."""

    def test_full_address(self):
        location = JobLocation(address="12 MG Road", city="Bengaluru", state="KA", zip_code="560001")
        assert location.full_address == "12 MG Road, Bengaluru, KA 560001"

    def test_required_fields(self):
        with pytest.raises(ValidationError):
            JobLocation(address="  ", city="Bengaluru")
        with pytest.raises(ValidationError):
            JobLocation(address="12 MG Road", city="")


class TestBudget:
    """Test Budget value object."""

    def test_min_cannot_exceed_max(self):
        with pytest.raises(ValidationError):
            Budget(min=500, max=100)

    def test_negative_bounds_rejected(self):
        with pytest.raises(ValidationError):
            Budget(min=-1)

    def test_contains(self):
        budget = Budget(min=100, max=500)
        assert budget.contains(100) is True
        assert budget.contains(500) is True
        assert budget.contains(99.99) is False
        assert budget.contains(500.01) is False

    def test_open_ended_budget(self):
        assert Budget(max=500).contains(0) is True
        assert Budget(min=100).contains(10_000) is True


class TestInvoice:
    """Test Invoice value object."""

    def _invoice(self, due_in_days=7):
        issued = datetime(2026, 1, 1, tzinfo=timezone.utc)
        return Invoice(
            number="INV-1-001",
            items=(InvoiceLineItem("Service", 1, 100.0, 100.0),),
            subtotal=100.0,
            tax=18.0,
            tax_rate=0.18,
            total=118.0,
            issued_at=issued,
            due_date=issued + timedelta(days=due_in_days),
        )

    def test_overdue_only_after_due_date(self):
        invoice = self._invoice()
        assert invoice.is_overdue(invoice.due_date) is False
        assert invoice.is_overdue(invoice.due_date + timedelta(seconds=1)) is True

    def test_paid_invoice_is_never_overdue(self):
        invoice = self._invoice().mark_paid(datetime(2026, 1, 2, tzinfo=timezone.utc))
        assert invoice.payment_status == InvoicePaymentStatus.PAID
        assert invoice.is_overdue(datetime(2027, 1, 1, tzinfo=timezone.utc)) is False

    def test_dict_round_trip(self):
        invoice = self._invoice()
        assert Invoice.from_dict(invoice.to_dict()) == invoice

    def test_missing_number_means_no_invoice(self):
        assert Invoice.from_dict({}) is None
        assert Invoice.from_dict(None) is None


class TestCashPaymentDetails:
    """Test the two-party confirmation gate."""

    def test_requires_both_parties(self):
        details = CashPaymentDetails(amount=500)
        assert details.can_be_verified() is False

        details.professional_marked_received = True
        assert details.can_be_verified() is False

        details.customer_confirmed = True
        assert details.can_be_verified() is True

    def test_open_dispute_blocks_verification(self):
        details = CashPaymentDetails(
            amount=500,
            professional_marked_received=True,
            customer_confirmed=True,
            dispute_raised=True,
            dispute=CashDispute(
                raised_by=CashParty.CUSTOMER,
                reason="Paid less",
                raised_at=datetime.now(timezone.utc),
            ),
        )
        assert details.can_be_verified() is False

        details.dispute.status = DisputeStatus.RESOLVED
        assert details.can_be_verified() is True


class TestBankAccount:
    """Test BankAccount value object."""

    def test_required_fields(self):
        with pytest.raises(RequiredFieldError):
            BankAccount(
                account_holder_name="",
                account_number="1234567890",
                ifsc_code="HDFC0001234",
                bank_name="HDFC",
            )

    def test_masks_account_number(self):
        account = BankAccount(
            account_holder_name="Ravi Kumar",
            account_number="1234567890",
            ifsc_code="hdfc0001234",
            bank_name="HDFC",
        )
        assert account.masked_account_number == "****7890"
        assert account.ifsc_code == "HDFC0001234"

    def test_account_type(self):
        with pytest.raises(ValidationError):
            BankAccount(
                account_holder_name="Ravi Kumar",
                account_number="1234567890",
                ifsc_code="HDFC0001234",
                bank_name="HDFC",
                account_type="joint",
            )


class TestStatusHistoryEntry:
    def test_naive_timestamps_read_back_as_utc(self):
        entry = StatusHistoryEntry.from_dict(
            {"status": "accepted", "changed_at": "2026-01-01T10:00:00"}
        )
        assert entry.changed_at.tzinfo is not None
        assert entry.changed_at == from_iso("2026-01-01T10:00:00+00:00")
