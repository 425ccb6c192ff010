"""
Unit tests for CommissionCalculator and InvoiceGenerator.
"""

from datetime import datetime, timedelta, timezone

import pytest

from fixitnow.application.services.commission_calculator import CommissionCalculator
from fixitnow.application.services.invoice_generator import (
    InvoiceGenerator,
    generate_invoice_number,
)
from fixitnow.config.settings import settings
from fixitnow.domain.exceptions.state_error import IllegalStateError
from fixitnow.domain.exceptions.validation_error import ValidationError
from fixitnow.domain.value_objects.job_status import JobStatus
from fixitnow.domain.value_objects.payment_status import PaymentMethod

ISSUED_AT = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


class TestCommissionCalculator:
    """Test cases for CommissionCalculator."""

    def test_ten_percent_split(self):
        commission = CommissionCalculator(commission_rate=0.10).calculate(1000)

        assert commission.company_fee == 100
        assert commission.total == 100
        assert commission.provider_earnings == 900
        assert commission.commission_rate == 0.10

    def test_split_adds_up(self):
        commission = CommissionCalculator(commission_rate=0.15).calculate(333.33)
        assert commission.company_fee + commission.provider_earnings == pytest.approx(333.33)

    def test_cash_rate(self):
        calculator = CommissionCalculator(commission_rate=0.10, cash_commission_rate=0.05)

        assert calculator.calculate(1000, PaymentMethod.CASH).company_fee == 50
        assert calculator.calculate(1000, PaymentMethod.ONLINE).company_fee == 100

    def test_cash_rate_defaults_to_standard_rate(self):
        calculator = CommissionCalculator(commission_rate=0.2)
        assert calculator.rate_for(PaymentMethod.CASH) == 0.2

    def test_unset_cash_rate_charges_standard_commission(self, monkeypatch):
        monkeypatch.setattr(settings, "COMMISSION_RATE", 0.10)
        monkeypatch.setattr(settings, "CASH_COMMISSION_RATE", None)

        commission = CommissionCalculator().calculate(800, PaymentMethod.CASH)

        assert commission.company_fee == 80
        assert commission.provider_earnings == 720

    def test_commission_free_cash(self, monkeypatch):
        monkeypatch.setattr(settings, "COMMISSION_RATE", 0.10)
        monkeypatch.setattr(settings, "CASH_COMMISSION_RATE", 0.0)

        commission = CommissionCalculator().calculate(800, PaymentMethod.CASH)

        assert commission.company_fee == 0
        assert commission.provider_earnings == 800

    def test_zero_amount(self):
        commission = CommissionCalculator(commission_rate=0.10).calculate(0)
        assert commission.company_fee == 0
        assert commission.provider_earnings == 0

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError):
            CommissionCalculator(commission_rate=0.10).calculate(-1)


class TestInvoiceNumber:
    def test_format(self):
        number = generate_invoice_number(ISSUED_AT)
        prefix, millis, suffix = number.split("-")

        assert prefix == "INV"
        assert millis == str(int(ISSUED_AT.timestamp() * 1000))
        assert len(suffix) == 3 and suffix.isdigit()


class TestInvoiceGenerator:
    """Test cases for InvoiceGenerator."""

    @pytest.fixture
    def generator(self):
        return InvoiceGenerator(
            tax_rate=0.18, due_days=7, number_factory=lambda now: "INV-1-001"
        )

    def test_service_and_tip_lines(self, generator, make_job):
        job = make_job(final_price=1000, tip_amount=100)
        job.status = JobStatus.COMPLETED

        invoice = generator.build(job, ISSUED_AT)

        assert [item.description for item in invoice.items] == [
            "Plumbing Service - Fix leaking tap",
            "Tip Amount",
        ]
        assert invoice.subtotal == 1100
        assert invoice.tax == 198
        assert invoice.total == 1298
        assert invoice.due_date == ISSUED_AT + timedelta(days=7)
        assert invoice.payment_status.value == "pending"

    def test_no_tip_line_without_tip(self, generator, make_job):
        job = make_job(fixed_rate=500)
        job.status = JobStatus.COMPLETED

        invoice = generator.build(job, ISSUED_AT)

        assert len(invoice.items) == 1
        assert invoice.total == 590

    def test_incomplete_job_cannot_be_invoiced(self, generator, make_job):
        with pytest.raises(IllegalStateError, match="Cannot invoice an incomplete job"):
            generator.build(make_job(), ISSUED_AT)

    def test_ensure_invoice_is_idempotent(self, make_job):
        numbers = iter(["INV-1-001", "INV-2-002"])
        generator = InvoiceGenerator(number_factory=lambda now: next(numbers))
        job = make_job(fixed_rate=500)
        job.status = JobStatus.COMPLETED

        assert generator.ensure_invoice(job) is True
        first = job.invoice
        assert generator.ensure_invoice(job) is False
        assert job.invoice is first
        assert job.invoice.number == "INV-1-001"
