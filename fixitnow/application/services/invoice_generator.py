"""
Invoice generator for completed jobs.
"""

import random
from datetime import datetime, timedelta
from typing import Callable, Optional

from fixitnow.config.settings import settings
from fixitnow.domain.entities.job import Job
from fixitnow.domain.exceptions.state_error import IllegalStateError
from fixitnow.domain.value_objects.invoice import Invoice, InvoiceLineItem
from fixitnow.domain.value_objects.job_status import JobStatus
from fixitnow.domain.value_objects.pricing import round_money
from fixitnow.domain.value_objects.timestamps import utcnow


def generate_invoice_number(now: Optional[datetime] = None) -> str:
    """Build an ``INV-<epoch millis>-<3 random digits>`` number."""
    now = now or utcnow()
    millis = int(now.timestamp() * 1000)
    return f"INV-{millis}-{random.randint(0, 999):03d}"


class InvoiceGenerator:
    """Builds the customer-facing invoice of a completed job."""

    def __init__(
        self,
        tax_rate: Optional[float] = None,
        due_days: Optional[int] = None,
        number_factory: Callable[[Optional[datetime]], str] = generate_invoice_number,
    ):
        self.tax_rate = settings.INVOICE_TAX_RATE if tax_rate is None else tax_rate
        self.due_days = settings.INVOICE_DUE_DAYS if due_days is None else due_days
        self.number_factory = number_factory

    def build(self, job: Job, issued_at: Optional[datetime] = None) -> Invoice:
        """
        Compute a fresh invoice for ``job`` without attaching it.

        Raises:
            IllegalStateError: If the job is not completed
        """
        if job.status != JobStatus.COMPLETED:
            raise IllegalStateError(
                "Cannot invoice an incomplete job", current_state=job.status.value
            )

        issued_at = issued_at or utcnow()
        base_amount = round_money(job.resolve_settlement_amount())

        items = [
            InvoiceLineItem(
                description=f"{job.category.value} Service - {job.display_title}",
                quantity=1,
                unit_price=base_amount,
                total=base_amount,
            )
        ]
        if job.tip_amount and job.tip_amount > 0:
            tip = round_money(job.tip_amount)
            items.append(
                InvoiceLineItem(
                    description="Tip Amount", quantity=1, unit_price=tip, total=tip
                )
            )

        subtotal = round_money(sum(item.total for item in items))
        tax = round_money(subtotal * self.tax_rate)
        total = round_money(subtotal + tax)

        return Invoice(
            number=self.number_factory(issued_at),
            items=tuple(items),
            subtotal=subtotal,
            tax=tax,
            tax_rate=self.tax_rate,
            total=total,
            issued_at=issued_at,
            due_date=issued_at + timedelta(days=self.due_days),
        )

    def ensure_invoice(self, job: Job, issued_at: Optional[datetime] = None) -> bool:
        """
        Attach an invoice to ``job`` unless one already exists.

        Returns True when a new invoice was generated.
        """
        if job.status != JobStatus.COMPLETED:
            raise IllegalStateError(
                "Cannot invoice an incomplete job", current_state=job.status.value
            )
        if job.invoice is not None and job.invoice.number:
            return False
        job.attach_invoice(self.build(job, issued_at))
        return True
