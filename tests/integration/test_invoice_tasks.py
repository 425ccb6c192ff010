"""Integration tests for the overdue invoice sweep."""

from datetime import timedelta

import pytest

from fixitnow.application.services.invoice_generator import InvoiceGenerator
from fixitnow.background.tasks.invoices import mark_overdue_invoices
from fixitnow.domain.value_objects.job_status import JobStatus
from fixitnow.domain.value_objects.payment_status import InvoicePaymentStatus
from fixitnow.domain.value_objects.timestamps import utcnow
from fixitnow.infrastructure.database.repositories.job_repository import JobRepository


@pytest.mark.integration
@pytest.mark.asyncio
async def test_sweep_marks_past_due_invoices(session_factory, make_job, professional):
    generator = InvoiceGenerator(due_days=7)
    async with session_factory() as session:
        repository = JobRepository(session)
        job = await repository.create(make_job(fixed_rate=1200))
        job.professional_id = professional.id
        job.transition_to(JobStatus.ACCEPTED, professional)
        job.transition_to(JobStatus.COMPLETED, professional)
        generator.ensure_invoice(job, issued_at=utcnow() - timedelta(days=10))
        await repository.save(job)
        await session.commit()

    marked = await mark_overdue_invoices(session_factory)

    async with session_factory() as session:
        stored = await JobRepository(session).get_by_id(job.id)
    assert marked == 1
    assert stored.invoice.payment_status == InvoicePaymentStatus.OVERDUE
    assert stored.version == 2

    assert await mark_overdue_invoices(session_factory) == 0
