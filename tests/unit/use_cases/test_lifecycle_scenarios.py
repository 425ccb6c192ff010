"""
End-to-end lifecycle walkthroughs through the use cases.
"""

import pytest

from fixitnow.application.services.commission_calculator import CommissionCalculator
from fixitnow.application.services.invoice_generator import InvoiceGenerator
from fixitnow.application.services.job_lifecycle import JobLifecycleService
from fixitnow.application.use_cases.cash_payment import (
    ConfirmCashPaymentRequest,
    ConfirmCashPaymentUseCase,
    MarkCashReceivedRequest,
    MarkCashReceivedUseCase,
    RaiseCashDisputeRequest,
    RaiseCashDisputeUseCase,
)
from fixitnow.application.use_cases.generate_invoice import GenerateInvoiceUseCase
from fixitnow.application.use_cases.transition_job import (
    CompleteJobRequest,
    TransitionJobRequest,
    TransitionJobUseCase,
)
from fixitnow.application.use_cases.update_job import (
    UpdateJobDetailsRequest,
    UpdateJobDetailsUseCase,
)
from fixitnow.domain.exceptions.state_error import IllegalStateError
from fixitnow.domain.value_objects.job_status import JobStatus
from fixitnow.domain.value_objects.payment_status import PaymentStatus
from fixitnow.domain.value_objects.pricing import Budget


@pytest.fixture
def services(in_memory_job_repository, retry_handler, dispatcher):
    generator = InvoiceGenerator(tax_rate=0.18, due_days=7)
    lifecycle = JobLifecycleService(
        commission_calculator=CommissionCalculator(commission_rate=0.10),
        invoice_generator=generator,
    )
    cash = {
        "job_repo": in_memory_job_repository,
        "retry_handler": retry_handler,
        "dispatcher": dispatcher,
    }
    return {
        "transition": TransitionJobUseCase(lifecycle=lifecycle, **cash),
        "invoice": GenerateInvoiceUseCase(
            job_repo=in_memory_job_repository,
            invoice_generator=generator,
            retry_handler=retry_handler,
        ),
        "received": MarkCashReceivedUseCase(**cash),
        "confirm": ConfirmCashPaymentUseCase(**cash),
        "dispute": RaiseCashDisputeUseCase(**cash),
        "update": UpdateJobDetailsUseCase(
            job_repo=in_memory_job_repository, retry_handler=retry_handler
        ),
    }


async def _walk_to(services, job_id, professional, *statuses):
    for new_status in statuses:
        await services["transition"].execute(
            TransitionJobRequest(job_id=job_id, new_status=new_status, actor=professional)
        )


async def _complete(services, job_id, professional, **terms):
    return await services["transition"].complete(
        CompleteJobRequest(job_id=job_id, actor=professional, **terms)
    )


@pytest.mark.asyncio
async def test_budget_maximum_is_invoiced(
    services, in_memory_job_repository, make_job, professional
):
    job = await in_memory_job_repository.create(make_job(budget=Budget(min=500, max=800)))
    await _walk_to(services, job.id, professional, JobStatus.ACCEPTED, JobStatus.IN_PROGRESS)

    completed = await _complete(services, job.id, professional)

    invoice = completed.invoice
    assert [item.total for item in invoice.items] == [800]
    assert (invoice.subtotal, invoice.tax, invoice.total) == (800, 144, 944)
    assert completed.commission.company_fee == 80
    assert completed.commission.provider_earnings == 720
    assert completed.final_price == 800


@pytest.mark.asyncio
async def test_final_price_and_tip(services, in_memory_job_repository, make_job, professional):
    job = await in_memory_job_repository.create(make_job())
    await _walk_to(services, job.id, professional, JobStatus.ACCEPTED)

    completed = await _complete(
        services, job.id, professional, final_price=500, tip_amount=50
    )

    invoice = completed.invoice
    assert [item.total for item in invoice.items] == [500, 50]
    assert (invoice.subtotal, invoice.tax, invoice.total) == (550, 99, 649)
    assert completed.commission.company_fee == 50
    assert completed.commission.provider_earnings == 450


@pytest.mark.asyncio
async def test_no_invoice_before_completion(
    services, in_memory_job_repository, make_job, professional
):
    job = await in_memory_job_repository.create(make_job(fixed_rate=400))
    await _walk_to(services, job.id, professional, JobStatus.ACCEPTED, JobStatus.IN_PROGRESS)

    with pytest.raises(IllegalStateError):
        await services["invoice"].execute(job.id)

    assert in_memory_job_repository.jobs[job.id].invoice is None


@pytest.mark.asyncio
async def test_cash_needs_both_parties(
    services, in_memory_job_repository, make_job, customer, professional
):
    job = await in_memory_job_repository.create(make_job())
    await _walk_to(services, job.id, professional, JobStatus.ACCEPTED)
    await _complete(services, job.id, professional, final_price=300, payment_method="cash")

    received = await services["received"].execute(
        MarkCashReceivedRequest(job_id=job.id, actor=professional, amount=300)
    )
    assert received.payment_status == PaymentStatus.CASH_PENDING

    confirmed = await services["confirm"].execute(
        ConfirmCashPaymentRequest(job_id=job.id, actor=customer)
    )
    assert confirmed.payment_status == PaymentStatus.CASH_VERIFIED


@pytest.mark.asyncio
async def test_open_dispute_blocks_cash_verification(
    services, in_memory_job_repository, make_job, customer, professional
):
    job = await in_memory_job_repository.create(make_job())
    await _walk_to(services, job.id, professional, JobStatus.ACCEPTED)
    await _complete(services, job.id, professional, final_price=300, payment_method="cash")

    await services["received"].execute(
        MarkCashReceivedRequest(job_id=job.id, actor=professional)
    )
    await services["dispute"].execute(
        RaiseCashDisputeRequest(job_id=job.id, actor=customer, reason="Change not returned")
    )
    result = await services["confirm"].execute(
        ConfirmCashPaymentRequest(job_id=job.id, actor=customer)
    )

    assert result.payment_status != PaymentStatus.CASH_VERIFIED
    assert result.cash_payment_details.customer_confirmed is True


@pytest.mark.asyncio
async def test_one_coordinate_point_is_unset(
    services, in_memory_job_repository, make_job, customer
):
    job = await in_memory_job_repository.create(
        make_job(location_point={"type": "Point", "coordinates": [77.59, 12.97]})
    )

    updated = await services["update"].execute(
        UpdateJobDetailsRequest(
            job_id=job.id,
            actor=customer,
            changes={"location_point": {"type": "Point", "coordinates": [12.9]}},
        )
    )

    assert updated.location_point is None
    assert in_memory_job_repository.jobs[job.id].location_point is None
