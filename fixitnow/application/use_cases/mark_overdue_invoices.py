"""Mark overdue invoices use case."""

from datetime import datetime
from typing import Optional

from fixitnow.application.interfaces.repositories import JobRepositoryInterface
from fixitnow.config.logging import get_logger
from fixitnow.config.settings import settings
from fixitnow.domain.exceptions.state_error import ConcurrencyConflictError
from fixitnow.domain.value_objects.timestamps import utcnow
from fixitnow.infrastructure.database.repositories.transaction_repository import (
    TransactionService,
)
from fixitnow.infrastructure.monitoring.metrics import record_invoices_overdue

logger = get_logger(__name__)


class MarkOverdueInvoicesUseCase:
    """Use case flagging unpaid invoices past their due date."""

    def __init__(
        self,
        job_repo: JobRepositoryInterface,
        transaction_service: TransactionService,
    ):
        self.job_repo = job_repo
        self.transaction_service = transaction_service

    async def execute(
        self, now: Optional[datetime] = None, limit: Optional[int] = None
    ) -> int:
        """Returns the number of invoices marked overdue."""
        now = now or utcnow()
        limit = limit or settings.OVERDUE_INVOICE_BATCH_SIZE

        jobs = await self.job_repo.find_overdue_invoices(now, limit=limit)
        marked = 0

        for job in jobs:
            if not job.invoice or not job.invoice.is_overdue(now):
                continue
            job.invoice = job.invoice.mark_overdue()
            try:
                await self.job_repo.save(job)
            except ConcurrencyConflictError:
                # Changed since it was read; the next sweep picks it up again
                logger.debug("Skipping invoice modified concurrently", job_id=str(job.id))
                continue
            marked += 1

        await self.transaction_service.commit()

        record_invoices_overdue(marked)
        logger.info("Overdue invoice sweep finished", checked=len(jobs), marked=marked)
        return marked
