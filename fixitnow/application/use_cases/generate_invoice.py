"""Generate invoice use case."""

from uuid import UUID

from fixitnow.application.interfaces.repositories import JobRepositoryInterface
from fixitnow.application.services.invoice_generator import InvoiceGenerator
from fixitnow.application.services.retry_handler import OptimisticRetryHandler
from fixitnow.application.use_cases.job_queries import load_job
from fixitnow.config.logging import get_logger
from fixitnow.domain.value_objects.invoice import Invoice
from fixitnow.infrastructure.monitoring.metrics import record_invoice_generated

logger = get_logger(__name__)


class GenerateInvoiceUseCase:
    """
    Use case for invoicing a completed job.

    Generation is idempotent: a job that already carries an invoice gets
    it back unchanged and nothing is written.
    """

    def __init__(
        self,
        job_repo: JobRepositoryInterface,
        invoice_generator: InvoiceGenerator,
        retry_handler: OptimisticRetryHandler,
    ):
        self.job_repo = job_repo
        self.invoice_generator = invoice_generator
        self.retry_handler = retry_handler

    async def execute(self, job_id: UUID) -> Invoice:
        generated = False

        async def operation() -> Invoice:
            nonlocal generated
            job = await load_job(self.job_repo, job_id)
            generated = self.invoice_generator.ensure_invoice(job)
            if generated:
                job = await self.job_repo.save(job)
            return job.invoice

        invoice = await self.retry_handler.run(operation, operation_key="generate_invoice")

        if generated:
            record_invoice_generated()
            logger.info(
                "Invoice generated",
                job_id=str(job_id),
                invoice_number=invoice.number,
                total=invoice.total,
            )
        else:
            logger.debug(
                "Invoice already exists", job_id=str(job_id), invoice_number=invoice.number
            )
        return invoice
