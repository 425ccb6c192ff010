"""
Celery tasks for invoice maintenance.
"""

import asyncio
import uuid
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from fixitnow.background.celery_app import celery_app
from fixitnow.config.logging import bind_request_context, get_logger

logger = get_logger(__name__)


def run_async_in_new_loop(coro):
    """Run ``coro`` on a fresh event loop owned by this task."""
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


async def mark_overdue_invoices(
    session_factory: Optional[async_sessionmaker[AsyncSession]] = None,
    limit: Optional[int] = None,
) -> int:
    """Flag unpaid invoices past their due date, returning how many changed."""
    # Import here to avoid circular imports
    from fixitnow.application.use_cases.mark_overdue_invoices import (
        MarkOverdueInvoicesUseCase,
    )
    from fixitnow.config.database import isolated_session_factory
    from fixitnow.infrastructure.database.repositories.job_repository import (
        JobRepository,
    )
    from fixitnow.infrastructure.database.repositories.transaction_repository import (
        TransactionService,
    )

    async def sweep(factory: async_sessionmaker[AsyncSession]) -> int:
        async with factory() as session:
            use_case = MarkOverdueInvoicesUseCase(
                job_repo=JobRepository(session),
                transaction_service=TransactionService(session),
            )
            return await use_case.execute(limit=limit)

    if session_factory is not None:
        return await sweep(session_factory)
    async with isolated_session_factory() as factory:
        return await sweep(factory)


@celery_app.task(bind=True, max_retries=2, name="mark_overdue_invoices_task")
def mark_overdue_invoices_task(self):
    """Periodic sweep marking overdue invoices."""
    bind_request_context(task_id=self.request.id or uuid.uuid4().hex)
    logger.info(
        "Starting overdue invoice sweep",
        attempt=self.request.retries + 1,
        max_retries=self.max_retries,
    )
    try:
        marked = run_async_in_new_loop(mark_overdue_invoices())
    except Exception as e:
        logger.error(
            "Overdue invoice sweep failed",
            error=str(e),
            error_type=type(e).__name__,
            attempt=self.request.retries + 1,
        )
        raise self.retry(exc=e, countdown=2**self.request.retries)

    logger.info("Overdue invoice sweep completed", invoices_marked=marked)
    return {"status": "success", "invoices_marked": marked}
