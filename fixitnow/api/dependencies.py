"""
FastAPI dependency injection container.
"""

from typing import Annotated, Optional
from uuid import UUID

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from fixitnow.application.interfaces.services import NotifierInterface
from fixitnow.application.services.invoice_generator import InvoiceGenerator
from fixitnow.application.services.job_lifecycle import JobLifecycleService
from fixitnow.application.services.notification_dispatcher import (
    NotificationDispatcher,
)
from fixitnow.application.services.retry_handler import OptimisticRetryHandler
from fixitnow.config.database import async_session_factory, get_db_session
from fixitnow.config.logging import get_logger
from fixitnow.domain.value_objects.actor import ActorKind, ActorRef
from fixitnow.infrastructure.database.repositories.job_repository import JobRepository
from fixitnow.infrastructure.database.repositories.payout_repository import (
    PayoutRepository,
)
from fixitnow.infrastructure.database.repositories.transaction_repository import (
    TransactionService,
)
from fixitnow.infrastructure.notifications.database_notifier import DatabaseNotifier

logger = get_logger(__name__)


# Database Dependencies
async def get_job_repository(
    db: AsyncSession = Depends(get_db_session),
) -> JobRepository:
    """Get job repository instance."""
    return JobRepository(db)


async def get_payout_repository(
    db: AsyncSession = Depends(get_db_session),
) -> PayoutRepository:
    """Get payout repository instance."""
    return PayoutRepository(db)


async def get_transaction_service(
    db: AsyncSession = Depends(get_db_session),
) -> TransactionService:
    """Get transaction service instance."""
    return TransactionService(db)


# Service Dependencies
async def get_retry_handler(
    transaction_service: TransactionService = Depends(get_transaction_service),
) -> OptimisticRetryHandler:
    """Get optimistic retry handler bound to the request transaction."""
    return OptimisticRetryHandler(transaction_service)


async def get_invoice_generator() -> InvoiceGenerator:
    return InvoiceGenerator()


async def get_job_lifecycle(
    invoice_generator: InvoiceGenerator = Depends(get_invoice_generator),
) -> JobLifecycleService:
    """Get job lifecycle service instance."""
    return JobLifecycleService(invoice_generator=invoice_generator)


async def get_notifier() -> NotifierInterface:
    """Get notifier writing to its own session."""
    return DatabaseNotifier(async_session_factory)


async def get_notification_dispatcher(
    notifier: NotifierInterface = Depends(get_notifier),
) -> NotificationDispatcher:
    return NotificationDispatcher(notifier)


# Actor identity, supplied by the upstream gateway that authenticated the caller
async def get_actor(
    x_actor_id: Annotated[Optional[str], Header()] = None,
    x_actor_kind: Annotated[Optional[str], Header()] = None,
) -> ActorRef:
    """Build the acting party from the ``X-Actor-Id`` and ``X-Actor-Kind`` headers."""
    if not x_actor_id or not x_actor_kind:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="X-Actor-Id and X-Actor-Kind headers are required",
        )
    try:
        return ActorRef(kind=ActorKind(x_actor_kind), id=UUID(x_actor_id))
    except ValueError:
        logger.warning("Invalid actor headers", actor_kind=x_actor_kind)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid actor identity",
        )


# Type aliases for cleaner dependency injection
JobRepositoryDep = Annotated[JobRepository, Depends(get_job_repository)]
PayoutRepositoryDep = Annotated[PayoutRepository, Depends(get_payout_repository)]
TransactionServiceDep = Annotated[TransactionService, Depends(get_transaction_service)]
RetryHandlerDep = Annotated[OptimisticRetryHandler, Depends(get_retry_handler)]
InvoiceGeneratorDep = Annotated[InvoiceGenerator, Depends(get_invoice_generator)]
JobLifecycleDep = Annotated[JobLifecycleService, Depends(get_job_lifecycle)]
NotificationDispatcherDep = Annotated[
    NotificationDispatcher, Depends(get_notification_dispatcher)
]
ActorDep = Annotated[ActorRef, Depends(get_actor)]
