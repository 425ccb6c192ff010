"""
Retry handler re-running read-modify-write cycles that lost an optimistic lock.
"""

from typing import Awaitable, Callable, Optional, TypeVar

from fixitnow.config.logging import get_logger
from fixitnow.config.settings import settings
from fixitnow.domain.exceptions.state_error import ConcurrencyConflictError
from fixitnow.infrastructure.database.repositories.transaction_repository import (
    TransactionService,
)
from fixitnow.infrastructure.monitoring.metrics import record_optimistic_lock_conflict

logger = get_logger(__name__)

T = TypeVar("T")


class OptimisticRetryHandler:
    """Run an operation in a transaction and replay it on version conflicts."""

    def __init__(
        self,
        transaction_service: TransactionService,
        max_retries: Optional[int] = None,
    ):
        self.transaction_service = transaction_service
        self.max_retries = (
            settings.OPTIMISTIC_LOCK_MAX_RETRIES if max_retries is None else max_retries
        )
        self.logger = logger

    async def run(
        self,
        operation: Callable[[], Awaitable[T]],
        operation_key: str = "job_update",
    ) -> T:
        """
        Execute ``operation`` and commit, retrying the whole cycle on conflict.

        The operation must reload whatever it mutates, since every retry
        starts from a rolled back session.

        Args:
            operation: Async function performing load, mutate and save
            operation_key: Name used in logs and metrics

        Returns:
            Result of the operation

        Raises:
            ConcurrencyConflictError: If every attempt lost the race
        """
        for attempt in range(self.max_retries + 1):
            try:
                result = await operation()
                await self.transaction_service.commit()
                return result

            except ConcurrencyConflictError as e:
                await self.transaction_service.rollback()
                record_optimistic_lock_conflict(operation_key)

                if attempt == self.max_retries:
                    self.logger.error(
                        "Operation lost the optimistic lock on every attempt",
                        operation_key=operation_key,
                        total_attempts=attempt + 1,
                        error=str(e),
                    )
                    raise

                self.logger.warning(
                    "Concurrent modification detected, retrying",
                    operation_key=operation_key,
                    attempt=attempt + 1,
                    max_retries=self.max_retries,
                    entity_id=e.entity_id,
                )

            except Exception:
                await self.transaction_service.rollback()
                raise
