"""
Transaction boundary around a request or task session.
"""

from typing import Awaitable, Callable, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from fixitnow.config.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class TransactionService:
    """
    Owns commit and rollback for one session.

    Repositories only flush; nothing becomes visible to other sessions until
    this service commits.
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.logger = logger

    async def execute_in_transaction(
        self, operation: Callable[[], Awaitable[T]], name: str = "operation"
    ) -> T:
        """Run ``operation`` and commit, or roll back and re-raise."""
        try:
            result = await operation()
        except Exception as e:
            await self.rollback()
            self.logger.warning(
                "Transaction rolled back",
                operation=name,
                error_type=type(e).__name__,
                error=str(e),
            )
            raise

        await self.commit()
        return result

    async def commit(self) -> None:
        await self.session.commit()
        self.logger.debug("Transaction committed")

    async def rollback(self) -> None:
        await self.session.rollback()
        self.logger.debug("Transaction rolled back")
