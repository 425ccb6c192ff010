"""
Repository interfaces for dependency inversion.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from fixitnow.domain.entities.job import Job
from fixitnow.domain.entities.payout import Payout
from fixitnow.domain.events.party_notification import PartyNotification
from fixitnow.domain.value_objects.payment_status import PayoutStatus


class JobRepositoryInterface(ABC):
    """Job repository interface."""

    @abstractmethod
    async def create(self, job: Job) -> Job:
        """
        Persist a new job.

        The job is reset to its initial lifecycle state and its location
        point is sanitized; a malformed point is stored as absent.
        """
        pass

    @abstractmethod
    async def get_by_id(self, job_id: UUID) -> Optional[Job]:
        """Get job by ID."""
        pass

    @abstractmethod
    async def save(self, job: Job) -> Job:
        """
        Write the full job state if nobody else changed it since it was read.

        Raises ConcurrencyConflictError when the stored version differs
        from ``job.version``.
        """
        pass

    @abstractmethod
    async def apply_update(
        self,
        job_id: UUID,
        changes: Dict[str, Any],
        expected_version: Optional[int] = None,
    ) -> Job:
        """
        Apply a partial update to a job.

        A malformed ``location_point`` in ``changes`` is stored as an
        explicit unset instead of being written or ignored.
        """
        pass

    @abstractmethod
    async def find_overdue_invoices(
        self, now: datetime, limit: int = 200
    ) -> List[Job]:
        """Find jobs whose unpaid invoice is past its due date."""
        pass

    @abstractmethod
    async def get_settled_earnings(self, professional_id: UUID) -> float:
        """Sum provider earnings of completed jobs whose payment has settled."""
        pass


class PayoutRepositoryInterface(ABC):
    """Payout repository interface."""

    @abstractmethod
    async def create(self, payout: Payout) -> Payout:
        """Create a new payout."""
        pass

    @abstractmethod
    async def get_by_id(self, payout_id: UUID) -> Optional[Payout]:
        """Get payout by ID."""
        pass

    @abstractmethod
    async def update(self, payout: Payout) -> Payout:
        """Update payout, recomputing its net amount."""
        pass

    @abstractmethod
    async def find_by_professional(
        self,
        professional_id: UUID,
        status: Optional[PayoutStatus] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Payout]:
        """Find payouts requested by a professional, newest first."""
        pass

    @abstractmethod
    async def has_outstanding(self, professional_id: UUID) -> bool:
        """Check if the professional has a pending or processing payout."""
        pass

    @abstractmethod
    async def get_reserved_amount(self, professional_id: UUID) -> float:
        """Sum of pending, processing and completed payouts."""
        pass


class NotificationRepositoryInterface(ABC):
    """Notification repository interface."""

    @abstractmethod
    async def create(self, notification: PartyNotification) -> None:
        """Store a notification for its recipient."""
        pass
