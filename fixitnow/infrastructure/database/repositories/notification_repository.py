"""Notification repository implementation."""

from sqlalchemy.ext.asyncio import AsyncSession

from fixitnow.application.interfaces.repositories import NotificationRepositoryInterface
from fixitnow.domain.events.party_notification import PartyNotification
from fixitnow.infrastructure.database.models.notification import NotificationModel


class NotificationRepository(NotificationRepositoryInterface):
    """Notification repository implementation."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, notification: PartyNotification) -> None:
        """Store a notification for its recipient."""
        self.db.add(
            NotificationModel(
                recipient_id=notification.recipient_id,
                recipient_model=notification.recipient_kind.value,
                type=notification.type.value,
                title=notification.title[:100],
                message=notification.message[:500],
                related_job_id=notification.related_job_id,
                priority=notification.priority,
                action_data=notification.action_data,
                created_at=notification.occurred_at,
                updated_at=notification.occurred_at,
            )
        )
        await self.db.flush()
