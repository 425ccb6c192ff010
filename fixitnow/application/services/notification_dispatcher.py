"""
Best-effort notification dispatch.
"""

from typing import Iterable

from fixitnow.application.interfaces.services import NotifierInterface
from fixitnow.config.logging import get_logger
from fixitnow.domain.events.party_notification import PartyNotification
from fixitnow.infrastructure.monitoring.metrics import record_notification

logger = get_logger(__name__)


class NotificationDispatcher:
    """
    Deliver notifications without ever failing the calling operation.

    Dispatch runs after the lifecycle change is committed. Delivery errors
    are logged and counted, then dropped.
    """

    def __init__(self, notifier: NotifierInterface):
        self.notifier = notifier
        self.logger = logger

    async def dispatch(self, notification: PartyNotification) -> bool:
        try:
            await self.notifier.notify(notification)
        except Exception as e:
            record_notification(notification.type.value, success=False)
            self.logger.warning(
                "Failed to deliver notification",
                notification_type=notification.type.value,
                recipient_id=str(notification.recipient_id),
                related_job_id=str(notification.related_job_id)
                if notification.related_job_id
                else None,
                error=str(e),
            )
            return False

        record_notification(notification.type.value, success=True)
        return True

    async def dispatch_all(self, notifications: Iterable[PartyNotification]) -> int:
        """Dispatch every notification, returning how many were delivered."""
        delivered = 0
        for notification in notifications:
            if await self.dispatch(notification):
                delivered += 1
        return delivered
