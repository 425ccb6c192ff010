"""
Notifier storing notifications in the database.
"""

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from fixitnow.application.interfaces.services import NotifierInterface
from fixitnow.config.logging import get_logger
from fixitnow.domain.events.party_notification import PartyNotification
from fixitnow.infrastructure.database.repositories.notification_repository import (
    NotificationRepository,
)

logger = get_logger(__name__)


class DatabaseNotifier(NotifierInterface):
    """
    Writes each notification in its own short transaction.

    The lifecycle write it follows has already been committed, so a failure
    here cannot undo it.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def notify(self, notification: PartyNotification) -> None:
        async with self.session_factory() as session:
            await NotificationRepository(session).create(notification)
            await session.commit()

        logger.debug(
            "Notification stored",
            notification_type=notification.type.value,
            recipient_id=str(notification.recipient_id),
        )
