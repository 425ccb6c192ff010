"""
Service interfaces for dependency inversion.
"""

from abc import ABC, abstractmethod

from fixitnow.domain.events.party_notification import PartyNotification


class NotifierInterface(ABC):
    """Interface for delivering notifications to job parties."""

    @abstractmethod
    async def notify(self, notification: PartyNotification) -> None:
        """Deliver a notification; may raise on delivery failure."""
        pass
