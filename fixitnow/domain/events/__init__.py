"""
Domain events package.
"""

from .party_notification import NotificationType, PartyNotification

__all__ = [
    "NotificationType",
    "PartyNotification",
]
