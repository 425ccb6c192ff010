"""
Notification delivery package.
"""

from .database_notifier import DatabaseNotifier

__all__ = ["DatabaseNotifier"]
