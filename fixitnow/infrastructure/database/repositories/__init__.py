"""
Database repositories package.
"""

from .job_repository import JobRepository
from .notification_repository import NotificationRepository
from .payout_repository import PayoutRepository
from .transaction_repository import TransactionService

__all__ = [
    "JobRepository",
    "NotificationRepository",
    "PayoutRepository",
    "TransactionService",
]
