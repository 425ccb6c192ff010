"""
Database models package.
"""

from .base import Base, BaseModel
from .job import JobModel
from .notification import NotificationModel
from .payout import PayoutModel

__all__ = [
    "Base",
    "BaseModel",
    "JobModel",
    "NotificationModel",
    "PayoutModel",
]
