"""
Application interfaces package.
"""

from .repositories import (
    JobRepositoryInterface,
    NotificationRepositoryInterface,
    PayoutRepositoryInterface,
)
from .services import NotifierInterface

__all__ = [
    "JobRepositoryInterface",
    "NotificationRepositoryInterface",
    "PayoutRepositoryInterface",
    "NotifierInterface",
]
