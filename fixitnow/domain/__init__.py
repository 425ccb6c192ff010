"""
Domain package.
"""

from .entities import *
from .events import *
from .exceptions import *
from .value_objects import *

__all__ = [
    # Entities
    "Job",
    "Payout",
    # Events
    "NotificationType",
    "PartyNotification",
    # Exceptions
    "ConcurrencyConflictError",
    "ForbiddenActionError",
    "IllegalStateError",
    "LifecycleError",
    "NotFoundError",
    "ValidationError",
    # Value Objects
    "ActorRef",
    "Invoice",
    "JobStatus",
    "LocationPoint",
    "PaymentStatus",
    "PayoutStatus",
]
