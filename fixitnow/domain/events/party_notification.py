"""
Party notification domain event.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional
from uuid import UUID

from fixitnow.domain.value_objects.actor import ActorKind
from fixitnow.domain.value_objects.timestamps import utcnow


class NotificationType(str, Enum):
    """Kinds of notifications emitted by the job lifecycle."""

    JOB_ACCEPTED = "job_accepted"
    JOB_STARTED = "job_started"
    JOB_COMPLETED = "job_completed"
    JOB_CANCELLED = "job_cancelled"
    PAYMENT_RECEIVED = "payment_received"
    PAYMENT_DUE = "payment_due"
    PAYMENT_CONFIRMATION_REQUIRED = "payment_confirmation_required"
    PAYMENT_DISPUTE = "payment_dispute"
    REVIEW_RECEIVED = "review_received"
    MESSAGE_RECEIVED = "message_received"
    PAYOUT_PROCESSED = "payout_processed"
    PAYOUT_FAILED = "payout_failed"


@dataclass
class PartyNotification:
    """Event raised when a party of a job should be told about a change."""

    recipient_id: UUID
    recipient_kind: ActorKind
    type: NotificationType
    title: str
    message: str
    related_job_id: Optional[UUID] = None
    priority: str = "medium"
    action_data: Optional[Dict[str, Any]] = None
    occurred_at: datetime = field(default_factory=utcnow)
