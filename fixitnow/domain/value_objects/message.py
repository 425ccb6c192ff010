"""
Job message value object.
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from fixitnow.domain.value_objects.actor import ActorKind
from fixitnow.domain.value_objects.timestamps import from_iso, to_iso


@dataclass(frozen=True)
class JobMessage:
    """Chat message exchanged between customer and professional on a job."""

    sender: UUID
    sender_model: ActorKind
    message: str
    timestamp: datetime

    def to_dict(self) -> dict:
        return {
            "sender": str(self.sender),
            "sender_model": self.sender_model.value,
            "message": self.message,
            "timestamp": to_iso(self.timestamp),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "JobMessage":
        return cls(
            sender=UUID(data["sender"]),
            sender_model=ActorKind(data["sender_model"]),
            message=data["message"],
            timestamp=from_iso(data["timestamp"]),
        )
