"""
Status history value object.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from uuid import UUID

from fixitnow.domain.value_objects.actor import ActorKind
from fixitnow.domain.value_objects.job_status import JobStatus
from fixitnow.domain.value_objects.timestamps import from_iso, to_iso


@dataclass(frozen=True)
class StatusHistoryEntry:
    """One record of the append-only status audit trail."""

    status: JobStatus
    changed_at: datetime
    changed_by: Optional[UUID] = None
    changed_by_model: Optional[ActorKind] = None
    notes: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "changed_at": to_iso(self.changed_at),
            "changed_by": str(self.changed_by) if self.changed_by else None,
            "changed_by_model": self.changed_by_model.value
            if self.changed_by_model
            else None,
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "StatusHistoryEntry":
        return cls(
            status=JobStatus(data["status"]),
            changed_at=from_iso(data["changed_at"]),
            changed_by=UUID(data["changed_by"]) if data.get("changed_by") else None,
            changed_by_model=ActorKind(data["changed_by_model"])
            if data.get("changed_by_model")
            else None,
            notes=data.get("notes"),
        )
