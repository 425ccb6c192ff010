"""
Job status value objects.
"""

from enum import Enum


class JobStatus(str, Enum):
    """Job lifecycle status enumeration."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    def is_terminal(self) -> bool:
        """Check if status is final (no more transitions)."""
        return self in [self.COMPLETED, self.CANCELLED]

    def can_be_cancelled(self) -> bool:
        """Check if a job in this status may still be cancelled."""
        return self in [self.PENDING, self.ACCEPTED, self.IN_PROGRESS]

    def can_transition_to(self, new_status: "JobStatus") -> bool:
        """Check if moving to ``new_status`` is a valid forward step."""
        return new_status in _VALID_TRANSITIONS[self]

    @classmethod
    def values(cls) -> list[str]:
        return [status.value for status in cls]


_VALID_TRANSITIONS: dict[JobStatus, set[JobStatus]] = {
    JobStatus.PENDING: {JobStatus.ACCEPTED, JobStatus.CANCELLED},
    JobStatus.ACCEPTED: {
        JobStatus.IN_PROGRESS,
        JobStatus.COMPLETED,
        JobStatus.CANCELLED,
    },
    JobStatus.IN_PROGRESS: {JobStatus.COMPLETED, JobStatus.CANCELLED},
    JobStatus.COMPLETED: set(),
    JobStatus.CANCELLED: set(),
}


class JobCategory(str, Enum):
    """Closed set of service categories."""

    PLUMBING = "Plumbing"
    ELECTRICAL = "Electrical"
    CARPENTRY = "Carpentry"
    PAINTING = "Painting"
    CLEANING = "Cleaning"
    APPLIANCE_REPAIR = "Appliance Repair"
    HVAC = "HVAC"
    LANDSCAPING = "Landscaping"
    HANDYMAN = "Handyman"
    OTHER = "Other"


class JobPriority(str, Enum):
    """Job priority enumeration."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"
