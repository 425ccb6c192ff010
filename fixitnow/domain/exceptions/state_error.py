"""
State-related domain exceptions.
"""

from typing import Optional

from .lifecycle_error import LifecycleError


class IllegalStateError(LifecycleError):
    """Raised when an operation is not allowed in the current state."""

    def __init__(self, message: str, current_state: Optional[str] = None):
        self.current_state = current_state
        super().__init__(message)


class ForbiddenActionError(LifecycleError):
    """Raised when the actor is not allowed to perform the operation."""

    pass


class ConcurrencyConflictError(LifecycleError):
    """Raised when a competing write invalidated the operation."""

    def __init__(self, entity: str, entity_id: str, expected_version: Optional[int] = None):
        self.entity = entity
        self.entity_id = entity_id
        self.expected_version = expected_version
        message = f"{entity} {entity_id} was modified concurrently"
        if expected_version is not None:
            message += f" (expected version {expected_version})"
        super().__init__(message)
