"""
Lookup-related domain exceptions.
"""

from .lifecycle_error import LifecycleError


class NotFoundError(LifecycleError):
    """Raised when a referenced entity does not exist."""

    def __init__(self, entity: str, entity_id: str):
        self.entity = entity
        self.entity_id = str(entity_id)
        super().__init__(f"{entity} {entity_id} not found")
