"""
Domain exceptions package.
"""

from .lifecycle_error import LifecycleError
from .not_found_error import NotFoundError
from .state_error import (
    ConcurrencyConflictError,
    ForbiddenActionError,
    IllegalStateError,
)
from .validation_error import (
    InvalidFormatError,
    InvalidStatusError,
    RequiredFieldError,
    ValidationError,
)

__all__ = [
    "ConcurrencyConflictError",
    "ForbiddenActionError",
    "IllegalStateError",
    "InvalidFormatError",
    "InvalidStatusError",
    "LifecycleError",
    "NotFoundError",
    "RequiredFieldError",
    "ValidationError",
]
