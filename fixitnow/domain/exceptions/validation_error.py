"""
Validation-related domain exceptions.
"""

from typing import Iterable

from .lifecycle_error import LifecycleError


class ValidationError(LifecycleError, ValueError):
    """Base exception for validation errors."""

    pass


class RequiredFieldError(ValidationError):
    """Raised when required field is missing."""

    def __init__(self, field_name: str):
        self.field_name = field_name
        super().__init__(f"Required field '{field_name}' is missing")


class InvalidFormatError(ValidationError):
    """Raised when field format is invalid."""

    def __init__(self, field_name: str, expected_format: str):
        self.field_name = field_name
        self.expected_format = expected_format
        super().__init__(
            f"Field '{field_name}' has invalid format, expected: {expected_format}"
        )


class InvalidStatusError(ValidationError):
    """Raised when a status value is not part of the known set."""

    def __init__(self, status: str, allowed: Iterable[str]):
        self.status = status
        self.allowed = list(allowed)
        super().__init__(
            f"Invalid status '{status}', expected one of: {', '.join(self.allowed)}"
        )
