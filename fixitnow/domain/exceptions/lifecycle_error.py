"""
Base exception for job lifecycle errors.
"""


class LifecycleError(Exception):
    """Base exception for every error raised by the lifecycle core."""

    pass
