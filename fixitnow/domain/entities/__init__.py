"""
Domain entities package.
"""

from .job import Job
from .payout import Payout

__all__ = ["Job", "Payout"]
