"""
API routes package.
"""

from .health import router as health_router
from .jobs import router as jobs_router
from .payments import router as payments_router
from .payouts import router as payouts_router

__all__ = [
    "health_router",
    "jobs_router",
    "payments_router",
    "payouts_router",
]
