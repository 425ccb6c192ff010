"""
API package.
"""

from .app import create_app
from .dependencies import *
from .middleware import *
from .routes import *
from .schemas import *

__all__ = [
    "create_app",

    # Dependencies
    "ActorDep",
    "JobRepositoryDep",
    "PayoutRepositoryDep",
    "RetryHandlerDep",
    "TransactionServiceDep",

    # Middleware
    "ErrorHandlerMiddleware",
    "LoggingMiddleware",

    # Routes
    "health_router",
    "jobs_router",
    "payments_router",
    "payouts_router",

    # Schemas
    "BaseResponse",
    "DataResponse",
    "ErrorResponse",
    "JobCreateRequest",
    "PayoutCreateRequest",
]
