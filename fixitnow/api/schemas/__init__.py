"""
API schemas for the job lifecycle service.
"""

from .common import BaseResponse, DataResponse, ErrorResponse
from .job import JobCreateRequest, JobUpdateRequest, serialize_job
from .payment import PayoutCreateRequest, serialize_payout

__all__ = [
    "BaseResponse",
    "DataResponse",
    "ErrorResponse",
    "JobCreateRequest",
    "JobUpdateRequest",
    "PayoutCreateRequest",
    "serialize_job",
    "serialize_payout",
]
