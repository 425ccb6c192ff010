"""
Common API schemas.
"""

from typing import Any, Optional

from pydantic import BaseModel


class BaseResponse(BaseModel):
    """Base response schema."""

    success: bool = True
    message: Optional[str] = None


class DataResponse(BaseResponse):
    """Response carrying a payload."""

    data: Any = None


class ErrorResponse(BaseResponse):
    """Error response schema."""

    success: bool = False
    error_type: Optional[str] = None
