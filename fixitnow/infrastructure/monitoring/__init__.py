"""
Monitoring package.
"""

from .metrics import get_metrics, get_metrics_content_type

__all__ = [
    "get_metrics",
    "get_metrics_content_type",
]
