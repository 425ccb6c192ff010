"""
Application services package.
"""

from .commission_calculator import CommissionCalculator
from .invoice_generator import InvoiceGenerator, generate_invoice_number
from .job_lifecycle import JobLifecycleService
from .location_sanitizer import sanitize_job_changes, sanitize_location_point
from .notification_dispatcher import NotificationDispatcher
from .retry_handler import OptimisticRetryHandler

__all__ = [
    "CommissionCalculator",
    "InvoiceGenerator",
    "JobLifecycleService",
    "NotificationDispatcher",
    "OptimisticRetryHandler",
    "generate_invoice_number",
    "sanitize_job_changes",
    "sanitize_location_point",
]
