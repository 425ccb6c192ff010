"""
Background tasks package.
"""

from .invoices import mark_overdue_invoices, mark_overdue_invoices_task

__all__ = [
    "mark_overdue_invoices",
    "mark_overdue_invoices_task",
]
