"""
Domain value objects package.
"""

from .actor import ActorKind, ActorRef, CashParty
from .bank_account import BankAccount
from .cash_payment import CashDispute, CashPaymentDetails, ReceiptPhoto
from .invoice import Invoice, InvoiceLineItem
from .job_status import JobCategory, JobPriority, JobStatus
from .location import JobLocation, LocationPoint
from .message import JobMessage
from .payment_status import (
    DisputeStatus,
    InvoicePaymentStatus,
    PaymentMethod,
    PaymentStatus,
    PayoutStatus,
)
from .pricing import Budget, Commission, round_money
from .status_history import StatusHistoryEntry

__all__ = [
    "ActorKind",
    "ActorRef",
    "BankAccount",
    "Budget",
    "CashDispute",
    "CashParty",
    "CashPaymentDetails",
    "Commission",
    "DisputeStatus",
    "Invoice",
    "InvoiceLineItem",
    "InvoicePaymentStatus",
    "JobCategory",
    "JobLocation",
    "JobMessage",
    "JobPriority",
    "JobStatus",
    "LocationPoint",
    "PaymentMethod",
    "PaymentStatus",
    "PayoutStatus",
    "ReceiptPhoto",
    "StatusHistoryEntry",
    "round_money",
]
