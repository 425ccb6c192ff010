"""
Payment-related status value objects.
"""

from enum import Enum


class PaymentStatus(str, Enum):
    """Payment status of a job."""

    PENDING = "pending"
    PAID = "paid"
    REFUNDED = "refunded"
    CASH_PENDING = "cash_pending"
    CASH_VERIFIED = "cash_verified"
    PAYMENT_RECEIVED = "payment_received"
    PAYMENT_CONFIRMED = "payment_confirmed"

    def is_settled(self) -> bool:
        """Check if the customer's payment has been finalized."""
        return self in [self.PAID, self.CASH_VERIFIED, self.PAYMENT_CONFIRMED]


class PaymentMethod(str, Enum):
    """How the customer settles the job."""

    CASH = "cash"
    CARD = "card"
    ONLINE = "online"


class InvoicePaymentStatus(str, Enum):
    """Payment status shown on the invoice."""

    PENDING = "pending"
    PAID = "paid"
    OVERDUE = "overdue"


class DisputeStatus(str, Enum):
    """Status of a cash payment dispute."""

    PENDING = "pending"
    UNDER_REVIEW = "under_review"
    RESOLVED = "resolved"


class PayoutStatus(str, Enum):
    """Payout request status."""

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"

    def can_transition_to(self, new_status: "PayoutStatus") -> bool:
        return new_status in {
            self.PENDING: {self.PROCESSING, self.CANCELLED},
            self.PROCESSING: {self.COMPLETED, self.FAILED},
        }.get(self, set())

    def is_outstanding(self) -> bool:
        """Check if the payout still reserves part of the balance."""
        return self in [self.PENDING, self.PROCESSING]
