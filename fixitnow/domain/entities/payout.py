"""
Payout entity for professional earnings withdrawals.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Union
from uuid import UUID, uuid4

from fixitnow.config.logging import get_logger
from fixitnow.domain.exceptions.state_error import IllegalStateError
from fixitnow.domain.exceptions.validation_error import (
    InvalidStatusError,
    ValidationError,
)
from fixitnow.domain.value_objects.bank_account import BankAccount
from fixitnow.domain.value_objects.payment_status import PayoutStatus
from fixitnow.domain.value_objects.pricing import round_money
from fixitnow.domain.value_objects.timestamps import utcnow

logger = get_logger(__name__)


@dataclass
class Payout:
    """Payout domain entity."""

    professional_id: UUID
    amount: float
    bank_account: BankAccount
    id: UUID = field(default_factory=uuid4)
    status: PayoutStatus = PayoutStatus.PENDING
    processing_fee: float = 0
    net_amount: Optional[float] = None
    currency: str = "INR"
    notes: Optional[str] = None
    failure_reason: Optional[str] = None
    transaction_id: Optional[str] = None
    requested_at: Optional[datetime] = None
    processed_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate amounts and initialize timestamps."""
        if self.amount is None or self.amount <= 0:
            raise ValidationError("Payout amount must be positive")
        if self.processing_fee < 0:
            raise ValidationError("Processing fee cannot be negative")
        if self.processing_fee > self.amount:
            raise ValidationError("Processing fee cannot exceed the payout amount")

        if isinstance(self.status, str):
            self.status = PayoutStatus(self.status)

        now = utcnow()
        if not self.requested_at:
            self.requested_at = now
        if not self.created_at:
            self.created_at = now
        if not self.updated_at:
            self.updated_at = now

        self.recompute_net_amount()

    def recompute_net_amount(self) -> float:
        """Net amount is derived, never trusted from input."""
        self.net_amount = round_money(self.amount - self.processing_fee)
        return self.net_amount

    def update_status(
        self,
        new_status: Union[str, PayoutStatus],
        failure_reason: Optional[str] = None,
        transaction_id: Optional[str] = None,
    ) -> None:
        """Advance the payout through its processing states."""
        try:
            target = PayoutStatus(new_status)
        except ValueError:
            raise InvalidStatusError(
                str(new_status), [status.value for status in PayoutStatus]
            ) from None
        if not self.status.can_transition_to(target):
            raise IllegalStateError(
                f"Cannot change payout status from '{self.status.value}' to '{target.value}'",
                current_state=self.status.value,
            )

        now = utcnow()
        if target == PayoutStatus.PROCESSING:
            self.processed_at = now
        elif target == PayoutStatus.COMPLETED:
            self.completed_at = now
            if transaction_id:
                self.transaction_id = transaction_id
        elif target == PayoutStatus.FAILED:
            self.failure_reason = failure_reason or "Payout failed"

        logger.info(
            "Payout status changed",
            payout_id=str(self.id),
            old_status=self.status.value,
            new_status=target.value,
        )

        self.status = target
        self.updated_at = now
