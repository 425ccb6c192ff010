"""
Cash payment value objects.
"""

import secrets
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from fixitnow.domain.value_objects.actor import CashParty
from fixitnow.domain.value_objects.payment_status import DisputeStatus
from fixitnow.domain.value_objects.timestamps import from_iso, to_iso

VERIFICATION_CODE_DIGITS = 6


def generate_verification_code() -> str:
    """Random six digit code the customer quotes back when confirming cash."""
    low = 10 ** (VERIFICATION_CODE_DIGITS - 1)
    return str(low + secrets.randbelow(9 * low))


@dataclass(frozen=True)
class ReceiptPhoto:
    """Photo of a cash receipt uploaded by one of the parties."""

    url: str
    uploaded_by: CashParty
    uploaded_at: datetime

    def to_dict(self) -> dict:
        return {
            "url": self.url,
            "uploaded_by": self.uploaded_by.value,
            "uploaded_at": to_iso(self.uploaded_at),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ReceiptPhoto":
        return cls(
            url=data["url"],
            uploaded_by=CashParty(data["uploaded_by"]),
            uploaded_at=from_iso(data["uploaded_at"]),
        )


@dataclass
class CashDispute:
    """Dispute raised by one of the cash parties."""

    raised_by: CashParty
    reason: str
    raised_at: datetime
    status: DisputeStatus = DisputeStatus.PENDING
    resolution: Optional[str] = None
    resolved_at: Optional[datetime] = None

    def is_open(self) -> bool:
        return self.status != DisputeStatus.RESOLVED

    def to_dict(self) -> dict:
        return {
            "raised_by": self.raised_by.value,
            "reason": self.reason,
            "raised_at": to_iso(self.raised_at),
            "status": self.status.value,
            "resolution": self.resolution,
            "resolved_at": to_iso(self.resolved_at),
        }

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> Optional["CashDispute"]:
        if not data:
            return None
        return cls(
            raised_by=CashParty(data["raised_by"]),
            reason=data["reason"],
            raised_at=from_iso(data["raised_at"]),
            status=DisputeStatus(data.get("status", "pending")),
            resolution=data.get("resolution"),
            resolved_at=from_iso(data.get("resolved_at")),
        )


@dataclass
class CashPaymentDetails:
    """Two-party confirmation state of an off-platform cash payment."""

    amount: Optional[float] = None
    professional_marked_received: bool = False
    professional_received_at: Optional[datetime] = None
    customer_confirmed: bool = False
    customer_confirmed_at: Optional[datetime] = None
    verification_code: Optional[str] = None
    dispute_raised: bool = False
    dispute: Optional[CashDispute] = None
    receipt_photos: list[ReceiptPhoto] = field(default_factory=list)

    def has_open_dispute(self) -> bool:
        return self.dispute_raised and self.dispute is not None and self.dispute.is_open()

    def is_fully_confirmed(self) -> bool:
        """Both parties have acknowledged the cash changed hands."""
        return self.professional_marked_received and self.customer_confirmed

    def can_be_verified(self) -> bool:
        return self.is_fully_confirmed() and not self.has_open_dispute()

    def accepts_code(self, code: Optional[str]) -> bool:
        if not code:
            return True
        return self.verification_code is not None and secrets.compare_digest(
            self.verification_code.encode(), code.strip().encode()
        )

    def to_dict(self) -> dict:
        return {
            "amount": self.amount,
            "professional_marked_received": self.professional_marked_received,
            "professional_received_at": to_iso(self.professional_received_at),
            "customer_confirmed": self.customer_confirmed,
            "customer_confirmed_at": to_iso(self.customer_confirmed_at),
            "verification_code": self.verification_code,
            "dispute_raised": self.dispute_raised,
            "dispute": self.dispute.to_dict() if self.dispute else None,
            "receipt_photos": [photo.to_dict() for photo in self.receipt_photos],
        }

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> Optional["CashPaymentDetails"]:
        if not data:
            return None
        return cls(
            amount=data.get("amount"),
            professional_marked_received=bool(data.get("professional_marked_received")),
            professional_received_at=from_iso(data.get("professional_received_at")),
            customer_confirmed=bool(data.get("customer_confirmed")),
            customer_confirmed_at=from_iso(data.get("customer_confirmed_at")),
            verification_code=data.get("verification_code"),
            dispute_raised=bool(data.get("dispute_raised")),
            dispute=CashDispute.from_dict(data.get("dispute")),
            receipt_photos=[
                ReceiptPhoto.from_dict(photo) for photo in data.get("receipt_photos", [])
            ],
        )
