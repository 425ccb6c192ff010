"""
Invoice value objects.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Optional

from fixitnow.domain.value_objects.payment_status import InvoicePaymentStatus
from fixitnow.domain.value_objects.timestamps import from_iso, to_iso


@dataclass(frozen=True)
class InvoiceLineItem:
    """Single billed line."""

    description: str
    quantity: int
    unit_price: float
    total: float

    def to_dict(self) -> dict:
        return {
            "description": self.description,
            "quantity": self.quantity,
            "unit_price": self.unit_price,
            "total": self.total,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "InvoiceLineItem":
        return cls(
            description=data["description"],
            quantity=data["quantity"],
            unit_price=data["unit_price"],
            total=data["total"],
        )


@dataclass(frozen=True)
class Invoice:
    """Customer-facing bill attached to a completed job."""

    number: str
    items: tuple[InvoiceLineItem, ...]
    subtotal: float
    tax: float
    tax_rate: float
    total: float
    issued_at: datetime
    due_date: Optional[datetime] = None
    payment_status: InvoicePaymentStatus = InvoicePaymentStatus.PENDING
    paid_at: Optional[datetime] = field(default=None, compare=False)

    def is_overdue(self, now: datetime) -> bool:
        return (
            self.payment_status == InvoicePaymentStatus.PENDING
            and self.due_date is not None
            and now > self.due_date
        )

    def mark_paid(self, paid_at: datetime) -> "Invoice":
        return replace(self, payment_status=InvoicePaymentStatus.PAID, paid_at=paid_at)

    def mark_overdue(self) -> "Invoice":
        return replace(self, payment_status=InvoicePaymentStatus.OVERDUE)

    def to_dict(self) -> dict:
        return {
            "number": self.number,
            "items": [item.to_dict() for item in self.items],
            "subtotal": self.subtotal,
            "tax": self.tax,
            "tax_rate": self.tax_rate,
            "total": self.total,
            "issued_at": to_iso(self.issued_at),
            "due_date": to_iso(self.due_date),
            "payment_status": self.payment_status.value,
            "paid_at": to_iso(self.paid_at),
        }

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> Optional["Invoice"]:
        if not data or not data.get("number"):
            return None
        return cls(
            number=data["number"],
            items=tuple(InvoiceLineItem.from_dict(item) for item in data["items"]),
            subtotal=data["subtotal"],
            tax=data["tax"],
            tax_rate=data["tax_rate"],
            total=data["total"],
            issued_at=from_iso(data["issued_at"]),
            due_date=from_iso(data.get("due_date")),
            payment_status=InvoicePaymentStatus(data.get("payment_status", "pending")),
            paid_at=from_iso(data.get("paid_at")),
        )
