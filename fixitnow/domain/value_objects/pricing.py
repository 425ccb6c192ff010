"""
Pricing value objects.
"""

from dataclasses import dataclass
from typing import Optional

from fixitnow.domain.exceptions.validation_error import ValidationError


def round_money(amount: float) -> float:
    """Round a monetary amount to two decimal places."""
    return round(float(amount), 2)


@dataclass(frozen=True)
class Budget:
    """Customer budget range for a job."""

    min: Optional[float] = None
    max: Optional[float] = None
    currency: str = "INR"

    def __post_init__(self):
        if self.min is not None and self.min < 0:
            raise ValidationError("Budget minimum cannot be negative")
        if self.max is not None and self.max < 0:
            raise ValidationError("Budget maximum cannot be negative")
        if self.min is not None and self.max is not None and self.min > self.max:
            raise ValidationError("Budget minimum cannot exceed budget maximum")

    def contains(self, amount: float) -> bool:
        """Check that an amount lies within the range (open ends allowed)."""
        if self.min and amount < self.min:
            return False
        if self.max and amount > self.max:
            return False
        return True

    def to_dict(self) -> dict:
        return {"min": self.min, "max": self.max, "currency": self.currency}

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> Optional["Budget"]:
        if not data:
            return None
        return cls(
            min=data.get("min"),
            max=data.get("max"),
            currency=data.get("currency") or "INR",
        )


@dataclass(frozen=True)
class Commission:
    """Split of the settlement amount between platform and professional."""

    total: float
    company_fee: float
    provider_earnings: float
    commission_rate: float

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "company_fee": self.company_fee,
            "provider_earnings": self.provider_earnings,
            "commission_rate": self.commission_rate,
        }

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> Optional["Commission"]:
        if not data:
            return None
        return cls(
            total=data["total"],
            company_fee=data["company_fee"],
            provider_earnings=data["provider_earnings"],
            commission_rate=data["commission_rate"],
        )
