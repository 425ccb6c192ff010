"""
Bank account value object.
"""

from dataclasses import dataclass
from typing import Optional

from fixitnow.domain.exceptions.validation_error import (
    RequiredFieldError,
    ValidationError,
)


@dataclass(frozen=True)
class BankAccount:
    """Snapshot of the account a payout is sent to."""

    account_holder_name: str
    account_number: str
    ifsc_code: str
    bank_name: str
    branch_name: Optional[str] = None
    account_type: str = "savings"

    def __post_init__(self):
        for field_name in ("account_holder_name", "account_number", "ifsc_code", "bank_name"):
            value = getattr(self, field_name)
            if not value or not value.strip():
                raise RequiredFieldError(field_name)
        if self.account_type not in ("savings", "current"):
            raise ValidationError("Account type must be 'savings' or 'current'")
        object.__setattr__(self, "ifsc_code", self.ifsc_code.strip().upper())

    @property
    def masked_account_number(self) -> str:
        return f"****{self.account_number[-4:]}"

    def to_dict(self) -> dict:
        return {
            "account_holder_name": self.account_holder_name,
            "account_number": self.account_number,
            "ifsc_code": self.ifsc_code,
            "bank_name": self.bank_name,
            "branch_name": self.branch_name,
            "account_type": self.account_type,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "BankAccount":
        return cls(**data)
