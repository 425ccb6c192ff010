"""
Payment and payout API schemas.
"""

from typing import Any, Dict, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from fixitnow.domain.entities.payout import Payout
from fixitnow.domain.value_objects.bank_account import BankAccount
from fixitnow.domain.value_objects.timestamps import to_iso


class CashReceivedRequest(BaseModel):
    amount: Optional[float] = Field(None, ge=0)


class CashConfirmRequest(BaseModel):
    # Code sent to the customer when the professional marked the cash received
    verification_code: Optional[str] = Field(None, max_length=20)


class CashDisputeRequest(BaseModel):
    reason: str = Field(..., min_length=1, max_length=500)


class ReceiptPhotoRequest(BaseModel):
    url: str = Field(..., min_length=1, max_length=2048)


class VerifyPaymentRequestSchema(BaseModel):
    """Outcome of the gateway client's signature check."""

    job_id: UUID
    gateway_order_id: str = Field(..., min_length=1)
    gateway_payment_id: str = Field(..., min_length=1)
    gateway_signature: Optional[str] = None
    signature_valid: bool


class BankAccountSchema(BaseModel):
    account_holder_name: str = Field(..., min_length=1, max_length=100)
    account_number: str = Field(..., min_length=4, max_length=34)
    ifsc_code: str = Field(..., min_length=4, max_length=20)
    bank_name: str = Field(..., min_length=1, max_length=100)
    branch_name: Optional[str] = None
    account_type: str = "savings"

    def to_domain(self) -> BankAccount:
        return BankAccount(**self.model_dump())


class PayoutCreateRequest(BaseModel):
    amount: float = Field(..., gt=0)
    bank_account: BankAccountSchema
    notes: Optional[str] = Field(None, max_length=500)


class PayoutStatusUpdateRequest(BaseModel):
    status: str
    failure_reason: Optional[str] = Field(None, max_length=500)
    transaction_id: Optional[str] = Field(None, max_length=255)


def serialize_payout(payout: Payout) -> Dict[str, Any]:
    return {
        "id": str(payout.id),
        "professional_id": str(payout.professional_id),
        "amount": payout.amount,
        "processing_fee": payout.processing_fee,
        "net_amount": payout.net_amount,
        "currency": payout.currency,
        "status": payout.status.value,
        "bank_account": {
            "account_holder_name": payout.bank_account.account_holder_name,
            "account_number": payout.bank_account.masked_account_number,
            "ifsc_code": payout.bank_account.ifsc_code,
            "bank_name": payout.bank_account.bank_name,
        },
        "notes": payout.notes,
        "failure_reason": payout.failure_reason,
        "transaction_id": payout.transaction_id,
        "requested_at": to_iso(payout.requested_at),
        "processed_at": to_iso(payout.processed_at),
        "completed_at": to_iso(payout.completed_at),
    }
