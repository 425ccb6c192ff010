"""
Payout SQLAlchemy model.
"""

from sqlalchemy import JSON, Column, DateTime, Float, String, Text, Uuid

from .base import BaseModel


class PayoutModel(BaseModel):
    """Payout database model."""

    __tablename__ = "payouts"

    professional_id = Column(Uuid, nullable=False, index=True)
    amount = Column(Float, nullable=False)
    processing_fee = Column(Float, nullable=False, default=0)
    net_amount = Column(Float, nullable=False)
    currency = Column(String(3), nullable=False, default="INR")
    status = Column(String(20), nullable=False, default="pending", index=True)
    bank_account = Column(JSON, nullable=False)
    notes = Column(Text)
    failure_reason = Column(Text)
    transaction_id = Column(String(255))
    requested_at = Column(DateTime(timezone=True), nullable=False)
    processed_at = Column(DateTime(timezone=True))
    completed_at = Column(DateTime(timezone=True))

    def __repr__(self) -> str:
        return f"<Payout(id={self.id}, status={self.status}, amount={self.amount})>"
