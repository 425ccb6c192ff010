"""
Job SQLAlchemy model.
"""

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    Float,
    Integer,
    String,
    Text,
    Uuid,
)

from .base import BaseModel


class JobModel(BaseModel):
    """Job database model."""

    __tablename__ = "jobs"

    user_id = Column(Uuid, nullable=False, index=True)
    professional_id = Column(Uuid, nullable=True, index=True)

    title = Column(String(100))
    description = Column(Text)
    category = Column(String(50), nullable=False, index=True)
    priority = Column(String(20), nullable=False, default="medium")

    # Schedule
    scheduled_date = Column(DateTime(timezone=True), nullable=False)
    scheduled_time = Column(String(20), nullable=False)
    estimated_duration = Column(Float, nullable=False, default=2)

    # Location; the point is NULL unless well formed
    location = Column(JSON, nullable=False)
    location_point = Column(JSON(none_as_null=True), nullable=True)

    # Lifecycle
    status = Column(String(20), nullable=False, default="pending", index=True)
    status_history = Column(JSON, nullable=False, default=list)
    completed_at = Column(DateTime(timezone=True))
    cancelled_at = Column(DateTime(timezone=True))

    # Pricing
    budget = Column(JSON(none_as_null=True))
    fixed_rate = Column(Float)
    final_price = Column(Float)
    tip_amount = Column(Float, nullable=False, default=0)
    commission = Column(JSON(none_as_null=True))
    provider_earnings = Column(Float)

    # Invoice, with searchable copies of the embedded document's keys
    invoice = Column(JSON(none_as_null=True))
    invoice_number = Column(String(50), unique=True, nullable=True)
    invoice_due_date = Column(DateTime(timezone=True), index=True)
    invoice_payment_status = Column(String(20), index=True)

    # Payment
    payment_status = Column(String(30), nullable=False, default="pending", index=True)
    payment_method = Column(String(20))
    payment_provider = Column(String(20), nullable=False, default="none")
    gateway_order_id = Column(String(255))
    gateway_payment_id = Column(String(255))
    gateway_signature = Column(String(255))
    paid_at = Column(DateTime(timezone=True))
    cash_payment_details = Column(JSON(none_as_null=True))

    # Matching and communication
    declined_by = Column(JSON, nullable=False, default=list)
    messages = Column(JSON, nullable=False, default=list)
    rating = Column(Integer)
    review = Column(Text)

    # Optimistic lock counter
    version = Column(Integer, nullable=False, default=0)

    def __repr__(self) -> str:
        return f"<Job(id={self.id}, status={self.status}, version={self.version})>"
