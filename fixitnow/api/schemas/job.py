"""
Job-related API schemas.
"""

from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from fixitnow.domain.entities.job import Job
from fixitnow.domain.value_objects.cash_payment import CashPaymentDetails
from fixitnow.domain.value_objects.location import JobLocation
from fixitnow.domain.value_objects.pricing import Budget
from fixitnow.domain.value_objects.timestamps import to_iso


class LocationSchema(BaseModel):
    """Free-text job address."""

    address: str = Field(..., min_length=1, max_length=255)
    city: str = Field(..., min_length=1, max_length=100)
    state: Optional[str] = Field(None, max_length=100)
    zip_code: Optional[str] = Field(None, max_length=20)
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    def to_domain(self) -> JobLocation:
        return JobLocation(**self.model_dump())


class BudgetSchema(BaseModel):
    """Customer budget range."""

    min: Optional[float] = Field(None, ge=0)
    max: Optional[float] = Field(None, ge=0)
    currency: str = Field("INR", min_length=3, max_length=3)

    def to_domain(self) -> Budget:
        return Budget(min=self.min, max=self.max, currency=self.currency)


class JobCreateRequest(BaseModel):
    """Job creation request schema."""

    user_id: UUID
    category: str
    location: LocationSchema
    scheduled_date: datetime
    scheduled_time: str = Field(..., min_length=1, max_length=20)
    title: Optional[str] = None
    description: Optional[str] = None
    priority: str = "medium"
    estimated_duration: float = 2
    budget: Optional[BudgetSchema] = None
    fixed_rate: Optional[float] = Field(None, ge=0)
    # Accepted in any shape; malformed points are dropped before storage
    location_point: Optional[Dict[str, Any]] = None
    payment_method: Optional[str] = None


class JobUpdateRequest(BaseModel):
    """Partial update of a pending job; only the fields sent are changed."""

    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    priority: Optional[str] = None
    scheduled_date: Optional[datetime] = None
    scheduled_time: Optional[str] = None
    estimated_duration: Optional[float] = None
    budget: Optional[BudgetSchema] = None
    fixed_rate: Optional[float] = Field(None, ge=0)
    location: Optional[LocationSchema] = None
    location_point: Optional[Any] = None

    def to_changes(self) -> Dict[str, Any]:
        changes = {}
        for name in self.model_fields_set:
            value = getattr(self, name)
            if isinstance(value, (LocationSchema, BudgetSchema)):
                value = value.to_domain()
            changes[name] = value
        return changes


class StatusUpdateRequest(BaseModel):
    status: str
    notes: Optional[str] = Field(None, max_length=500)


class NotesRequest(BaseModel):
    notes: Optional[str] = Field(None, max_length=500)


class CompleteJobRequestSchema(BaseModel):
    """Completion terms sent by the professional."""

    final_price: Optional[float] = None
    payment_method: str = "online"
    tip_amount: Optional[float] = None
    notes: Optional[str] = Field(None, max_length=500)


class MessageRequest(BaseModel):
    message: str = Field(..., min_length=1, max_length=2000)


class RateJobRequestSchema(BaseModel):
    rating: int
    review: Optional[str] = None


def _serialize_cash_details(details: Optional[CashPaymentDetails]) -> Optional[Dict[str, Any]]:
    if details is None:
        return None
    data = details.to_dict()
    # The code reaches the customer only through their notification
    data.pop("verification_code", None)
    return data


def serialize_job(job: Job) -> Dict[str, Any]:
    """Render a job as the JSON document returned by the API."""
    return {
        "id": str(job.id),
        "user_id": str(job.user_id),
        "professional_id": str(job.professional_id) if job.professional_id else None,
        "title": job.title,
        "description": job.description,
        "category": job.category.value,
        "priority": job.priority.value,
        "status": job.status.value,
        "status_history": [entry.to_dict() for entry in job.status_history],
        "scheduled_date": to_iso(job.scheduled_date),
        "scheduled_time": job.scheduled_time,
        "estimated_duration": job.estimated_duration,
        "duration_formatted": job.duration_formatted,
        "location": job.location.to_dict(),
        "full_address": job.location.full_address,
        "location_point": job.location_point.to_dict() if job.location_point else None,
        "budget": job.budget.to_dict() if job.budget else None,
        "fixed_rate": job.fixed_rate,
        "final_price": job.final_price,
        "tip_amount": job.tip_amount,
        "commission": job.commission.to_dict() if job.commission else None,
        "invoice": job.invoice.to_dict() if job.invoice else None,
        "payment_status": job.payment_status.value,
        "payment_method": job.payment_method.value if job.payment_method else None,
        "payment_provider": job.payment_provider,
        "gateway_order_id": job.gateway_order_id,
        "gateway_payment_id": job.gateway_payment_id,
        "paid_at": to_iso(job.paid_at),
        "cash_payment_details": _serialize_cash_details(job.cash_payment_details),
        "declined_by": [str(professional_id) for professional_id in job.declined_by],
        "messages": [message.to_dict() for message in job.messages],
        "rating": job.rating,
        "review": job.review,
        "completed_at": to_iso(job.completed_at),
        "cancelled_at": to_iso(job.cancelled_at),
        "created_at": to_iso(job.created_at),
        "updated_at": to_iso(job.updated_at),
        "version": job.version,
    }
