"""Job repository implementation."""

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from fixitnow.application.interfaces.repositories import JobRepositoryInterface
from fixitnow.application.services.location_sanitizer import (
    sanitize_job_changes,
    sanitize_location_point,
)
from fixitnow.config.logging import get_logger
from fixitnow.domain.entities.job import Job
from fixitnow.domain.exceptions.not_found_error import NotFoundError
from fixitnow.domain.exceptions.state_error import ConcurrencyConflictError
from fixitnow.domain.value_objects.cash_payment import CashPaymentDetails
from fixitnow.domain.value_objects.invoice import Invoice
from fixitnow.domain.value_objects.job_status import JobStatus
from fixitnow.domain.value_objects.location import JobLocation
from fixitnow.domain.value_objects.message import JobMessage
from fixitnow.domain.value_objects.payment_status import (
    InvoicePaymentStatus,
    PaymentStatus,
)
from fixitnow.domain.value_objects.pricing import Budget, Commission
from fixitnow.domain.value_objects.status_history import StatusHistoryEntry
from fixitnow.domain.value_objects.timestamps import from_iso, utcnow
from fixitnow.infrastructure.database.models.job import JobModel

logger = get_logger(__name__)

SETTLED_PAYMENT_STATUSES = (PaymentStatus.PAID.value, PaymentStatus.CASH_VERIFIED.value)


class JobRepository(JobRepositoryInterface):
    """
    Job repository implementation.

    Every write after creation is a conditional ``UPDATE`` matching both
    the id and the version the caller read, bumping the version on success.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, job_id: UUID) -> Optional[Job]:
        """Get job by ID, always reading the current row."""
        stmt = (
            select(JobModel)
            .where(JobModel.id == job_id)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        model = result.scalar_one_or_none()

        return self._model_to_entity(model) if model else None

    async def create(self, job: Job) -> Job:
        """Create a new job in its initial lifecycle state."""
        job.prepare_for_creation()

        job_model = JobModel(
            id=job.id, version=job.version, **self._entity_to_values(job)
        )

        self.db.add(job_model)
        # Use flush instead of commit to maintain transaction atomicity
        await self.db.flush()

        return self._model_to_entity(job_model)

    async def save(self, job: Job) -> Job:
        """Write the full job state, guarded by its version."""
        values = self._entity_to_values(job)
        values["version"] = job.version + 1
        values["updated_at"] = utcnow()

        stmt = (
            update(JobModel)
            .where(JobModel.id == job.id, JobModel.version == job.version)
            .values(**values)
            .execution_options(synchronize_session=False)
        )

        try:
            result = await self.db.execute(stmt)
        except IntegrityError as e:
            # The only unique column written here is the invoice number
            logger.warning(
                "Invoice number collision", job_id=str(job.id), error=str(e.orig)
            )
            raise ConcurrencyConflictError("Job", str(job.id), job.version) from e

        if result.rowcount == 0:
            await self._ensure_exists(job.id)
            raise ConcurrencyConflictError("Job", str(job.id), job.version)

        job.version = values["version"]
        job.updated_at = values["updated_at"]
        return job

    async def apply_update(
        self,
        job_id: UUID,
        changes: Dict[str, Any],
        expected_version: Optional[int] = None,
    ) -> Job:
        """Apply a sanitized partial update to a job."""
        values = {
            key: self._serialize_field(key, value)
            for key, value in sanitize_job_changes(changes).items()
        }
        values["version"] = JobModel.version + 1
        values["updated_at"] = utcnow()

        stmt = update(JobModel).where(JobModel.id == job_id)
        if expected_version is not None:
            stmt = stmt.where(JobModel.version == expected_version)

        result = await self.db.execute(
            stmt.values(**values).execution_options(synchronize_session=False)
        )

        if result.rowcount == 0:
            await self._ensure_exists(job_id)
            raise ConcurrencyConflictError("Job", str(job_id), expected_version)

        if "location_point" in values and values["location_point"] is None:
            logger.debug("Location point unset", job_id=str(job_id))

        return await self.get_by_id(job_id)

    async def find_overdue_invoices(
        self, now: datetime, limit: int = 200
    ) -> List[Job]:
        """Find jobs whose unpaid invoice is past its due date."""
        stmt = (
            select(JobModel)
            .where(
                JobModel.invoice_payment_status == InvoicePaymentStatus.PENDING.value,
                JobModel.invoice_due_date < now,
            )
            .order_by(JobModel.invoice_due_date)
            .limit(limit)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        return [self._model_to_entity(model) for model in result.scalars().all()]

    async def get_settled_earnings(self, professional_id: UUID) -> float:
        """Sum provider earnings of completed, settled jobs."""
        stmt = select(func.coalesce(func.sum(JobModel.provider_earnings), 0)).where(
            JobModel.professional_id == professional_id,
            JobModel.status == JobStatus.COMPLETED.value,
            JobModel.payment_status.in_(SETTLED_PAYMENT_STATUSES),
        )
        result = await self.db.execute(stmt)
        return float(result.scalar_one() or 0)

    async def _ensure_exists(self, job_id: UUID) -> None:
        stmt = select(JobModel.id).where(JobModel.id == job_id)
        result = await self.db.execute(stmt)
        if result.scalar_one_or_none() is None:
            raise NotFoundError("Job", job_id)

    def _serialize_field(self, key: str, value: Any) -> Any:
        """Convert a single entity-level value to its column value."""
        if key == "budget":
            if isinstance(value, dict):
                value = Budget.from_dict(value)
            return value.to_dict() if value else None
        if key == "location":
            if isinstance(value, dict):
                value = JobLocation.from_dict(value)
            return value.to_dict()
        if key in ("category", "priority"):
            return getattr(value, "value", value)
        return value

    def _entity_to_values(self, job: Job) -> Dict[str, Any]:
        """Convert domain entity to column values."""
        invoice = job.invoice
        return {
            "user_id": job.user_id,
            "professional_id": job.professional_id,
            "title": job.title,
            "description": job.description,
            "category": job.category.value,
            "priority": job.priority.value,
            "scheduled_date": job.scheduled_date,
            "scheduled_time": job.scheduled_time,
            "estimated_duration": job.estimated_duration,
            "location": job.location.to_dict(),
            "location_point": sanitize_location_point(job.location_point),
            "status": job.status.value,
            "status_history": [entry.to_dict() for entry in job.status_history],
            "completed_at": job.completed_at,
            "cancelled_at": job.cancelled_at,
            "budget": job.budget.to_dict() if job.budget else None,
            "fixed_rate": job.fixed_rate,
            "final_price": job.final_price,
            "tip_amount": job.tip_amount or 0,
            "commission": job.commission.to_dict() if job.commission else None,
            "provider_earnings": job.commission.provider_earnings
            if job.commission
            else None,
            "invoice": invoice.to_dict() if invoice else None,
            "invoice_number": invoice.number if invoice else None,
            "invoice_due_date": invoice.due_date if invoice else None,
            "invoice_payment_status": invoice.payment_status.value if invoice else None,
            "payment_status": job.payment_status.value,
            "payment_method": job.payment_method.value if job.payment_method else None,
            "payment_provider": job.payment_provider,
            "gateway_order_id": job.gateway_order_id,
            "gateway_payment_id": job.gateway_payment_id,
            "gateway_signature": job.gateway_signature,
            "paid_at": job.paid_at,
            "cash_payment_details": job.cash_payment_details.to_dict()
            if job.cash_payment_details
            else None,
            "declined_by": [str(professional_id) for professional_id in job.declined_by],
            "messages": [message.to_dict() for message in job.messages],
            "rating": job.rating,
            "review": job.review,
            "created_at": job.created_at,
            "updated_at": job.updated_at,
        }

    def _model_to_entity(self, model: JobModel) -> Job:
        """Convert SQLAlchemy model to domain entity."""
        return Job(
            id=model.id,
            user_id=model.user_id,
            professional_id=model.professional_id,
            title=model.title,
            description=model.description,
            category=model.category,
            priority=model.priority,
            scheduled_date=from_iso(model.scheduled_date),
            scheduled_time=model.scheduled_time,
            estimated_duration=model.estimated_duration,
            location=JobLocation.from_dict(model.location),
            location_point=model.location_point,
            status=model.status,
            status_history=[
                StatusHistoryEntry.from_dict(entry) for entry in model.status_history or []
            ],
            completed_at=from_iso(model.completed_at),
            cancelled_at=from_iso(model.cancelled_at),
            budget=Budget.from_dict(model.budget),
            fixed_rate=model.fixed_rate,
            final_price=model.final_price,
            tip_amount=model.tip_amount or 0,
            commission=Commission.from_dict(model.commission),
            invoice=Invoice.from_dict(model.invoice),
            payment_status=model.payment_status,
            payment_method=model.payment_method,
            payment_provider=model.payment_provider or "none",
            gateway_order_id=model.gateway_order_id,
            gateway_payment_id=model.gateway_payment_id,
            gateway_signature=model.gateway_signature,
            paid_at=from_iso(model.paid_at),
            cash_payment_details=CashPaymentDetails.from_dict(model.cash_payment_details),
            declined_by=[UUID(value) for value in model.declined_by or []],
            messages=[JobMessage.from_dict(message) for message in model.messages or []],
            rating=model.rating,
            review=model.review,
            created_at=from_iso(model.created_at),
            updated_at=from_iso(model.updated_at),
            version=model.version,
        )
