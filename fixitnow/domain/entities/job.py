"""Job domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional, Union
from uuid import UUID, uuid4

from fixitnow.domain.exceptions.state_error import (
    ForbiddenActionError,
    IllegalStateError,
)
from fixitnow.domain.exceptions.validation_error import (
    InvalidStatusError,
    RequiredFieldError,
    ValidationError,
)
from fixitnow.domain.value_objects.actor import ActorKind, ActorRef, CashParty
from fixitnow.domain.value_objects.cash_payment import (
    CashDispute,
    CashPaymentDetails,
    ReceiptPhoto,
    generate_verification_code,
)
from fixitnow.domain.value_objects.invoice import Invoice
from fixitnow.domain.value_objects.job_status import (
    JobCategory,
    JobPriority,
    JobStatus,
)
from fixitnow.domain.value_objects.location import JobLocation, LocationPoint
from fixitnow.domain.value_objects.message import JobMessage
from fixitnow.domain.value_objects.payment_status import (
    PaymentMethod,
    PaymentStatus,
)
from fixitnow.domain.value_objects.pricing import Budget, Commission
from fixitnow.domain.value_objects.status_history import StatusHistoryEntry
from fixitnow.domain.value_objects.timestamps import utcnow

TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 1000
REVIEW_MAX_LENGTH = 500


def _coerce_enum(enum_cls, value, field_name: str):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationError(
            f"Invalid {field_name} '{value}', expected one of: {allowed}"
        ) from None


def parse_status(value: Union[str, JobStatus]) -> JobStatus:
    """Coerce a raw status value, rejecting anything outside the known set."""
    if isinstance(value, JobStatus):
        return value
    try:
        return JobStatus(value)
    except ValueError:
        raise InvalidStatusError(str(value), JobStatus.values()) from None


@dataclass
class Job:
    """Job domain entity."""

    user_id: UUID
    category: JobCategory
    location: JobLocation
    scheduled_date: datetime
    scheduled_time: str
    title: Optional[str] = None
    description: Optional[str] = None
    priority: JobPriority = JobPriority.MEDIUM
    estimated_duration: float = 2
    professional_id: Optional[UUID] = None
    id: UUID = field(default_factory=uuid4)

    # Lifecycle
    status: JobStatus = JobStatus.PENDING
    status_history: list[StatusHistoryEntry] = field(default_factory=list)
    completed_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None

    # Geospatial point, always either absent or well formed
    location_point: Optional[Any] = None

    # Pricing
    budget: Optional[Budget] = None
    fixed_rate: Optional[float] = None
    final_price: Optional[float] = None
    tip_amount: float = 0
    commission: Optional[Commission] = None
    invoice: Optional[Invoice] = None

    # Payment
    payment_status: PaymentStatus = PaymentStatus.PENDING
    payment_method: Optional[PaymentMethod] = None
    payment_provider: str = "none"
    gateway_order_id: Optional[str] = None
    gateway_payment_id: Optional[str] = None
    gateway_signature: Optional[str] = None
    paid_at: Optional[datetime] = None
    cash_payment_details: Optional[CashPaymentDetails] = None

    # Matching and communication
    declined_by: list[UUID] = field(default_factory=list)
    messages: list[JobMessage] = field(default_factory=list)
    rating: Optional[int] = None
    review: Optional[str] = None

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    version: int = 0

    def __post_init__(self):
        """Validate job data."""
        if not self.user_id:
            raise RequiredFieldError("user_id")
        if not self.location:
            raise RequiredFieldError("location")
        if not self.scheduled_date:
            raise ValidationError("Scheduled date is required")
        if not self.scheduled_time or not str(self.scheduled_time).strip():
            raise ValidationError("Scheduled time is required")

        self.category = _coerce_enum(JobCategory, self.category, "category")
        self.priority = _coerce_enum(JobPriority, self.priority, "priority")
        self.status = parse_status(self.status)
        self.payment_status = _coerce_enum(
            PaymentStatus, self.payment_status, "payment status"
        )
        if self.payment_method is not None:
            self.payment_method = _coerce_enum(
                PaymentMethod, self.payment_method, "payment method"
            )

        if self.title and len(self.title) > TITLE_MAX_LENGTH:
            raise ValidationError(
                f"Job title cannot exceed {TITLE_MAX_LENGTH} characters"
            )
        if self.description and len(self.description) > DESCRIPTION_MAX_LENGTH:
            raise ValidationError(
                f"Job description cannot exceed {DESCRIPTION_MAX_LENGTH} characters"
            )
        if self.estimated_duration is None:
            raise RequiredFieldError("estimated_duration")
        if self.estimated_duration <= 0:
            raise ValidationError("Estimated duration must be positive")
        for name in ("fixed_rate", "final_price", "tip_amount"):
            value = getattr(self, name)
            if value is not None and value < 0:
                raise ValidationError(f"{name.replace('_', ' ').capitalize()} cannot be negative")

        self.location_point = LocationPoint.from_raw(self.location_point)

        # Set timestamps if not provided
        if not self.created_at:
            self.created_at = utcnow()
        if not self.updated_at:
            self.updated_at = self.created_at

    # ------------------------------------------------------------------
    # Creation and status machine
    # ------------------------------------------------------------------

    def prepare_for_creation(self) -> None:
        """
        Force the initial lifecycle state before the first persistence.

        Whatever the caller supplied, a new job starts ``pending`` with a
        single synthetic history entry dated at creation time.
        """
        self.status = JobStatus.PENDING
        self.status_history = [
            StatusHistoryEntry(
                status=JobStatus.PENDING,
                changed_at=self.created_at,
                changed_by=self.user_id,
                changed_by_model=ActorKind.USER,
                notes="Job created",
            )
        ]
        self.completed_at = None
        self.cancelled_at = None
        self.commission = None
        self.invoice = None
        self.cash_payment_details = None
        self.payment_status = PaymentStatus.PENDING
        self.version = 0

    def transition_to(
        self,
        new_status: Union[str, JobStatus],
        actor: Optional[ActorRef] = None,
        notes: Optional[str] = None,
        at: Optional[datetime] = None,
    ) -> StatusHistoryEntry:
        """Move to ``new_status`` and append the change to the audit trail."""
        target = parse_status(new_status)
        if not self.status.can_transition_to(target):
            raise IllegalStateError(
                f"Cannot change job status from '{self.status.value}' to '{target.value}'",
                current_state=self.status.value,
            )

        changed_at = at or utcnow()
        if self.status_history and changed_at < self.status_history[-1].changed_at:
            changed_at = self.status_history[-1].changed_at

        entry = StatusHistoryEntry(
            status=target,
            changed_at=changed_at,
            changed_by=actor.id if actor else None,
            changed_by_model=actor.kind if actor else None,
            notes=notes,
        )
        self.status = target
        self.status_history.append(entry)
        self.updated_at = changed_at

        if target == JobStatus.COMPLETED:
            self.completed_at = changed_at
        elif target == JobStatus.CANCELLED:
            self.cancelled_at = changed_at

        return entry

    # ------------------------------------------------------------------
    # Parties
    # ------------------------------------------------------------------

    def is_customer(self, actor: ActorRef) -> bool:
        return actor.kind == ActorKind.USER and actor.id == self.user_id

    def is_assigned_professional(self, actor: ActorRef) -> bool:
        return (
            actor.kind == ActorKind.PROFESSIONAL
            and self.professional_id is not None
            and actor.id == self.professional_id
        )

    def is_party(self, actor: ActorRef) -> bool:
        return self.is_customer(actor) or self.is_assigned_professional(actor)

    def cash_party_of(self, actor: ActorRef) -> CashParty:
        """Return the cash role of ``actor`` or reject outsiders."""
        if self.is_customer(actor):
            return CashParty.CUSTOMER
        if self.is_assigned_professional(actor):
            return CashParty.PROFESSIONAL
        raise ForbiddenActionError("Only the customer or the assigned professional can act on this payment")

    def assign_professional(self, professional_id: UUID) -> None:
        if self.status != JobStatus.PENDING or self.professional_id is not None:
            raise IllegalStateError(
                "Job not found or already assigned", current_state=self.status.value
            )
        if professional_id in self.declined_by:
            raise IllegalStateError("Professional has already declined this job")
        self.professional_id = professional_id

    def decline(self, professional_id: UUID) -> bool:
        """Record that a professional passed on the job; returns False if already recorded."""
        if self.status != JobStatus.PENDING:
            raise IllegalStateError(
                "Can only decline pending jobs", current_state=self.status.value
            )
        if professional_id in self.declined_by:
            return False
        self.declined_by.append(professional_id)
        self.updated_at = utcnow()
        return True

    # ------------------------------------------------------------------
    # Pricing
    # ------------------------------------------------------------------

    def resolve_settlement_amount(self) -> float:
        """Final price, else fixed rate, else budget maximum, else zero."""
        candidates = (
            self.final_price,
            self.fixed_rate,
            self.budget.max if self.budget else None,
        )
        for amount in candidates:
            if amount is not None:
                return float(amount)
        return 0.0

    def attach_invoice(self, invoice: Invoice) -> Invoice:
        """Attach ``invoice`` unless one already exists; returns the job's invoice."""
        if self.invoice is not None:
            return self.invoice
        self.invoice = invoice
        self.updated_at = utcnow()
        return invoice

    # ------------------------------------------------------------------
    # Payments
    # ------------------------------------------------------------------

    def start_cash_settlement(self, amount: float) -> None:
        """Open the two-party cash confirmation for a completed job."""
        self.payment_method = PaymentMethod.CASH
        self.payment_status = PaymentStatus.CASH_PENDING
        self.cash_payment_details = CashPaymentDetails(amount=amount)

    def _require_open_cash_settlement(self) -> CashPaymentDetails:
        if (
            self.status != JobStatus.COMPLETED
            or self.payment_method != PaymentMethod.CASH
            or self.cash_payment_details is None
        ):
            raise IllegalStateError(
                "Job is not awaiting a cash payment", current_state=self.status.value
            )
        if self.payment_status != PaymentStatus.CASH_PENDING:
            raise IllegalStateError(
                "Cash payment has already been verified",
                current_state=self.payment_status.value,
            )
        return self.cash_payment_details

    def mark_cash_received(
        self,
        actor: ActorRef,
        amount: Optional[float] = None,
        at: Optional[datetime] = None,
    ) -> PaymentStatus:
        """Record the professional's receipt and issue the customer's verification code."""
        if self.cash_party_of(actor) != CashParty.PROFESSIONAL:
            raise ForbiddenActionError("Only the assigned professional can mark cash as received")
        details = self._require_open_cash_settlement()
        if details.professional_marked_received:
            raise IllegalStateError("Cash payment has already been marked as received")
        if amount is not None and amount < 0:
            raise ValidationError("Amount cannot be negative")

        now = at or utcnow()
        details.professional_marked_received = True
        details.professional_received_at = now
        if amount is not None:
            details.amount = amount
        details.verification_code = generate_verification_code()
        return self._refresh_cash_status(now)

    def confirm_cash_payment(
        self,
        actor: ActorRef,
        verification_code: Optional[str] = None,
        at: Optional[datetime] = None,
    ) -> PaymentStatus:
        if self.cash_party_of(actor) != CashParty.CUSTOMER:
            raise ForbiddenActionError("Only the customer can confirm the cash payment")
        details = self._require_open_cash_settlement()
        if details.customer_confirmed:
            raise IllegalStateError("Cash payment has already been confirmed")
        if not details.accepts_code(verification_code):
            raise ValidationError("Invalid verification code")

        now = at or utcnow()
        details.customer_confirmed = True
        details.customer_confirmed_at = now
        return self._refresh_cash_status(now)

    def raise_cash_dispute(
        self, actor: ActorRef, reason: str, at: Optional[datetime] = None
    ) -> CashDispute:
        party = self.cash_party_of(actor)
        details = self._require_open_cash_settlement()
        if not reason or not reason.strip():
            raise RequiredFieldError("reason")
        if details.has_open_dispute():
            raise IllegalStateError("A dispute is already open for this payment")

        dispute = CashDispute(raised_by=party, reason=reason.strip(), raised_at=at or utcnow())
        details.dispute_raised = True
        details.dispute = dispute
        self.updated_at = dispute.raised_at
        return dispute

    def add_receipt_photo(
        self, actor: ActorRef, url: str, at: Optional[datetime] = None
    ) -> ReceiptPhoto:
        party = self.cash_party_of(actor)
        if self.payment_method != PaymentMethod.CASH or self.cash_payment_details is None:
            raise IllegalStateError("Job is not settled in cash")
        if not url or not url.strip():
            raise RequiredFieldError("url")

        photo = ReceiptPhoto(url=url.strip(), uploaded_by=party, uploaded_at=at or utcnow())
        self.cash_payment_details.receipt_photos.append(photo)
        self.updated_at = photo.uploaded_at
        return photo

    def _refresh_cash_status(self, now: datetime) -> PaymentStatus:
        """Advance to ``cash_verified`` only when both parties agree and nothing is disputed."""
        if self.cash_payment_details.can_be_verified():
            self.payment_status = PaymentStatus.CASH_VERIFIED
            self.paid_at = now
            if self.invoice is not None:
                self.invoice = self.invoice.mark_paid(now)
        self.updated_at = now
        return self.payment_status

    def record_online_payment(
        self,
        order_id: str,
        payment_id: str,
        signature: Optional[str] = None,
        provider: str = "razorpay",
        at: Optional[datetime] = None,
    ) -> None:
        if self.status != JobStatus.COMPLETED:
            raise IllegalStateError(
                "Job is not ready for payment", current_state=self.status.value
            )
        if self.payment_status.is_settled():
            raise IllegalStateError(
                "Job has already been paid", current_state=self.payment_status.value
            )

        now = at or utcnow()
        self.payment_status = PaymentStatus.PAID
        self.payment_method = PaymentMethod.ONLINE
        self.payment_provider = provider
        self.gateway_order_id = order_id
        self.gateway_payment_id = payment_id
        self.gateway_signature = signature
        self.paid_at = now
        if self.invoice is not None:
            self.invoice = self.invoice.mark_paid(now)
        self.updated_at = now

    # ------------------------------------------------------------------
    # Communication
    # ------------------------------------------------------------------

    def add_message(
        self, actor: ActorRef, text: str, at: Optional[datetime] = None
    ) -> JobMessage:
        if actor.kind not in (ActorKind.USER, ActorKind.PROFESSIONAL) or not self.is_party(actor):
            raise ForbiddenActionError("Only the customer or the assigned professional can send messages")
        if not text or not text.strip():
            raise RequiredFieldError("message")

        message = JobMessage(
            sender=actor.id,
            sender_model=actor.kind,
            message=text.strip(),
            timestamp=at or utcnow(),
        )
        self.messages.append(message)
        self.updated_at = message.timestamp
        return message

    def rate(self, actor: ActorRef, rating: int, review: Optional[str] = None) -> None:
        if not self.is_customer(actor):
            raise ForbiddenActionError("Only the customer can rate this job")
        if self.status != JobStatus.COMPLETED:
            raise IllegalStateError(
                "Only completed jobs can be rated", current_state=self.status.value
            )
        if self.rating:
            raise IllegalStateError("Job has already been rated")
        if not isinstance(rating, int) or not 1 <= rating <= 5:
            raise ValidationError("Rating must be between 1 and 5")
        if review and len(review) > REVIEW_MAX_LENGTH:
            raise ValidationError(
                f"Review cannot exceed {REVIEW_MAX_LENGTH} characters"
            )

        self.rating = rating
        if review:
            self.review = review.strip()
        self.updated_at = utcnow()

    @property
    def display_title(self) -> str:
        return self.title or "Professional Service"

    @property
    def duration_formatted(self) -> str:
        if self.estimated_duration < 1:
            return f"{round(self.estimated_duration * 60)} minutes"
        suffix = "" if self.estimated_duration == 1 else "s"
        return f"{self.estimated_duration:g} hour{suffix}"
