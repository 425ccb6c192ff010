"""
Builders for the notifications emitted along the job lifecycle.
"""

from typing import List, Optional

from fixitnow.domain.entities.job import Job
from fixitnow.domain.entities.payout import Payout
from fixitnow.domain.events.party_notification import (
    NotificationType,
    PartyNotification,
)
from fixitnow.domain.value_objects.actor import ActorKind, ActorRef
from fixitnow.domain.value_objects.job_status import JobStatus
from fixitnow.domain.value_objects.message import JobMessage
from fixitnow.domain.value_objects.payment_status import PaymentMethod, PayoutStatus


def _to_customer(
    job: Job, type_: NotificationType, title: str, message: str, **kwargs
) -> PartyNotification:
    return PartyNotification(
        recipient_id=job.user_id,
        recipient_kind=ActorKind.USER,
        type=type_,
        title=title,
        message=message,
        related_job_id=job.id,
        **kwargs,
    )


def _to_professional(
    job: Job, type_: NotificationType, title: str, message: str, **kwargs
) -> Optional[PartyNotification]:
    if job.professional_id is None:
        return None
    return PartyNotification(
        recipient_id=job.professional_id,
        recipient_kind=ActorKind.PROFESSIONAL,
        type=type_,
        title=title,
        message=message,
        related_job_id=job.id,
        **kwargs,
    )


def for_status_change(job: Job, actor: ActorRef) -> List[PartyNotification]:
    """Notifications due after ``job`` moved to its current status."""
    title = job.display_title
    notifications: List[Optional[PartyNotification]] = []

    if job.status == JobStatus.ACCEPTED:
        notifications.append(
            _to_customer(
                job,
                NotificationType.JOB_ACCEPTED,
                "Job Accepted",
                f'A professional has accepted your job "{title}".',
            )
        )
    elif job.status == JobStatus.IN_PROGRESS:
        notifications.append(
            _to_customer(
                job,
                NotificationType.JOB_STARTED,
                "Job Started",
                f'Work on your job "{title}" has started.',
            )
        )
    elif job.status == JobStatus.COMPLETED:
        amount = job.final_price or 0
        if job.payment_method == PaymentMethod.CASH:
            follow_up = "Please confirm the cash payment once made."
        else:
            follow_up = "Please make payment online."
        notifications.append(
            _to_customer(
                job,
                NotificationType.JOB_COMPLETED,
                "Job Completed Successfully",
                f'Your job "{title}" has been completed. {follow_up}',
            )
        )
        notifications.append(
            _to_customer(
                job,
                NotificationType.PAYMENT_DUE,
                "Payment Due",
                f'Payment of {amount:.2f} is due for job "{title}".',
                priority="high",
                action_data={"job_id": str(job.id), "amount": amount},
            )
        )
    elif job.status == JobStatus.CANCELLED:
        message = f'The job "{title}" has been cancelled.'
        if actor.kind != ActorKind.USER:
            notifications.append(
                _to_customer(job, NotificationType.JOB_CANCELLED, "Job Cancelled", message)
            )
        if actor.kind != ActorKind.PROFESSIONAL:
            notifications.append(
                _to_professional(job, NotificationType.JOB_CANCELLED, "Job Cancelled", message)
            )

    return [notification for notification in notifications if notification]


def for_payment_received(job: Job) -> List[PartyNotification]:
    earnings = job.commission.provider_earnings if job.commission else job.final_price or 0
    notification = _to_professional(
        job,
        NotificationType.PAYMENT_RECEIVED,
        "Payment Received",
        f'Payment for job "{job.display_title}" has been received. '
        f"Your earnings: {earnings:.2f}.",
        action_data={"job_id": str(job.id), "earnings": earnings},
    )
    return [notification] if notification else []


def for_cash_confirmation_required(job: Job) -> List[PartyNotification]:
    """Ask the customer to confirm the cash the professional marked as received."""
    details = job.cash_payment_details
    code = details.verification_code if details else None
    return [
        _to_customer(
            job,
            NotificationType.PAYMENT_CONFIRMATION_REQUIRED,
            "Payment Confirmation Required",
            f'The professional has marked the cash payment for job "{job.display_title}" '
            f"as received. Please confirm the payment. Verification code: {code}",
            priority="high",
            action_data={"job_id": str(job.id), "verification_code": code},
        )
    ]


def for_cash_dispute(job: Job, actor: ActorRef) -> List[PartyNotification]:
    """Tell the other party of the cash payment that a dispute was raised."""
    message = (
        f'A payment dispute has been raised for job "{job.display_title}". '
        "Our support team will review this case."
    )
    notify = _to_professional if actor.kind == ActorKind.USER else _to_customer
    notification = notify(
        job,
        NotificationType.PAYMENT_DISPUTE,
        "Payment Dispute Raised",
        message,
        priority="high",
    )
    return [notification] if notification else []


def for_review(job: Job) -> List[PartyNotification]:
    notification = _to_professional(
        job,
        NotificationType.REVIEW_RECEIVED,
        "New Review",
        f'You received a {job.rating}-star rating for job "{job.display_title}".',
    )
    return [notification] if notification else []


def for_message(job: Job, message: JobMessage) -> List[PartyNotification]:
    if message.sender_model == ActorKind.USER:
        notification = _to_professional(
            job, NotificationType.MESSAGE_RECEIVED, "New Message", message.message[:500]
        )
    else:
        notification = _to_customer(
            job, NotificationType.MESSAGE_RECEIVED, "New Message", message.message[:500]
        )
    return [notification] if notification else []


def for_payout(payout: Payout) -> List[PartyNotification]:
    if payout.status == PayoutStatus.COMPLETED:
        type_, title = NotificationType.PAYOUT_PROCESSED, "Payout Processed"
        message = f"Your payout of {payout.net_amount:.2f} has been processed."
    elif payout.status == PayoutStatus.FAILED:
        type_, title = NotificationType.PAYOUT_FAILED, "Payout Failed"
        message = f"Your payout of {payout.amount:.2f} failed: {payout.failure_reason}"
    else:
        return []

    return [
        PartyNotification(
            recipient_id=payout.professional_id,
            recipient_kind=ActorKind.PROFESSIONAL,
            type=type_,
            title=title,
            message=message[:500],
            action_data={"payout_id": str(payout.id)},
        )
    ]
