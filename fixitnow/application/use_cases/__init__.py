"""
Use cases package.

This package contains the business logic use cases that orchestrate
the application services and repositories.
"""

from .cash_payment import (
    AddReceiptPhotoUseCase,
    ConfirmCashPaymentUseCase,
    MarkCashReceivedUseCase,
    RaiseCashDisputeUseCase,
)
from .create_job import CreateJobUseCase
from .generate_invoice import GenerateInvoiceUseCase
from .job_interactions import DeclineJobUseCase, RateJobUseCase, SendJobMessageUseCase
from .job_queries import GetJobUseCase, GetStatusHistoryUseCase
from .mark_overdue_invoices import MarkOverdueInvoicesUseCase
from .payouts import (
    GetPayoutBalanceUseCase,
    ListPayoutsUseCase,
    RequestPayoutUseCase,
    UpdatePayoutStatusUseCase,
)
from .transition_job import TransitionJobUseCase
from .update_job import UpdateJobDetailsUseCase
from .verify_payment import VerifyOnlinePaymentUseCase

__all__ = [
    "AddReceiptPhotoUseCase",
    "ConfirmCashPaymentUseCase",
    "CreateJobUseCase",
    "DeclineJobUseCase",
    "GenerateInvoiceUseCase",
    "GetJobUseCase",
    "GetPayoutBalanceUseCase",
    "GetStatusHistoryUseCase",
    "ListPayoutsUseCase",
    "MarkCashReceivedUseCase",
    "MarkOverdueInvoicesUseCase",
    "RaiseCashDisputeUseCase",
    "RateJobUseCase",
    "RequestPayoutUseCase",
    "SendJobMessageUseCase",
    "TransitionJobUseCase",
    "UpdateJobDetailsUseCase",
    "UpdatePayoutStatusUseCase",
    "VerifyOnlinePaymentUseCase",
]
