"""Payout repository implementation."""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from fixitnow.application.interfaces.repositories import PayoutRepositoryInterface
from fixitnow.config.logging import get_logger
from fixitnow.domain.entities.payout import Payout
from fixitnow.domain.exceptions.not_found_error import NotFoundError
from fixitnow.domain.value_objects.bank_account import BankAccount
from fixitnow.domain.value_objects.payment_status import PayoutStatus
from fixitnow.domain.value_objects.timestamps import from_iso
from fixitnow.infrastructure.database.models.payout import PayoutModel

logger = get_logger(__name__)

OUTSTANDING_STATUSES = tuple(
    status.value for status in PayoutStatus if status.is_outstanding()
)
RESERVING_STATUSES = OUTSTANDING_STATUSES + (PayoutStatus.COMPLETED.value,)


class PayoutRepository(PayoutRepositoryInterface):
    """Payout repository implementation."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, payout: Payout) -> Payout:
        """Create a new payout."""
        payout.recompute_net_amount()

        payout_model = PayoutModel(
            id=payout.id,
            professional_id=payout.professional_id,
            amount=payout.amount,
            processing_fee=payout.processing_fee,
            net_amount=payout.net_amount,
            currency=payout.currency,
            status=payout.status.value,
            bank_account=payout.bank_account.to_dict(),
            notes=payout.notes,
            requested_at=payout.requested_at,
            created_at=payout.created_at,
            updated_at=payout.updated_at,
        )

        self.db.add(payout_model)
        await self.db.flush()

        return self._model_to_entity(payout_model)

    async def get_by_id(self, payout_id: UUID) -> Optional[Payout]:
        """Get payout by ID."""
        stmt = select(PayoutModel).where(PayoutModel.id == payout_id)
        result = await self.db.execute(stmt)
        model = result.scalar_one_or_none()

        return self._model_to_entity(model) if model else None

    async def update(self, payout: Payout) -> Payout:
        """Update payout status fields, recomputing the net amount."""
        stmt = select(PayoutModel).where(PayoutModel.id == payout.id)
        result = await self.db.execute(stmt)
        payout_model = result.scalar_one_or_none()

        if not payout_model:
            raise NotFoundError("Payout", payout.id)

        payout.recompute_net_amount()

        payout_model.amount = payout.amount
        payout_model.processing_fee = payout.processing_fee
        payout_model.net_amount = payout.net_amount
        payout_model.status = payout.status.value
        payout_model.failure_reason = payout.failure_reason
        payout_model.transaction_id = payout.transaction_id
        payout_model.processed_at = payout.processed_at
        payout_model.completed_at = payout.completed_at
        payout_model.updated_at = payout.updated_at

        await self.db.flush()

        return self._model_to_entity(payout_model)

    async def find_by_professional(
        self,
        professional_id: UUID,
        status: Optional[PayoutStatus] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Payout]:
        """Find payouts requested by a professional, newest first."""
        stmt = select(PayoutModel).where(PayoutModel.professional_id == professional_id)
        if status:
            stmt = stmt.where(PayoutModel.status == status.value)
        stmt = stmt.order_by(PayoutModel.requested_at.desc()).offset(offset).limit(limit)

        result = await self.db.execute(stmt)
        return [self._model_to_entity(model) for model in result.scalars().all()]

    async def has_outstanding(self, professional_id: UUID) -> bool:
        stmt = (
            select(PayoutModel.id)
            .where(
                PayoutModel.professional_id == professional_id,
                PayoutModel.status.in_(OUTSTANDING_STATUSES),
            )
            .limit(1)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def get_reserved_amount(self, professional_id: UUID) -> float:
        stmt = select(func.coalesce(func.sum(PayoutModel.amount), 0)).where(
            PayoutModel.professional_id == professional_id,
            PayoutModel.status.in_(RESERVING_STATUSES),
        )
        result = await self.db.execute(stmt)
        return float(result.scalar_one() or 0)

    def _model_to_entity(self, model: PayoutModel) -> Payout:
        """Convert SQLAlchemy model to domain entity."""
        return Payout(
            id=model.id,
            professional_id=model.professional_id,
            amount=model.amount,
            processing_fee=model.processing_fee,
            net_amount=model.net_amount,
            currency=model.currency,
            status=model.status,
            bank_account=BankAccount.from_dict(model.bank_account),
            notes=model.notes,
            failure_reason=model.failure_reason,
            transaction_id=model.transaction_id,
            requested_at=from_iso(model.requested_at),
            processed_at=from_iso(model.processed_at),
            completed_at=from_iso(model.completed_at),
            created_at=from_iso(model.created_at),
            updated_at=from_iso(model.updated_at),
        )
