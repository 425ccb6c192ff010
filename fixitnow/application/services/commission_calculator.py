"""
Commission calculator splitting the settlement amount between platform and professional.
"""

from typing import Optional

from fixitnow.config.settings import settings
from fixitnow.domain.exceptions.validation_error import ValidationError
from fixitnow.domain.value_objects.payment_status import PaymentMethod
from fixitnow.domain.value_objects.pricing import Commission, round_money


class CommissionCalculator:
    """
    Compute the commission breakdown of a completed job.

    Commission is charged on the service amount only. Tips and invoice tax
    never enter the split; the tip goes to the professional in full.
    """

    def __init__(
        self,
        commission_rate: Optional[float] = None,
        cash_commission_rate: Optional[float] = None,
    ):
        if commission_rate is None:
            commission_rate = settings.COMMISSION_RATE
            if cash_commission_rate is None:
                cash_commission_rate = settings.cash_commission_rate
        self.commission_rate = commission_rate
        self.cash_commission_rate = (
            commission_rate if cash_commission_rate is None else cash_commission_rate
        )

    def rate_for(self, payment_method: Optional[PaymentMethod]) -> float:
        if payment_method == PaymentMethod.CASH:
            return self.cash_commission_rate
        return self.commission_rate

    def calculate(
        self, amount: float, payment_method: Optional[PaymentMethod] = None
    ) -> Commission:
        if amount is None or amount < 0:
            raise ValidationError("Settlement amount cannot be negative")

        rate = self.rate_for(payment_method)
        company_fee = round_money(amount * rate)
        provider_earnings = round_money(amount - company_fee)

        return Commission(
            total=company_fee,
            company_fee=company_fee,
            provider_earnings=provider_earnings,
            commission_rate=rate,
        )
