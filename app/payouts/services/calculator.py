"""
Payout calculator: splits an order's total among its recipients.

Pure computation, no I/O. All arithmetic is in Decimal and rounded only
once, at the output boundary.

Split rules:
    merchant = item_total
    driver   = delivery_fee * driver_payout_percentage
    house    = delivery_fee * (1 - driver_payout_percentage)
               + service_fee
               + service_fee * tax_rate_service_fee

Usage:
    from payouts.services import PayoutCalculator

    calculation = PayoutCalculator.calculate(order, settings)
    calculation.house_amount  # Decimal('7.00') for 100 / 10 / 5 at 80%
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

from payouts.constants import CALCULATION_TOLERANCE
from payouts.exceptions import CalculationMismatch, InvalidOrderAmounts
from payouts.types import PayoutCalculation, quantize_money

if TYPE_CHECKING:
    from payouts.models import Order
    from payouts.types import PaymentSettings


class PayoutCalculator:
    """
    Computes the payout split for one order.

    The house amount is derived as the residual of the rounded total, so
    ``merchant + driver + house == total_payout`` holds exactly in cents.
    """

    @staticmethod
    def calculate(order: Order, settings: PaymentSettings) -> PayoutCalculation:
        """
        Compute the payout breakdown for an order.

        Args:
            order: Order with item_total, delivery_fee and service_fee
            settings: Payment settings for this run

        Returns:
            PayoutCalculation rounded half-up to cents

        Raises:
            InvalidOrderAmounts: If any order amount is negative
            CalculationMismatch: If the split drifts from the order total
                by more than one cent
        """
        item_total = Decimal(order.item_total)
        delivery_fee = Decimal(order.delivery_fee)
        service_fee = Decimal(order.service_fee)

        negative = {
            name: str(value)
            for name, value in (
                ("item_total", item_total),
                ("delivery_fee", delivery_fee),
                ("service_fee", service_fee),
            )
            if value < 0
        }
        if negative:
            raise InvalidOrderAmounts(
                f"Order {order.id} has negative amounts",
                details={"order_id": str(order.id), **negative},
            )

        driver_pct = settings.driver_payout_percentage

        merchant = item_total
        driver = delivery_fee * driver_pct
        house_delivery = delivery_fee * (Decimal("1") - driver_pct)
        service_fee_tax = service_fee * settings.tax_rate_service_fee
        house = house_delivery + service_fee + service_fee_tax
        total = merchant + driver + house

        expected = item_total + delivery_fee + service_fee
        if abs(total - expected) > CALCULATION_TOLERANCE:
            raise CalculationMismatch(
                f"Payout total {total} does not match order total {expected}",
                details={
                    "order_id": str(order.id),
                    "total_payout": str(total),
                    "order_total": str(expected),
                },
            )

        merchant_amount = quantize_money(merchant)
        driver_amount = quantize_money(driver)
        total_payout = quantize_money(total)

        return PayoutCalculation(
            merchant_amount=merchant_amount,
            driver_amount=driver_amount,
            house_amount=total_payout - merchant_amount - driver_amount,
            service_fee_tax=quantize_money(service_fee_tax),
            total_payout=total_payout,
        )
