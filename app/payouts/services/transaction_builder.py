"""
Transaction builder: turns a payout calculation into ledger drafts.

Pure, no I/O. Always produces exactly three drafts, in the order
merchant, driver, house.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING

from payouts.constants import get_house_account_id
from payouts.state_machines import (
    TransactionRole,
    TransactionStatus,
    TransactionType,
)
from payouts.types import TransactionDraft

if TYPE_CHECKING:
    from payouts.models import Order
    from payouts.types import PayoutCalculation


class TransactionBuilder:
    """Builds pending payout drafts for one order."""

    @staticmethod
    def driver_percentage(order: Order, calculation: PayoutCalculation) -> int:
        """Driver share of the delivery fee as a whole percentage (0 for no fee)."""
        delivery_fee = Decimal(order.delivery_fee)
        if delivery_fee == 0:
            return 0
        pct = calculation.driver_amount / delivery_fee * 100
        return int(pct.quantize(Decimal("1"), rounding=ROUND_HALF_UP))

    @classmethod
    def build_transactions(
        cls,
        order: Order,
        calculation: PayoutCalculation,
    ) -> list[TransactionDraft]:
        """
        Build merchant, driver and house drafts.

        Args:
            order: The order being paid out
            calculation: Its payout breakdown

        Returns:
            Three PENDING PAYOUT drafts
        """
        prefix = f"Payout for order {order.id}"
        common = {
            "order_id": order.id,
            "transaction_type": TransactionType.PAYOUT.value,
            "status": TransactionStatus.PENDING.value,
        }

        return [
            TransactionDraft(
                recipient_id=order.merchant_id,
                amount=calculation.merchant_amount,
                role=TransactionRole.MERCHANT.value,
                description=f"{prefix} - Item total",
                **common,
            ),
            TransactionDraft(
                recipient_id=order.driver_id,
                amount=calculation.driver_amount,
                role=TransactionRole.DRIVER.value,
                description=(
                    f"{prefix} - Delivery fee "
                    f"({cls.driver_percentage(order, calculation)}%)"
                ),
                **common,
            ),
            TransactionDraft(
                recipient_id=get_house_account_id(),
                amount=calculation.house_amount,
                role=TransactionRole.HOUSE.value,
                description=f"{prefix} - Service fee + delivery fee portion",
                **common,
            ),
        ]
