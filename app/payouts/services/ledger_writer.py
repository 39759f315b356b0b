"""
Ledger writer: applies payout drafts to wallets and the transaction store.

All effects of one payout happen inside a single database transaction:

1. Claim the order (conditional UPDATE on payout_status)
2. Credit each recipient wallet with an atomic increment
3. Bulk-insert the transaction rows
4. Write the PayoutEvent outbox row

If any step fails, everything rolls back and the order stays eligible,
so the caller can safely retry. The unique (order, role) constraint on
payout rows backs this up at the database level.

Usage:
    from payouts.services import LedgerWriter

    rows = LedgerWriter.apply_transactions(drafts, calculation)
"""

from __future__ import annotations

import logging
import uuid
from decimal import Decimal
from typing import TYPE_CHECKING

from django.db import DatabaseError, transaction
from django.utils import timezone

from payouts.constants import PAYOUT_COMPLETED_EVENT
from payouts.exceptions import (
    LedgerWriteFailed,
    OrderNotEligible,
    PayoutValidationError,
)
from payouts.models import Order, PayoutEvent, PayoutTransaction, Wallet
from payouts.state_machines import TransactionStatus, TransactionType
from payouts.types import quantize_money

if TYPE_CHECKING:
    from payouts.types import PayoutCalculation, TransactionDraft

logger = logging.getLogger(__name__)


class LedgerWriter:
    """
    Writes payouts and adjustments to the ledger.

    All methods are static - no instance state is maintained.
    """

    @staticmethod
    def apply_transactions(
        transactions: list[TransactionDraft],
        calculation: PayoutCalculation | None = None,
    ) -> list[PayoutTransaction]:
        """
        Apply one order's payout drafts as a single atomic unit.

        Args:
            transactions: Drafts for a single order, as built by
                TransactionBuilder
            calculation: Breakdown to include in the outbox event payload

        Returns:
            The persisted PayoutTransaction rows, in draft order

        Raises:
            OrderNotEligible: If the order could not be claimed
            LedgerWriteFailed: If a wallet credit or insert fails
        """
        if not transactions:
            raise PayoutValidationError("No transactions to apply")

        order_ids = {draft.order_id for draft in transactions}
        if len(order_ids) != 1:
            raise PayoutValidationError(
                "Transactions must belong to a single order",
                details={"order_ids": sorted(str(oid) for oid in order_ids)},
            )
        order_id = order_ids.pop()

        with transaction.atomic():
            LedgerWriter._claim_order(order_id)

            for draft in transactions:
                LedgerWriter._credit_wallet(draft.recipient_id, draft.amount)

            try:
                rows = PayoutTransaction.objects.bulk_create(
                    [
                        PayoutTransaction(
                            order_id=draft.order_id,
                            recipient_id=draft.recipient_id,
                            amount=draft.amount,
                            role=draft.role,
                            description=draft.description,
                            transaction_type=draft.transaction_type,
                            status=TransactionStatus.COMPLETED,
                            external_reference=draft.external_reference,
                        )
                        for draft in transactions
                    ]
                )
            except DatabaseError as e:
                raise LedgerWriteFailed(
                    recipient_id=None,
                    step="insert_transactions",
                    reason=str(e),
                ) from e

            if calculation is not None:
                calculations = calculation.to_dict()
            else:
                calculations = {
                    f"{draft.role}_amount": str(draft.amount) for draft in transactions
                }

            try:
                PayoutEvent.objects.create(
                    order_id=order_id,
                    event_type=PAYOUT_COMPLETED_EVENT,
                    payload={
                        "order_id": str(order_id),
                        "timestamp": timezone.now().isoformat(),
                        "calculations": calculations,
                    },
                )
            except DatabaseError as e:
                raise LedgerWriteFailed(
                    recipient_id=None,
                    step="record_event",
                    reason=str(e),
                ) from e

        logger.info(
            "Payout applied to ledger",
            extra={
                "order_id": str(order_id),
                "transaction_count": len(rows),
            },
        )
        return rows

    @staticmethod
    def record_adjustment(
        order_id: uuid.UUID,
        recipient_id: uuid.UUID,
        role: str,
        amount: Decimal,
        description: str,
    ) -> PayoutTransaction:
        """
        Record a correction against an already written payout.

        Adjustments never edit existing rows; they add a new ADJUSTMENT
        row and apply its amount (positive or negative) to the wallet.

        Args:
            order_id: Order being corrected
            recipient_id: Wallet to adjust
            role: Recipient role
            amount: Signed correction amount, rounded half-up to cents
            description: Reason for the correction

        Returns:
            The persisted adjustment row

        Raises:
            PayoutValidationError: If the amount rounds to zero
            OrderNotEligible: If the order does not exist
            LedgerWriteFailed: If the wallet credit or insert fails
        """
        amount = quantize_money(Decimal(amount))
        if amount == 0:
            raise PayoutValidationError(
                "Adjustment amount must be non-zero",
                details={"order_id": str(order_id)},
            )

        if not Order.objects.filter(id=order_id).exists():
            raise OrderNotEligible(
                f"Order {order_id} not found",
                details={
                    "order_id": str(order_id),
                    "reason": OrderNotEligible.REASON_NOT_FOUND,
                },
            )

        with transaction.atomic():
            LedgerWriter._credit_wallet(recipient_id, amount)
            try:
                row = PayoutTransaction.objects.create(
                    order_id=order_id,
                    recipient_id=recipient_id,
                    amount=amount,
                    role=role,
                    description=description,
                    transaction_type=TransactionType.ADJUSTMENT,
                    status=TransactionStatus.COMPLETED,
                )
            except DatabaseError as e:
                raise LedgerWriteFailed(
                    recipient_id=recipient_id,
                    step="insert_transactions",
                    reason=str(e),
                ) from e

        logger.info(
            "Adjustment recorded",
            extra={
                "order_id": str(order_id),
                "recipient_id": str(recipient_id),
                "amount": str(amount),
            },
        )
        return row

    # =========================================================================
    # Internal steps
    # =========================================================================

    @staticmethod
    def _claim_order(order_id: uuid.UUID) -> None:
        """Flip the order to paid out, or raise if someone else already did."""
        try:
            claimed = Order.objects.claim_for_payout(order_id)
        except DatabaseError as e:
            raise LedgerWriteFailed(
                recipient_id=None,
                step="claim_order",
                reason=str(e),
            ) from e

        if claimed:
            return

        order = Order.objects.filter(id=order_id).first()
        if order is None:
            reason = OrderNotEligible.REASON_NOT_FOUND
        else:
            reason = order.payout_ineligibility_reason() or OrderNotEligible.REASON_ALREADY_PAID_OUT

        logger.warning(
            "Order claim lost",
            extra={"order_id": str(order_id), "reason": reason},
        )
        raise OrderNotEligible(
            f"Order {order_id} is not eligible for payout",
            details={"order_id": str(order_id), "reason": reason},
        )

    @staticmethod
    def _credit_wallet(recipient_id: uuid.UUID, amount: Decimal) -> None:
        try:
            credited = Wallet.objects.credit(recipient_id, amount)
        except DatabaseError as e:
            raise LedgerWriteFailed(
                recipient_id=recipient_id,
                step="wallet_update",
                reason=str(e),
            ) from e

        if not credited:
            raise LedgerWriteFailed(
                recipient_id=recipient_id,
                step="wallet_update",
                reason="wallet not found",
            )
