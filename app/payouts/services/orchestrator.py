"""
Payout orchestrator: the entry point for paying out an order.

Coordinates eligibility, settings, calculation, transaction building,
ledger writes and the "payout completed" notification.

Flow (process mode):
    1. Load the order and check eligibility
    2. Load payment settings (fresh per call)
    3. Calculate the split
    4. Build merchant, driver and house drafts
    5. Apply them to the ledger (single atomic unit)
    6. After commit, queue the notification (best effort)

Test mode (dry run) stops after step 4 and writes nothing.

Usage:
    from payouts.services import PayoutOrchestrator

    result = PayoutOrchestrator.process_payout(order_id)
    if result.success:
        print(result.calculations.total_payout)
    elif result.error_code == "ORDER_NOT_ELIGIBLE":
        print(result.details["reason"])
"""

from __future__ import annotations

import uuid

from django.db import DatabaseError, transaction

from core.services import BaseService

from payouts.exceptions import OrderNotEligible, OrderStoreUnavailable, PayoutError
from payouts.models import Order, PayoutEvent
from payouts.services.calculator import PayoutCalculator
from payouts.services.ledger_writer import LedgerWriter
from payouts.services.settings_provider import SettingsProvider
from payouts.services.transaction_builder import TransactionBuilder
from payouts.types import PayoutResult


class PayoutOrchestrator(BaseService):
    """
    Runs payouts and dry-run previews.

    Every PayoutError is converted into a failure PayoutResult; callers
    never see a payout exception. Anything else is a bug and propagates.
    """

    @classmethod
    def process_payout(cls, order_id: uuid.UUID) -> PayoutResult:
        """
        Pay out a completed order exactly once.

        Args:
            order_id: UUID of the order

        Returns:
            PayoutResult with the calculation and transactions on success,
            or error details and a zeroed calculation on failure
        """
        logger = cls.get_logger()
        logger.info(
            "Starting payout",
            extra={"order_id": str(order_id)},
        )

        try:
            order = cls._get_order(order_id)
            cls._check_eligibility(order)

            payment_settings = SettingsProvider.get_payment_settings()
            calculation = PayoutCalculator.calculate(order, payment_settings)
            drafts = TransactionBuilder.build_transactions(order, calculation)

            LedgerWriter.apply_transactions(drafts, calculation)
        except PayoutError as e:
            cls._log_failure(order_id, e, dry_run=False)
            return PayoutResult.failure(order_id, e)

        transaction.on_commit(lambda: cls._queue_notification(order.id))

        logger.info(
            "Payout completed",
            extra={
                "order_id": str(order.id),
                "merchant_amount": str(calculation.merchant_amount),
                "driver_amount": str(calculation.driver_amount),
                "house_amount": str(calculation.house_amount),
                "total_payout": str(calculation.total_payout),
            },
        )
        return PayoutResult.ok(order.id, calculation, drafts)

    @classmethod
    def test_payout_calculation(cls, order_id: uuid.UUID) -> PayoutResult:
        """
        Preview a payout without writing anything.

        Only requires the order to exist; completed or already paid out
        orders can both be previewed.

        Args:
            order_id: UUID of the order

        Returns:
            PayoutResult with dry_run=True and unpersisted drafts
        """
        cls.get_logger().info(
            "Starting payout dry run",
            extra={"order_id": str(order_id)},
        )

        try:
            order = cls._get_order(order_id)
            payment_settings = SettingsProvider.get_payment_settings()
            calculation = PayoutCalculator.calculate(order, payment_settings)
            drafts = TransactionBuilder.build_transactions(order, calculation)
        except PayoutError as e:
            cls._log_failure(order_id, e, dry_run=True)
            return PayoutResult.failure(order_id, e, dry_run=True)

        return PayoutResult.ok(order.id, calculation, drafts, dry_run=True)

    # =========================================================================
    # Helpers
    # =========================================================================

    @staticmethod
    def _get_order(order_id: uuid.UUID) -> Order:
        try:
            return Order.objects.get(id=order_id)
        except Order.DoesNotExist:
            raise OrderNotEligible(
                f"Order {order_id} not found",
                details={
                    "order_id": str(order_id),
                    "reason": OrderNotEligible.REASON_NOT_FOUND,
                },
            )
        except DatabaseError as e:
            raise OrderStoreUnavailable(
                f"Could not load order {order_id}: {e}",
                details={"order_id": str(order_id)},
            ) from e

    @staticmethod
    def _check_eligibility(order: Order) -> None:
        reason = order.payout_ineligibility_reason()
        if reason is not None:
            raise OrderNotEligible(
                f"Order {order.id} is not eligible for payout",
                details={"order_id": str(order.id), "reason": reason},
            )

    @classmethod
    def _log_failure(cls, order_id: uuid.UUID, exc: PayoutError, dry_run: bool) -> None:
        extra = {
            "order_id": str(order_id),
            "error_code": exc.error_code,
            "dry_run": dry_run,
            **{k: v for k, v in exc.details.items() if k != "order_id"},
        }
        # Eligibility failures are routine (retries, double clicks)
        if isinstance(exc, OrderNotEligible):
            cls.get_logger().warning(f"Payout rejected: {exc.message}", extra=extra)
        else:
            cls.get_logger().error(f"Payout failed: {exc.message}", extra=extra)

    @classmethod
    def _queue_notification(cls, order_id: uuid.UUID) -> None:
        """Queue the payout completed event; failures are logged only."""
        from payouts.tasks import dispatch_payout_event

        try:
            event_id = (
                PayoutEvent.objects.filter(order_id=order_id)
                .values_list("id", flat=True)
                .first()
            )
            if event_id is None:
                cls.get_logger().error(
                    "No payout event recorded for order",
                    extra={"order_id": str(order_id)},
                )
                return
            dispatch_payout_event.delay(str(event_id))
        except Exception:
            cls.get_logger().exception(
                "Failed to queue payout notification",
                extra={"order_id": str(order_id)},
            )
