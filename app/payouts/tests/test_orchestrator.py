"""
Tests for PayoutOrchestrator.

Tests cover:
- The end-to-end payout of a completed order
- Idempotency (an order is paid out at most once)
- Eligibility failures (not found, not completed, already paid out)
- Dry runs writing nothing
- Settings, calculation and ledger failures surfacing as results
- Queueing the notification after commit
- Racing payouts on separate connections (PostgreSQL only)
"""

import uuid
from decimal import Decimal

import pytest
from django.db import OperationalError

from payouts.exceptions import SettingsUnavailable
from payouts.models import Order, PayoutEvent, PayoutTransaction, Wallet
from payouts.services import PayoutOrchestrator, SettingsProvider
from payouts.state_machines import PayoutEventStatus, PayoutStatus, TransactionStatus
from payouts.tests.concurrency import race, requires_postgres
from payouts.tests.factories import OrderFactory, PaymentSettingFactory, WalletFactory


def balance(user_id) -> Decimal:
    return Wallet.objects.get(user_id=user_id).balance


def ledger_snapshot():
    return (
        PayoutTransaction.objects.count(),
        PayoutEvent.objects.count(),
        sorted(Wallet.objects.values_list("user_id", "balance")),
    )


# =============================================================================
# process_payout
# =============================================================================


class TestProcessPayout:
    """Tests for PayoutOrchestrator.process_payout."""

    def test_worked_example(self, completed_order, recipient_wallets):
        house_before = recipient_wallets["house"].balance

        result = PayoutOrchestrator.process_payout(completed_order.id)

        assert result.success
        assert result.dry_run is False
        assert result.order_id == completed_order.id
        assert result.calculations.merchant_amount == Decimal("100.00")
        assert result.calculations.driver_amount == Decimal("8.00")
        assert result.calculations.house_amount == Decimal("7.00")
        assert result.calculations.total_payout == Decimal("115.00")
        assert [t.amount for t in result.transactions] == [
            Decimal("100.00"),
            Decimal("8.00"),
            Decimal("7.00"),
        ]
        assert all(t.status == TransactionStatus.PENDING for t in result.transactions)

        assert balance(completed_order.merchant_id) == Decimal("100.00")
        assert balance(completed_order.driver_id) == Decimal("8.00")
        assert balance(recipient_wallets["house"].user_id) == house_before + Decimal("7.00")

        completed_order.refresh_from_db()
        assert completed_order.payout_status == PayoutStatus.COMPLETED
        assert PayoutTransaction.objects.filter(
            order=completed_order, status=TransactionStatus.COMPLETED
        ).count() == 3

    def test_second_call_is_rejected_without_side_effects(
        self, completed_order, recipient_wallets
    ):
        PayoutOrchestrator.process_payout(completed_order.id)
        snapshot = ledger_snapshot()

        result = PayoutOrchestrator.process_payout(completed_order.id)

        assert not result.success
        assert result.error_code == "ORDER_NOT_ELIGIBLE"
        assert result.details["reason"] == "already_paid_out"
        assert result.transactions == []
        assert result.calculations.total_payout == Decimal("0.00")
        assert ledger_snapshot() == snapshot

    def test_unknown_order(self, db):
        order_id = uuid.uuid4()

        result = PayoutOrchestrator.process_payout(order_id)

        assert not result.success
        assert result.order_id == order_id
        assert result.error_code == "ORDER_NOT_ELIGIBLE"
        assert result.details["reason"] == "not_found"

    def test_incomplete_order(self, in_transit_order, house_wallet):
        WalletFactory(user_id=in_transit_order.merchant_id)
        WalletFactory(user_id=in_transit_order.driver_id)

        result = PayoutOrchestrator.process_payout(in_transit_order.id)

        assert not result.success
        assert result.details["reason"] == "not_completed"
        assert balance(in_transit_order.merchant_id) == Decimal("0.00")

    def test_tax_mismatch_writes_nothing(self, completed_order, recipient_wallets):
        PaymentSettingFactory(key="tax_rate_service_fee", value="0.10")
        snapshot = ledger_snapshot()

        result = PayoutOrchestrator.process_payout(completed_order.id)

        assert not result.success
        assert result.error_code == "CALCULATION_MISMATCH"
        assert ledger_snapshot() == snapshot
        completed_order.refresh_from_db()
        assert completed_order.payout_status == PayoutStatus.PENDING

    def test_invalid_setting(self, completed_order, recipient_wallets):
        PaymentSettingFactory(key="driver_payout_percentage", value="1.5")

        result = PayoutOrchestrator.process_payout(completed_order.id)

        assert not result.success
        assert result.error_code == "INVALID_PAYMENT_SETTINGS"

    def test_settings_unavailable(self, completed_order, recipient_wallets, mocker):
        mocker.patch.object(
            SettingsProvider,
            "get_payment_settings",
            side_effect=SettingsUnavailable("Payment settings store is unavailable"),
        )

        result = PayoutOrchestrator.process_payout(completed_order.id)

        assert not result.success
        assert result.error_code == "SETTINGS_UNAVAILABLE"

    def test_order_store_unavailable(self, completed_order, recipient_wallets, mocker):
        mocker.patch.object(
            Order.objects, "get", side_effect=OperationalError("db gone")
        )

        result = PayoutOrchestrator.process_payout(completed_order.id)

        assert not result.success
        assert result.order_id == completed_order.id
        assert result.error_code == "ORDER_STORE_UNAVAILABLE"
        assert "db gone" in result.error
        assert balance(completed_order.merchant_id) == Decimal("0.00")

    def test_missing_house_wallet_rolls_back(self, completed_order, settings):
        settings.PAYOUT_HOUSE_ACCOUNT_ID = str(uuid.uuid4())
        WalletFactory(user_id=completed_order.merchant_id)
        WalletFactory(user_id=completed_order.driver_id)

        result = PayoutOrchestrator.process_payout(completed_order.id)

        assert not result.success
        assert result.error_code == "LEDGER_WRITE_FAILED"
        assert result.details["step"] == "wallet_update"
        assert result.details["recipient_id"] == settings.PAYOUT_HOUSE_ACCOUNT_ID
        assert balance(completed_order.merchant_id) == Decimal("0.00")
        assert balance(completed_order.driver_id) == Decimal("0.00")
        completed_order.refresh_from_db()
        assert completed_order.payout_status == PayoutStatus.PENDING

    def test_settings_change_applies_to_next_payout(self, db, house_wallet):
        first = OrderFactory()
        second = OrderFactory()
        for order in (first, second):
            WalletFactory(user_id=order.merchant_id)
            WalletFactory(user_id=order.driver_id)

        PayoutOrchestrator.process_payout(first.id)
        PaymentSettingFactory(key="driver_payout_percentage", value="0.50")
        result = PayoutOrchestrator.process_payout(second.id)

        assert balance(first.driver_id) == Decimal("8.00")
        assert result.calculations.driver_amount == Decimal("5.00")
        assert balance(second.driver_id) == Decimal("5.00")

    @pytest.mark.parametrize(
        "item_total,delivery_fee,service_fee",
        [
            ("0.00", "0.00", "0.00"),
            ("12.34", "0.00", "0.99"),
            ("7.77", "3.33", "1.11"),
            ("999.99", "15.55", "0.01"),
        ],
    )
    def test_payout_conserves_order_total(
        self, db, house_wallet, item_total, delivery_fee, service_fee
    ):
        order = OrderFactory(
            item_total=Decimal(item_total),
            delivery_fee=Decimal(delivery_fee),
            service_fee=Decimal(service_fee),
        )
        WalletFactory(user_id=order.merchant_id)
        WalletFactory(user_id=order.driver_id)
        house_before = house_wallet.balance

        result = PayoutOrchestrator.process_payout(order.id)

        assert result.success
        credited = (
            balance(order.merchant_id)
            + balance(order.driver_id)
            + balance(house_wallet.user_id)
            - house_before
        )
        assert credited == order.order_total
        assert sum(t.amount for t in result.transactions) == order.order_total


class TestProcessPayoutNotification:
    """Tests for queueing the payout completed event."""

    def test_event_queued_after_commit(
        self,
        completed_order,
        recipient_wallets,
        mocker,
        django_capture_on_commit_callbacks,
    ):
        mock_delay = mocker.patch("payouts.tasks.dispatch_payout_event.delay")

        with django_capture_on_commit_callbacks(execute=True) as callbacks:
            result = PayoutOrchestrator.process_payout(completed_order.id)

        assert result.success
        assert len(callbacks) == 1
        event = PayoutEvent.objects.get(order=completed_order)
        mock_delay.assert_called_once_with(str(event.id))

    def test_nothing_queued_on_failure(
        self, db, mocker, django_capture_on_commit_callbacks
    ):
        mock_delay = mocker.patch("payouts.tasks.dispatch_payout_event.delay")

        with django_capture_on_commit_callbacks(execute=True) as callbacks:
            PayoutOrchestrator.process_payout(uuid.uuid4())

        assert callbacks == []
        mock_delay.assert_not_called()

    def test_queue_failure_does_not_fail_payout(
        self,
        completed_order,
        recipient_wallets,
        mocker,
        django_capture_on_commit_callbacks,
    ):
        mocker.patch(
            "payouts.tasks.dispatch_payout_event.delay",
            side_effect=ConnectionError("broker unreachable"),
        )

        with django_capture_on_commit_callbacks(execute=True):
            result = PayoutOrchestrator.process_payout(completed_order.id)

        assert result.success
        assert balance(completed_order.merchant_id) == Decimal("100.00")
        event = PayoutEvent.objects.get(order=completed_order)
        assert event.status == PayoutEventStatus.PENDING


@requires_postgres
@pytest.mark.django_db(transaction=True)
class TestConcurrentPayout:
    """Racing process_payout calls on separate connections."""

    def test_racing_payouts_credit_wallets_once(
        self, completed_order, recipient_wallets, mocker
    ):
        mocker.patch("payouts.tasks.dispatch_payout_event.delay")

        results = race(PayoutOrchestrator.process_payout, completed_order.id)

        assert sorted(r.success for r in results) == [False, True]
        loser = next(r for r in results if not r.success)
        assert loser.error_code == "ORDER_NOT_ELIGIBLE"
        assert balance(completed_order.merchant_id) == Decimal("100.00")
        assert balance(completed_order.driver_id) == Decimal("8.00")
        assert PayoutTransaction.objects.filter(order=completed_order).count() == 3
        assert PayoutEvent.objects.filter(order=completed_order).count() == 1


# =============================================================================
# test_payout_calculation
# =============================================================================


class TestPayoutDryRun:
    """Tests for PayoutOrchestrator.test_payout_calculation."""

    def test_returns_same_split_as_real_payout(self, completed_order, recipient_wallets):
        preview = PayoutOrchestrator.test_payout_calculation(completed_order.id)
        result = PayoutOrchestrator.process_payout(completed_order.id)

        assert preview.success
        assert preview.dry_run is True
        assert preview.calculations == result.calculations
        assert [t.amount for t in preview.transactions] == [
            t.amount for t in result.transactions
        ]

    def test_writes_nothing(self, completed_order, recipient_wallets):
        snapshot = ledger_snapshot()

        PayoutOrchestrator.test_payout_calculation(completed_order.id)

        assert ledger_snapshot() == snapshot
        assert Order.objects.get(id=completed_order.id).payout_status == PayoutStatus.PENDING

    def test_previews_already_paid_out_order(self, completed_order, recipient_wallets):
        PayoutOrchestrator.process_payout(completed_order.id)

        preview = PayoutOrchestrator.test_payout_calculation(completed_order.id)

        assert preview.success
        assert preview.calculations.total_payout == Decimal("115.00")

    def test_unknown_order(self, db):
        preview = PayoutOrchestrator.test_payout_calculation(uuid.uuid4())

        assert not preview.success
        assert preview.dry_run is True
        assert preview.details["reason"] == "not_found"

    def test_order_store_unavailable(self, db, mocker):
        order_id = uuid.uuid4()
        mocker.patch.object(
            Order.objects, "get", side_effect=OperationalError("db gone")
        )

        preview = PayoutOrchestrator.test_payout_calculation(order_id)

        assert not preview.success
        assert preview.dry_run is True
        assert preview.order_id == order_id
        assert preview.error_code == "ORDER_STORE_UNAVAILABLE"
