"""
Tests for PayoutHistoryService.
"""

import uuid
from datetime import datetime, timezone as dt_timezone
from decimal import Decimal

import pytest
from freezegun import freeze_time

from payouts.exceptions import WalletNotFound
from payouts.services import PayoutHistoryService
from payouts.state_machines import TransactionRole, TransactionType
from payouts.tests.factories import PayoutTransactionFactory, WalletFactory

NOW = "2026-03-15 12:00:00"


def pay(recipient_id, amount, at, role=TransactionRole.DRIVER, **kwargs):
    with freeze_time(at):
        return PayoutTransactionFactory(
            recipient_id=recipient_id,
            amount=Decimal(amount),
            role=role,
            **kwargs,
        )


@pytest.fixture
def driver_id():
    return uuid.uuid4()


@pytest.fixture
def driver_history(db, driver_id):
    """Payouts spread over the periods around NOW, plus one adjustment."""
    pay(driver_id, "1.00", "2025-12-31 23:00:00")
    pay(driver_id, "2.00", "2026-01-10 08:00:00")
    pay(driver_id, "4.00", "2026-03-02 08:00:00")
    pay(driver_id, "8.00", "2026-03-10 08:00:00")
    pay(driver_id, "16.00", "2026-03-15 09:00:00")
    pay(
        driver_id,
        "-5.00",
        "2026-03-15 10:00:00",
        transaction_type=TransactionType.ADJUSTMENT,
    )
    return driver_id


class TestPeriodStart:
    """Tests for PayoutHistoryService.period_start."""

    now = datetime(2026, 3, 15, 12, 30, tzinfo=dt_timezone.utc)

    @pytest.mark.parametrize(
        "period,expected",
        [
            ("day", datetime(2026, 3, 15, tzinfo=dt_timezone.utc)),
            ("week", datetime(2026, 3, 8, 12, 30, tzinfo=dt_timezone.utc)),
            ("month", datetime(2026, 3, 1, tzinfo=dt_timezone.utc)),
            ("year", datetime(2026, 1, 1, tzinfo=dt_timezone.utc)),
            ("fortnight", datetime(2026, 3, 1, tzinfo=dt_timezone.utc)),
        ],
    )
    def test_period_start(self, period, expected):
        assert PayoutHistoryService.period_start(period, now=self.now) == expected


class TestGetTotalEarnings:
    """Tests for PayoutHistoryService.get_total_earnings."""

    @pytest.mark.parametrize(
        "period,expected",
        [
            ("day", "16.00"),
            ("week", "24.00"),
            ("month", "28.00"),
            ("year", "30.00"),
        ],
    )
    def test_sums_payouts_in_period(self, driver_history, period, expected):
        with freeze_time(NOW):
            total = PayoutHistoryService.get_total_earnings(driver_history, period)

        assert total == Decimal(expected)

    def test_no_payouts_returns_zero(self, db):
        assert PayoutHistoryService.get_total_earnings(uuid.uuid4()) == Decimal("0.00")


class TestGetPayoutHistory:
    """Tests for PayoutHistoryService.get_payout_history."""

    def test_newest_first_and_excludes_adjustments(self, driver_history):
        history = list(PayoutHistoryService.get_payout_history(driver_history))

        assert [row.amount for row in history] == [
            Decimal("16.00"),
            Decimal("8.00"),
            Decimal("4.00"),
            Decimal("2.00"),
            Decimal("1.00"),
        ]

    def test_respects_limit(self, driver_history):
        history = PayoutHistoryService.get_payout_history(driver_history, limit=2)

        assert len(history) == 2

    def test_other_recipients_excluded(self, driver_history):
        assert list(PayoutHistoryService.get_payout_history(uuid.uuid4())) == []


class TestEarningsBreakdown:
    """Tests for PayoutHistoryService.get_earnings_breakdown."""

    def test_groups_by_role(self, db, driver_id):
        pay(driver_id, "8.00", NOW)
        pay(driver_id, "2.00", NOW)
        pay(driver_id, "50.00", NOW, role=TransactionRole.MERCHANT)

        breakdown = PayoutHistoryService.get_earnings_breakdown(driver_id)

        assert breakdown == {
            "driver": Decimal("10.00"),
            "merchant": Decimal("50.00"),
        }


class TestWalletSummary:
    """Tests for balance lookups and the combined summary."""

    def test_wallet_balance(self, db):
        wallet = WalletFactory(balance=Decimal("42.10"))

        assert PayoutHistoryService.get_wallet_balance(wallet.user_id) == Decimal("42.10")

    def test_missing_wallet_raises(self, db):
        with pytest.raises(WalletNotFound):
            PayoutHistoryService.get_wallet_balance(uuid.uuid4())

    def test_summary(self, driver_history):
        WalletFactory(user_id=driver_history, balance=Decimal("25.00"))

        with freeze_time(NOW):
            result = PayoutHistoryService.get_wallet_summary(driver_history, "week")

        assert result.success
        assert result.data == {
            "recipient_id": driver_history,
            "balance": Decimal("25.00"),
            "period": "week",
            "period_earnings": Decimal("24.00"),
            "breakdown": {"driver": Decimal("31.00")},
        }

    def test_summary_unknown_period_uses_month(self, driver_history):
        WalletFactory(user_id=driver_history)

        with freeze_time(NOW):
            result = PayoutHistoryService.get_wallet_summary(driver_history, "decade")

        assert result.data["period"] == "month"
        assert result.data["period_earnings"] == Decimal("28.00")

    def test_summary_without_wallet_fails(self, db):
        result = PayoutHistoryService.get_wallet_summary(uuid.uuid4())

        assert not result.success
        assert result.error_code == "WALLET_NOT_FOUND"
