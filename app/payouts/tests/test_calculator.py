"""
Tests for PayoutCalculator.

Tests cover:
- The worked example split
- Driver percentage boundaries (0 and 1)
- Zero delivery fee
- Half-up rounding and exact cent conservation
- Tax on the service fee and the conservation check
- Rejection of negative order amounts

The calculator is pure, so these tests use unsaved Order instances.
"""

import uuid
from decimal import Decimal

import pytest

from payouts.exceptions import CalculationMismatch, InvalidOrderAmounts
from payouts.models import Order
from payouts.services import PayoutCalculator
from payouts.types import PaymentSettings


def make_order(item_total="100.00", delivery_fee="10.00", service_fee="5.00") -> Order:
    return Order(
        merchant_id=uuid.uuid4(),
        driver_id=uuid.uuid4(),
        customer_id=uuid.uuid4(),
        item_total=Decimal(item_total),
        delivery_fee=Decimal(delivery_fee),
        service_fee=Decimal(service_fee),
    )


class TestPayoutCalculatorSplit:
    """Tests for the merchant, driver and house split."""

    def test_worked_example(self):
        """100.00 / 10.00 / 5.00 at 80% splits into 100.00 / 8.00 / 7.00."""
        calculation = PayoutCalculator.calculate(make_order(), PaymentSettings())

        assert calculation.merchant_amount == Decimal("100.00")
        assert calculation.driver_amount == Decimal("8.00")
        assert calculation.house_amount == Decimal("7.00")
        assert calculation.service_fee_tax == Decimal("0.00")
        assert calculation.total_payout == Decimal("115.00")

    def test_merchant_receives_item_total(self):
        order = make_order(item_total="42.37")

        calculation = PayoutCalculator.calculate(order, PaymentSettings())

        assert calculation.merchant_amount == Decimal("42.37")

    def test_zero_driver_percentage_sends_whole_fee_to_house(self):
        settings = PaymentSettings(driver_payout_percentage=Decimal("0"))

        calculation = PayoutCalculator.calculate(make_order(), settings)

        assert calculation.driver_amount == Decimal("0.00")
        assert calculation.house_amount == Decimal("15.00")

    def test_full_driver_percentage_sends_whole_fee_to_driver(self):
        settings = PaymentSettings(driver_payout_percentage=Decimal("1"))

        calculation = PayoutCalculator.calculate(make_order(), settings)

        assert calculation.driver_amount == Decimal("10.00")
        assert calculation.house_amount == Decimal("5.00")

    def test_zero_delivery_fee(self):
        order = make_order(delivery_fee="0.00")

        calculation = PayoutCalculator.calculate(order, PaymentSettings())

        assert calculation.driver_amount == Decimal("0.00")
        assert calculation.house_amount == Decimal("5.00")
        assert calculation.total_payout == Decimal("105.00")

    def test_all_zero_order(self):
        order = make_order("0.00", "0.00", "0.00")

        calculation = PayoutCalculator.calculate(order, PaymentSettings())

        assert calculation == calculation.zero()


class TestPayoutCalculatorRounding:
    """Tests for output rounding."""

    def test_rounds_half_up(self):
        """0.10 x 25% = 0.025 rounds to 0.03, not banker's 0.02."""
        order = make_order(item_total="0.00", delivery_fee="0.10", service_fee="0.00")
        settings = PaymentSettings(driver_payout_percentage=Decimal("0.25"))

        calculation = PayoutCalculator.calculate(order, settings)

        assert calculation.driver_amount == Decimal("0.03")
        assert calculation.house_amount == Decimal("0.07")

    @pytest.mark.parametrize(
        "item_total,delivery_fee,service_fee,driver_pct",
        [
            ("1.00", "0.05", "0.00", "0.75"),
            ("19.99", "3.33", "1.49", "0.8"),
            ("0.01", "0.01", "0.01", "0.5"),
            ("250.00", "7.77", "12.50", "0.333"),
        ],
    )
    def test_split_conserves_total_exactly(
        self, item_total, delivery_fee, service_fee, driver_pct
    ):
        order = make_order(item_total, delivery_fee, service_fee)
        settings = PaymentSettings(driver_payout_percentage=Decimal(driver_pct))

        calculation = PayoutCalculator.calculate(order, settings)

        assert calculation.total_payout == order.order_total
        assert (
            calculation.merchant_amount
            + calculation.driver_amount
            + calculation.house_amount
            == calculation.total_payout
        )
        for amount in (
            calculation.merchant_amount,
            calculation.driver_amount,
            calculation.house_amount,
        ):
            assert amount >= 0
            assert amount == amount.quantize(Decimal("0.01"))


class TestPayoutCalculatorTax:
    """Tests for service fee tax."""

    def test_zero_service_fee_with_tax_rate_is_consistent(self):
        order = make_order(service_fee="0.00")
        settings = PaymentSettings(tax_rate_service_fee=Decimal("0.10"))

        calculation = PayoutCalculator.calculate(order, settings)

        assert calculation.service_fee_tax == Decimal("0.00")
        assert calculation.total_payout == Decimal("110.00")

    def test_tax_beyond_tolerance_raises_mismatch(self):
        """Tax is added to the house share, so it breaks conservation."""
        settings = PaymentSettings(tax_rate_service_fee=Decimal("0.10"))

        with pytest.raises(CalculationMismatch) as exc_info:
            PayoutCalculator.calculate(make_order(), settings)

        assert exc_info.value.error_code == "CALCULATION_MISMATCH"
        assert exc_info.value.details["order_total"] == "115.00"

    def test_tax_within_tolerance_is_accepted(self):
        """0.10 x 10% = 0.01 drift is within the one cent tolerance."""
        order = make_order(item_total="0.00", delivery_fee="0.00", service_fee="0.10")
        settings = PaymentSettings(tax_rate_service_fee=Decimal("0.10"))

        calculation = PayoutCalculator.calculate(order, settings)

        assert calculation.service_fee_tax == Decimal("0.01")
        assert calculation.total_payout == Decimal("0.11")


class TestPayoutCalculatorValidation:
    """Tests for input validation."""

    @pytest.mark.parametrize("field", ["item_total", "delivery_fee", "service_fee"])
    def test_negative_amount_rejected(self, field):
        amounts = {"item_total": "10.00", "delivery_fee": "1.00", "service_fee": "1.00"}
        amounts[field] = "-0.01"
        order = make_order(**amounts)

        with pytest.raises(InvalidOrderAmounts) as exc_info:
            PayoutCalculator.calculate(order, PaymentSettings())

        assert exc_info.value.details[field] == "-0.01"
