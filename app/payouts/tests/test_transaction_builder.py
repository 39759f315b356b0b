"""
Tests for TransactionBuilder.
"""

import uuid
from decimal import Decimal

import pytest
from django.test import override_settings

from payouts.constants import DEFAULT_HOUSE_ACCOUNT_ID
from payouts.models import Order
from payouts.services import PayoutCalculator, TransactionBuilder
from payouts.state_machines import (
    TransactionRole,
    TransactionStatus,
    TransactionType,
)
from payouts.types import PaymentSettings


@pytest.fixture
def order():
    return Order(
        merchant_id=uuid.uuid4(),
        driver_id=uuid.uuid4(),
        customer_id=uuid.uuid4(),
        item_total=Decimal("100.00"),
        delivery_fee=Decimal("10.00"),
        service_fee=Decimal("5.00"),
    )


def build(order, settings=None):
    calculation = PayoutCalculator.calculate(order, settings or PaymentSettings())
    return TransactionBuilder.build_transactions(order, calculation)


class TestBuildTransactions:
    """Tests for TransactionBuilder.build_transactions."""

    def test_builds_three_drafts_in_fixed_order(self, order):
        drafts = build(order)

        assert [d.role for d in drafts] == [
            TransactionRole.MERCHANT,
            TransactionRole.DRIVER,
            TransactionRole.HOUSE,
        ]
        assert [d.recipient_id for d in drafts] == [
            order.merchant_id,
            order.driver_id,
            DEFAULT_HOUSE_ACCOUNT_ID,
        ]
        assert [d.amount for d in drafts] == [
            Decimal("100.00"),
            Decimal("8.00"),
            Decimal("7.00"),
        ]

    def test_drafts_are_pending_payouts_for_the_order(self, order):
        drafts = build(order)

        for draft in drafts:
            assert draft.order_id == order.id
            assert draft.status == TransactionStatus.PENDING
            assert draft.transaction_type == TransactionType.PAYOUT
            assert draft.external_reference is None

    def test_descriptions(self, order):
        merchant, driver, house = build(order)

        assert merchant.description == f"Payout for order {order.id} - Item total"
        assert driver.description == f"Payout for order {order.id} - Delivery fee (80%)"
        assert house.description == (
            f"Payout for order {order.id} - Service fee + delivery fee portion"
        )

    def test_driver_description_reflects_configured_percentage(self, order):
        settings = PaymentSettings(driver_payout_percentage=Decimal("0.75"))

        _, driver, _ = build(order, settings)

        assert driver.description.endswith("Delivery fee (75%)")

    def test_zero_delivery_fee_reports_zero_percent(self, order):
        order.delivery_fee = Decimal("0.00")

        _, driver, _ = build(order)

        assert driver.amount == Decimal("0.00")
        assert driver.description.endswith("Delivery fee (0%)")

    def test_house_recipient_follows_setting(self, order):
        house_id = uuid.uuid4()

        with override_settings(PAYOUT_HOUSE_ACCOUNT_ID=str(house_id)):
            _, _, house = build(order)

        assert house.recipient_id == house_id

    def test_drafts_sum_to_order_total(self, order):
        drafts = build(order)

        assert sum(d.amount for d in drafts) == order.order_total
