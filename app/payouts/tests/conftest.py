"""
Pytest fixtures for payout tests.

Usage:
    def test_payout(completed_order, recipient_wallets):
        result = PayoutOrchestrator.process_payout(completed_order.id)
        assert result.success
"""

import pytest
from django.contrib.auth import get_user_model

from payouts.constants import get_house_account_id
from payouts.models import Wallet
from payouts.state_machines import OrderStatus
from payouts.tests.factories import OrderFactory, WalletFactory
from payouts.types import PaymentSettings


# =============================================================================
# Settings Fixtures
# =============================================================================


@pytest.fixture
def default_settings():
    """Payment settings with all defaults (80% driver share, no tax)."""
    return PaymentSettings()


# =============================================================================
# Order Fixtures
# =============================================================================


@pytest.fixture
def completed_order(db):
    """Completed 100.00 / 10.00 / 5.00 order awaiting payout."""
    return OrderFactory()


@pytest.fixture
def in_transit_order(db):
    """Order that has not been completed yet."""
    return OrderFactory(status=OrderStatus.IN_TRANSIT, completed_at=None)


# =============================================================================
# Wallet Fixtures
# =============================================================================


@pytest.fixture
def house_wallet(db):
    """The house wallet (normally created by migration)."""
    wallet, _ = Wallet.objects.get_or_create(
        user_id=get_house_account_id(),
        defaults={"is_house": True},
    )
    return wallet


@pytest.fixture
def recipient_wallets(db, completed_order, house_wallet):
    """Merchant, driver and house wallets for completed_order."""
    return {
        "merchant": WalletFactory(user_id=completed_order.merchant_id),
        "driver": WalletFactory(user_id=completed_order.driver_id),
        "house": house_wallet,
    }


# =============================================================================
# API Fixtures
# =============================================================================


@pytest.fixture
def staff_user(db):
    """Staff user allowed to call payout endpoints."""
    return get_user_model().objects.create_user(
        username="payout-admin",
        password="testpass123",
        is_staff=True,
    )


@pytest.fixture
def regular_user(db):
    return get_user_model().objects.create_user(
        username="merchant",
        password="testpass123",
    )


@pytest.fixture
def api_client():
    from rest_framework.test import APIClient

    return APIClient()


@pytest.fixture
def staff_client(api_client, staff_user):
    """APIClient authenticated as a staff user."""
    api_client.force_authenticate(user=staff_user)
    return api_client
