"""
Constants for the payout engine.

The house account is the platform's own revenue wallet. Its identifier is
a fixed sentinel that never collides with a real user id; it is
configurable through ``settings.PAYOUT_HOUSE_ACCOUNT_ID`` and must be
provisioned (see the ``provision_house_account`` command) before any
payout runs.
"""

from __future__ import annotations

import uuid
from decimal import Decimal

from django.conf import settings

DEFAULT_HOUSE_ACCOUNT_ID = uuid.UUID("00000000-0000-0000-0000-000000000000")

# Fallback values for keys missing from the payment settings store
DEFAULT_PAYMENT_SETTINGS: dict[str, Decimal] = {
    "driver_payout_percentage": Decimal("0.80"),
    "tax_rate_service_fee": Decimal("0.00"),
    "house_service_fee_percentage": Decimal("0.25"),
    "minimum_payout_amount": Decimal("5.00"),
}

# Allowed drift between the split and the order total
CALCULATION_TOLERANCE = Decimal("0.01")

PAYOUT_COMPLETED_EVENT = "payout.completed"


def get_house_account_id() -> uuid.UUID:
    """Return the configured house account id."""
    value = getattr(settings, "PAYOUT_HOUSE_ACCOUNT_ID", None)
    if not value:
        return DEFAULT_HOUSE_ACCOUNT_ID
    if isinstance(value, uuid.UUID):
        return value
    return uuid.UUID(str(value))
