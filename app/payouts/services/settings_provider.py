"""
Settings provider for payout configuration.

Reads the key/value payment settings store and materializes a fresh
PaymentSettings value on every call. Keys missing from the store fall
back to defaults; a store that cannot be read is an error, never a
silent fallback.

Usage:
    from payouts.services import SettingsProvider

    settings = SettingsProvider.get_payment_settings()
    settings.driver_payout_percentage  # Decimal('0.80')
"""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation

from django.db import DatabaseError

from payouts.constants import DEFAULT_PAYMENT_SETTINGS
from payouts.exceptions import InvalidPaymentSettings, SettingsUnavailable
from payouts.models import PaymentSetting
from payouts.types import PaymentSettings

logger = logging.getLogger(__name__)


class SettingsProvider:
    """
    Loads payout settings from the PaymentSetting table.

    All methods are static - no instance state is maintained, and no
    value is cached between calls.
    """

    @staticmethod
    def get_payment_settings() -> PaymentSettings:
        """
        Load the current payment settings.

        Returns:
            PaymentSettings with stored values, defaults for missing keys

        Raises:
            SettingsUnavailable: If the settings store cannot be read
            InvalidPaymentSettings: If a stored value is unparseable or
                out of range
        """
        try:
            rows = dict(
                PaymentSetting.objects.filter(
                    key__in=DEFAULT_PAYMENT_SETTINGS.keys()
                ).values_list("key", "value")
            )
        except DatabaseError as e:
            logger.error(
                "Failed to read payment settings",
                extra={"error": str(e)},
            )
            raise SettingsUnavailable(
                "Payment settings store is unavailable",
                details={"error": str(e)},
            ) from e

        values: dict[str, Decimal] = {}
        for key, default in DEFAULT_PAYMENT_SETTINGS.items():
            if key not in rows:
                values[key] = default
                continue
            raw = rows[key]
            try:
                values[key] = Decimal(str(raw).strip())
            except InvalidOperation as e:
                raise InvalidPaymentSettings(
                    f"Payment setting {key} is not a number: {raw!r}",
                    details={"key": key, "value": raw},
                ) from e
            if not values[key].is_finite():
                raise InvalidPaymentSettings(
                    f"Payment setting {key} is not a finite number: {raw!r}",
                    details={"key": key, "value": raw},
                )

        try:
            return PaymentSettings(**values)
        except ValueError as e:
            raise InvalidPaymentSettings(
                str(e),
                details={key: str(value) for key, value in values.items()},
            ) from e
