"""
PaymentSetting model: the key/value payment settings store.

Each row overrides one payout setting; missing keys fall back to the
defaults in ``payouts.constants.DEFAULT_PAYMENT_SETTINGS``.

Usage:
    PaymentSetting.objects.update_or_create(
        key="driver_payout_percentage",
        defaults={"value": "0.75"},
    )
"""

from __future__ import annotations

from django.db import models

from core.models import BaseModel


class PaymentSetting(BaseModel):
    """
    One payment configuration value.

    Fields:
        key: Setting name (e.g., "driver_payout_percentage")
        value: Raw value as text, parsed as a decimal when read
        description: Optional note for admins
    """

    key = models.CharField(
        max_length=100,
        unique=True,
        help_text="Setting name",
    )
    value = models.CharField(
        max_length=255,
        help_text="Setting value (decimal as text)",
    )
    description = models.TextField(
        blank=True,
        default="",
        help_text="What this setting controls",
    )

    class Meta:
        ordering = ["key"]
        verbose_name = "Payment Setting"
        verbose_name_plural = "Payment Settings"

    def __str__(self) -> str:
        return f"{self.key}={self.value}"
