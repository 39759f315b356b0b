"""
Payouts app configuration.

This app provides the payout engine:
- Payment settings store
- Payout calculation and transaction building
- Wallet ledger writes
- Payout completed events
"""

from django.apps import AppConfig


class PayoutsConfig(AppConfig):
    """Configuration for the payouts application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "payouts"
    verbose_name = "Payouts"
