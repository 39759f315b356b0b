"""
Wallet model holding a running balance per recipient.

Every merchant, driver and the house account has one wallet. Balances
are mutated only by the Ledger Writer, and only through single-statement
atomic increments (``F("balance") + amount``), never read-modify-write.

Usage:
    from payouts.models import Wallet

    wallet = Wallet.objects.create(user_id=merchant_id)
    Wallet.objects.credit(merchant_id, Decimal("100.00"))
"""

from __future__ import annotations

import uuid
from decimal import Decimal

from django.db import models
from django.db.models import F
from django.utils import timezone

from core.model_mixins import UUIDPrimaryKeyMixin
from core.models import BaseModel


class WalletQuerySet(models.QuerySet):
    """QuerySet with atomic balance operations."""

    def credit(self, user_id: uuid.UUID, amount: Decimal) -> bool:
        """
        Add ``amount`` to a wallet in one UPDATE statement.

        Negative amounts debit the wallet (used by adjustments).

        Returns:
            True if a wallet was updated, False if none exists
        """
        updated = self.filter(user_id=user_id).update(
            balance=F("balance") + amount,
            updated_at=timezone.now(),
        )
        return updated == 1


class Wallet(UUIDPrimaryKeyMixin, BaseModel):
    """
    Running balance for one user or the house account.

    Fields:
        user_id: Owner of the wallet (the house sentinel for the house wallet)
        balance: Current balance
        currency: ISO 4217 currency code
        is_house: Whether this is the platform's revenue wallet
    """

    user_id = models.UUIDField(
        unique=True,
        help_text="Owner of this wallet",
    )
    balance = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text="Current balance",
    )
    currency = models.CharField(
        max_length=3,
        default="usd",
        help_text="ISO 4217 currency code (lowercase)",
    )
    is_house = models.BooleanField(
        default=False,
        help_text="Whether this is the platform's house account",
    )

    objects = WalletQuerySet.as_manager()

    class Meta:
        ordering = ["-created_at"]
        verbose_name = "Wallet"
        verbose_name_plural = "Wallets"

    def __str__(self) -> str:
        """Return string representation with owner and balance."""
        label = "house" if self.is_house else self.user_id
        return f"Wallet({label}, {self.balance} {self.currency.upper()})"
