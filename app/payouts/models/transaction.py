"""
PayoutTransaction model for ledger entries.

One row per recipient per payout (merchant, driver, house), plus any
later adjustments. Rows are immutable once written: corrections are new
ADJUSTMENT rows, never edits.

Usage:
    from payouts.models import PayoutTransaction

    # Payout history for a recipient
    PayoutTransaction.objects.payouts().for_recipient(user_id)
"""

from __future__ import annotations

import uuid

from django.db import models

from core.model_mixins import UUIDPrimaryKeyMixin

from payouts.exceptions import ImmutableTransactionError
from payouts.state_machines import (
    TransactionRole,
    TransactionStatus,
    TransactionType,
)


class PayoutTransactionQuerySet(models.QuerySet):
    """QuerySet with recipient and type filters."""

    def for_recipient(self, recipient_id: uuid.UUID) -> PayoutTransactionQuerySet:
        return self.filter(recipient_id=recipient_id)

    def payouts(self) -> PayoutTransactionQuerySet:
        return self.filter(transaction_type=TransactionType.PAYOUT)


class PayoutTransaction(UUIDPrimaryKeyMixin, models.Model):
    """
    A ledger entry crediting one recipient.

    Fields:
        order: Order this entry belongs to
        recipient_id: Wallet owner credited by this entry
        amount: Amount credited (negative only for adjustments)
        role: merchant, driver or house
        description: Human-readable description
        transaction_type: payout, refund or adjustment
        status: pending, completed or failed
        external_reference: Optional id in an external system
        created_at: When the entry was written

    Constraints:
        - At most one PAYOUT entry per (order, role); this is the unique
          payout key that makes a double payout impossible at the
          database level.
    """

    order = models.ForeignKey(
        "payouts.Order",
        on_delete=models.PROTECT,
        related_name="transactions",
        help_text="Order this entry belongs to",
    )
    recipient_id = models.UUIDField(
        db_index=True,
        help_text="Wallet owner credited by this entry",
    )
    amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        help_text="Amount credited to the recipient",
    )
    role = models.CharField(
        max_length=20,
        choices=TransactionRole.choices,
        help_text="Recipient role",
    )
    description = models.TextField(
        blank=True,
        default="",
        help_text="Human-readable description of this entry",
    )
    transaction_type = models.CharField(
        max_length=20,
        choices=TransactionType.choices,
        default=TransactionType.PAYOUT,
        db_index=True,
        help_text="Category of this entry",
    )
    status = models.CharField(
        max_length=20,
        choices=TransactionStatus.choices,
        default=TransactionStatus.PENDING,
        help_text="Status of this entry",
    )
    external_reference = models.CharField(
        max_length=255,
        null=True,
        blank=True,
        help_text="Reference in an external system (e.g., a transfer id)",
    )
    created_at = models.DateTimeField(
        auto_now_add=True,
        db_index=True,
        help_text="Timestamp when this entry was written",
    )

    objects = PayoutTransactionQuerySet.as_manager()

    class Meta:
        ordering = ["-created_at"]
        verbose_name = "Payout Transaction"
        verbose_name_plural = "Payout Transactions"
        indexes = [
            models.Index(
                fields=["recipient_id", "transaction_type"],
                name="ptx_recipient_type_idx",
            ),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["order", "role"],
                condition=models.Q(transaction_type=TransactionType.PAYOUT),
                name="unique_payout_per_order_role",
            ),
        ]

    def __str__(self) -> str:
        """Return string representation with role and amount."""
        return f"{self.get_transaction_type_display()}: {self.role} {self.amount}"

    def save(self, *args, **kwargs):
        """Write a new entry; existing entries cannot be modified."""
        if not self._state.adding:
            raise ImmutableTransactionError(
                f"Transaction {self.id} is immutable; record an adjustment instead",
                details={"transaction_id": str(self.id)},
            )
        super().save(*args, **kwargs)
