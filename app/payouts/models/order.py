"""
Order model as seen by the payout engine.

An Order is one fulfilled marketplace transaction. The payout engine
reads its amounts and flips ``payout_status`` exactly once; the rest of
the order lifecycle belongs to the order pipeline.

Usage:
    from payouts.models import Order

    order = Order.objects.create(
        merchant_id=merchant_id,
        driver_id=driver_id,
        customer_id=customer_id,
        item_total=Decimal("100.00"),
        delivery_fee=Decimal("10.00"),
        service_fee=Decimal("5.00"),
        status=OrderStatus.COMPLETED,
    )

    # Claim the order for payout (compare-and-swap)
    claimed = Order.objects.claim_for_payout(order.id)
"""

from __future__ import annotations

import uuid
from decimal import Decimal

from django.db import models
from django.utils import timezone

from core.model_mixins import UUIDPrimaryKeyMixin
from core.models import BaseModel

from payouts.state_machines import OrderStatus, PayoutStatus


class OrderQuerySet(models.QuerySet):
    """QuerySet with payout eligibility helpers."""

    def eligible_for_payout(self) -> OrderQuerySet:
        """Orders that are completed and not yet paid out."""
        return self.filter(
            status=OrderStatus.COMPLETED,
            payout_status=PayoutStatus.PENDING,
        )

    def claim_for_payout(self, order_id: uuid.UUID) -> bool:
        """
        Atomically flip ``payout_status`` from PENDING to COMPLETED.

        Issues a single conditional UPDATE, so two concurrent callers can
        never both claim the same order.

        Returns:
            True if this call claimed the order, False otherwise
        """
        now = timezone.now()
        updated = self.eligible_for_payout().filter(id=order_id).update(
            payout_status=PayoutStatus.COMPLETED,
            paid_out_at=now,
            updated_at=now,
        )
        return updated == 1


class Order(UUIDPrimaryKeyMixin, BaseModel):
    """
    One fulfilled marketplace transaction.

    Fields:
        merchant_id: Merchant being paid for the items
        driver_id: Driver who delivered the order
        customer_id: Customer who placed the order
        item_total: Price of the items
        delivery_fee: Delivery charge, split between driver and house
        service_fee: Platform service charge
        status: Fulfilment status (payout requires COMPLETED)
        payout_status: PENDING until the order is paid out
        completed_at: When the order was completed
        paid_out_at: When the payout was applied

    Note:
        ``item_total + delivery_fee + service_fee`` is the authoritative
        total; it is never recomputed from payout amounts.
    """

    # ==========================================================================
    # Owner References (not owned by this service)
    # ==========================================================================

    merchant_id = models.UUIDField(
        db_index=True,
        help_text="Merchant user id",
    )
    driver_id = models.UUIDField(
        db_index=True,
        help_text="Driver user id",
    )
    customer_id = models.UUIDField(
        db_index=True,
        help_text="Customer user id",
    )

    # ==========================================================================
    # Amounts
    # ==========================================================================

    item_total = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        help_text="Total price of the items",
    )
    delivery_fee = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text="Delivery fee charged to the customer",
    )
    service_fee = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text="Service fee charged to the customer",
    )

    # ==========================================================================
    # State
    # ==========================================================================

    status = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.PENDING,
        db_index=True,
        help_text="Fulfilment status of the order",
    )
    payout_status = models.CharField(
        max_length=20,
        choices=PayoutStatus.choices,
        default=PayoutStatus.PENDING,
        db_index=True,
        help_text="Whether the order has been paid out",
    )

    completed_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text="When the order was completed",
    )
    paid_out_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text="When the payout was applied",
    )

    objects = OrderQuerySet.as_manager()

    class Meta:
        ordering = ["-created_at"]
        verbose_name = "Order"
        verbose_name_plural = "Orders"
        indexes = [
            models.Index(
                fields=["status", "payout_status"],
                name="order_status_payout_idx",
            ),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(item_total__gte=0),
                name="order_item_total_non_negative",
            ),
            models.CheckConstraint(
                condition=models.Q(delivery_fee__gte=0),
                name="order_delivery_fee_non_negative",
            ),
            models.CheckConstraint(
                condition=models.Q(service_fee__gte=0),
                name="order_service_fee_non_negative",
            ),
        ]

    def __str__(self) -> str:
        """Return string representation with ID, status and total."""
        return f"Order({self.id}, {self.status}, {self.order_total})"

    @property
    def order_total(self) -> Decimal:
        """Authoritative order total."""
        return self.item_total + self.delivery_fee + self.service_fee

    @property
    def is_paid_out(self) -> bool:
        return self.payout_status == PayoutStatus.COMPLETED

    def payout_ineligibility_reason(self) -> str | None:
        """
        Why this order cannot be paid out, or None if it can.

        Returns "not_completed" or "already_paid_out".
        """
        if self.status != OrderStatus.COMPLETED:
            return "not_completed"
        if self.is_paid_out:
            return "already_paid_out"
        return None
