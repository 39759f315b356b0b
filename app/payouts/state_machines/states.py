"""
State enums for payout models.

This module defines all state enums used by payout models. These are
Django TextChoices for database storage and admin integration.

State Machines Overview:

Order States (owned by the order pipeline, read by the payout engine):
    pending → confirmed → preparing → in_transit → delivered → completed
    any non-terminal state → cancelled

Order Payout States:
    pending → completed (single conditional update, never reversed)

PayoutEvent States (django-fsm):
    pending → dispatched
    pending → failed → pending (retry)
"""

from django.db import models


class OrderStatus(models.TextChoices):
    """
    Fulfilment states of a marketplace order.

    Only COMPLETED orders are eligible for payout.
    """

    PENDING = "pending", "Pending"
    CONFIRMED = "confirmed", "Confirmed"
    PREPARING = "preparing", "Preparing"
    IN_TRANSIT = "in_transit", "In Transit"
    DELIVERED = "delivered", "Delivered"
    COMPLETED = "completed", "Completed"
    CANCELLED = "cancelled", "Cancelled"


class PayoutStatus(models.TextChoices):
    """
    Payout state of an order.

    Drives idempotency: an order is paid out at most once, and the
    PENDING → COMPLETED flip is the compare-and-swap that claims it.
    """

    PENDING = "pending", "Pending"
    COMPLETED = "completed", "Completed"


class TransactionRole(models.TextChoices):
    """Recipient role of a payout transaction."""

    MERCHANT = "merchant", "Merchant"
    DRIVER = "driver", "Driver"
    HOUSE = "house", "House"


class TransactionType(models.TextChoices):
    """
    Kind of ledger transaction.

    Values:
        PAYOUT: Share of a completed order credited to a recipient
        REFUND: Money returned due to cancellation/dispute
        ADJUSTMENT: Manual correction; the only way to amend a written payout
    """

    PAYOUT = "payout", "Payout"
    REFUND = "refund", "Refund"
    ADJUSTMENT = "adjustment", "Adjustment"


class TransactionStatus(models.TextChoices):
    """Status of a ledger transaction."""

    PENDING = "pending", "Pending"
    COMPLETED = "completed", "Completed"
    FAILED = "failed", "Failed"


class PayoutEventStatus(models.TextChoices):
    """
    States for the PayoutEvent outbox lifecycle.

    State Flow:
        PENDING → DISPATCHED
        PENDING → FAILED → PENDING (retry)
    """

    PENDING = "pending", "Pending"
    DISPATCHED = "dispatched", "Dispatched"
    FAILED = "failed", "Failed"
