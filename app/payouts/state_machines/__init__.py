"""
State machine enums for payout models.

This module defines the state enums used by payout models with django-fsm.
"""

from payouts.state_machines.states import (
    OrderStatus,
    PayoutEventStatus,
    PayoutStatus,
    TransactionRole,
    TransactionStatus,
    TransactionType,
)

__all__ = [
    "OrderStatus",
    "PayoutEventStatus",
    "PayoutStatus",
    "TransactionRole",
    "TransactionStatus",
    "TransactionType",
]
