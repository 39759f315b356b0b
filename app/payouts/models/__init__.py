"""
Payout domain models.

This module contains all payout-related models:
- Order: Fulfilled marketplace order read by the payout engine
- PaymentSetting: Key/value payment settings store
- Wallet: Running balance per recipient (including the house account)
- PayoutTransaction: Immutable ledger entries
- PayoutEvent: Outbox for payout completed notifications
"""

from payouts.models.order import Order
from payouts.models.payment_setting import PaymentSetting
from payouts.models.payout_event import PayoutEvent
from payouts.models.transaction import PayoutTransaction
from payouts.models.wallet import Wallet

__all__ = [
    "Order",
    "PaymentSetting",
    "PayoutEvent",
    "PayoutTransaction",
    "Wallet",
]
