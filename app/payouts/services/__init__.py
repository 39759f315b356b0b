"""
Payout services.

This module provides:
- SettingsProvider: Loads payment settings fresh per call
- PayoutCalculator: Splits an order's total (pure)
- TransactionBuilder: Builds merchant, driver and house drafts (pure)
- LedgerWriter: Applies drafts to wallets and the transaction store
- PayoutOrchestrator: Entry point for payouts and dry runs
- PayoutHistoryService: Read-only history and earnings queries

Usage:
    from payouts.services import PayoutOrchestrator

    result = PayoutOrchestrator.process_payout(order_id)

    # Preview without writing anything
    preview = PayoutOrchestrator.test_payout_calculation(order_id)
"""

from payouts.services.calculator import PayoutCalculator
from payouts.services.history import PayoutHistoryService
from payouts.services.ledger_writer import LedgerWriter
from payouts.services.orchestrator import PayoutOrchestrator
from payouts.services.settings_provider import SettingsProvider
from payouts.services.transaction_builder import TransactionBuilder

__all__ = [
    "LedgerWriter",
    "PayoutCalculator",
    "PayoutHistoryService",
    "PayoutOrchestrator",
    "SettingsProvider",
    "TransactionBuilder",
]
