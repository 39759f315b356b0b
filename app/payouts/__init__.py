"""
Payouts app for marketplace order settlement.

This app handles:
- Payout calculation for completed orders (merchant, driver, house split)
- Ledger transaction records and wallet balance updates
- Dry-run previews of payout amounts
- Payout history and earnings summaries per recipient
- The "payout completed" notification side channel

Usage:
    from payouts.services import PayoutOrchestrator

    # Settle a completed order
    result = PayoutOrchestrator.process_payout(order_id)

    # Preview without touching any balances
    preview = PayoutOrchestrator.test_payout_calculation(order_id)
"""
