"""
Payout-specific exceptions for payout operations.

This module provides a hierarchy of exceptions for the payout engine,
inheriting from the core exception base classes for API consistency.

Exception Hierarchy:
    PayoutError (base for payout domain)
    ├── OrderNotEligible - Order missing, not completed, or already paid out
    ├── CalculationMismatch - Split does not add up to the order total (fatal)
    ├── LedgerWriteFailed - Wallet credit or transaction insert failed
    ├── SettingsUnavailable - Settings store could not be read
    ├── OrderStoreUnavailable - Order store could not be read
    ├── WalletNotFound - No wallet for a recipient
    └── PayoutValidationError - Invalid input
        ├── InvalidOrderAmounts - Negative item total or fees
        └── InvalidPaymentSettings - Setting unparseable or out of range

    ImmutableTransactionError - Edit of a written transaction (inherits ConflictError)

Usage:
    from payouts.exceptions import OrderNotEligible, LedgerWriteFailed

    raise OrderNotEligible(
        f"Order {order_id} is not eligible for payout",
        details={"order_id": str(order_id), "reason": "already_paid_out"},
    )

    raise LedgerWriteFailed(
        recipient_id=draft.recipient_id,
        step="wallet_update",
        reason="wallet not found",
    )
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.exceptions import BaseApplicationError, ConflictError

if TYPE_CHECKING:
    import uuid
    from typing import Any


# =============================================================================
# Payout Domain Exceptions
# =============================================================================


class PayoutError(BaseApplicationError):
    """
    Base exception for all payout operations.

    The orchestrator converts every PayoutError into a failure
    PayoutResult; nothing outside this hierarchy is caught there.
    """

    default_error_code: str = "PAYOUT_ERROR"


class OrderNotEligible(PayoutError):
    """
    Raised when an order cannot be paid out.

    Covers "unknown id", "not yet completed" and "already paid out"
    uniformly; the distinction lives only in ``details["reason"]``.
    Not retried automatically; the caller must re-check order state.
    """

    default_error_code: str = "ORDER_NOT_ELIGIBLE"

    REASON_NOT_FOUND = "not_found"
    REASON_NOT_COMPLETED = "not_completed"
    REASON_ALREADY_PAID_OUT = "already_paid_out"


class CalculationMismatch(PayoutError):
    """
    Raised when the calculated split does not conserve the order total.

    Always fatal and never retried: it points at a settings or input data
    bug that needs investigation.
    """

    default_error_code: str = "CALCULATION_MISMATCH"


class LedgerWriteFailed(PayoutError):
    """
    Raised when a wallet credit or transaction insert fails.

    Carries the recipient and the failing step for manual reconciliation.

    Attributes:
        recipient_id: Recipient whose write failed (None for bulk steps)
        step: One of "claim_order", "wallet_update", "insert_transactions",
              "record_event"
    """

    default_error_code: str = "LEDGER_WRITE_FAILED"

    def __init__(
        self,
        recipient_id: uuid.UUID | None,
        step: str,
        reason: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.recipient_id = recipient_id
        self.step = step

        if recipient_id is not None:
            message = f"Ledger write failed at {step} for recipient {recipient_id}: {reason}"
        else:
            message = f"Ledger write failed at {step}: {reason}"

        full_details: dict[str, Any] = {
            "recipient_id": str(recipient_id) if recipient_id is not None else None,
            "step": step,
        }
        if details:
            full_details.update(details)

        super().__init__(message=message, error_code=error_code, details=full_details)


class SettingsUnavailable(PayoutError):
    """
    Raised when the settings store cannot be read.

    Defaults are never substituted for a store failure; they only
    fill in keys that are missing from a successful read.
    """

    default_error_code: str = "SETTINGS_UNAVAILABLE"


class OrderStoreUnavailable(PayoutError):
    """Raised when the order store cannot be read."""

    default_error_code: str = "ORDER_STORE_UNAVAILABLE"


class WalletNotFound(PayoutError):
    """Raised when a recipient has no wallet."""

    default_error_code: str = "WALLET_NOT_FOUND"


class PayoutValidationError(PayoutError):
    """Base for payout input validation failures."""

    default_error_code: str = "PAYOUT_VALIDATION_ERROR"


class InvalidOrderAmounts(PayoutValidationError):
    """Raised when an order carries a negative item total or fee."""

    default_error_code: str = "INVALID_ORDER_AMOUNTS"


class InvalidPaymentSettings(PayoutValidationError):
    """Raised when a payment setting is unparseable or out of range."""

    default_error_code: str = "INVALID_PAYMENT_SETTINGS"


# =============================================================================
# Ledger Integrity Exceptions
# =============================================================================


class ImmutableTransactionError(ConflictError):
    """
    Raised when code tries to modify a written transaction.

    Corrections are recorded as new ADJUSTMENT transactions instead.
    """

    default_error_code: str = "IMMUTABLE_TRANSACTION"
