"""
Data types for payout operations.

This module defines dataclasses used throughout the payout engine
for type-safe data transfer between layers.

Types:
    PaymentSettings: Payout configuration, loaded fresh per call
    PayoutCalculation: Monetary breakdown of one order
    TransactionDraft: Unpersisted ledger entry produced by the builder
    PayoutResult: Outcome of processing or previewing a payout

All amounts are ``Decimal``. Rounding happens only at the output boundary
(``quantize_money``), never mid-calculation.

Usage:
    from payouts.types import PaymentSettings, PayoutCalculation

    settings = PaymentSettings(driver_payout_percentage=Decimal("0.80"))
    calculation = PayoutCalculator.calculate(order, settings)
    print(calculation.total_payout)  # Decimal('115.00')
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from payouts.exceptions import PayoutError


CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def quantize_money(value: Decimal) -> Decimal:
    """Round a monetary value to cents using half-up rounding."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class PaymentSettings:
    """
    Process-wide payout configuration.

    Passed explicitly into the calculator on every call so the calculator
    stays pure. Never cached across orchestration calls.

    Attributes:
        driver_payout_percentage: Share of the delivery fee paid to the driver
        tax_rate_service_fee: Tax rate applied to the service fee
        house_service_fee_percentage: Informational; not used in the split
        minimum_payout_amount: Informational floor for recipient withdrawals
    """

    driver_payout_percentage: Decimal = Decimal("0.80")
    tax_rate_service_fee: Decimal = Decimal("0.00")
    house_service_fee_percentage: Decimal = Decimal("0.25")
    minimum_payout_amount: Decimal = Decimal("5.00")

    def __post_init__(self) -> None:
        """Validate ranges after initialization."""
        for name in (
            "driver_payout_percentage",
            "tax_rate_service_fee",
            "house_service_fee_percentage",
        ):
            value = getattr(self, name)
            if not Decimal("0") <= value <= Decimal("1"):
                raise ValueError(f"{name} must be between 0 and 1, got {value}")
        if self.minimum_payout_amount < 0:
            raise ValueError(
                f"minimum_payout_amount must be non-negative, got {self.minimum_payout_amount}"
            )

    def to_dict(self) -> dict[str, str]:
        """Serialize values as strings to keep Decimal precision."""
        return {
            "driver_payout_percentage": str(self.driver_payout_percentage),
            "tax_rate_service_fee": str(self.tax_rate_service_fee),
            "house_service_fee_percentage": str(self.house_service_fee_percentage),
            "minimum_payout_amount": str(self.minimum_payout_amount),
        }


@dataclass(frozen=True)
class PayoutCalculation:
    """
    Monetary breakdown of a single order's payout.

    Invariant:
        total_payout == merchant_amount + driver_amount + house_amount
    """

    merchant_amount: Decimal
    driver_amount: Decimal
    house_amount: Decimal
    service_fee_tax: Decimal
    total_payout: Decimal

    @classmethod
    def zero(cls) -> PayoutCalculation:
        """Zeroed calculation carried by failure results."""
        return cls(
            merchant_amount=ZERO,
            driver_amount=ZERO,
            house_amount=ZERO,
            service_fee_tax=ZERO,
            total_payout=ZERO,
        )

    def to_dict(self) -> dict[str, str]:
        """Serialize amounts as strings for JSON payloads."""
        return {
            "merchant_amount": str(self.merchant_amount),
            "driver_amount": str(self.driver_amount),
            "house_amount": str(self.house_amount),
            "service_fee_tax": str(self.service_fee_tax),
            "total_payout": str(self.total_payout),
        }


@dataclass(frozen=True)
class TransactionDraft:
    """
    A ledger entry that has been built but not written.

    The Transaction Builder produces these; the Ledger Writer turns them
    into PayoutTransaction rows. Dry runs return them as-is.
    """

    order_id: uuid.UUID
    recipient_id: uuid.UUID
    amount: Decimal
    role: str
    description: str
    transaction_type: str
    status: str
    external_reference: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize for API responses."""
        return {
            "order_id": str(self.order_id),
            "recipient_id": str(self.recipient_id),
            "amount": str(self.amount),
            "role": self.role,
            "description": self.description,
            "transaction_type": self.transaction_type,
            "status": self.status,
            "external_reference": self.external_reference,
        }


@dataclass
class PayoutResult:
    """
    Outcome of ``process_payout`` or ``test_payout_calculation``.

    Terminal states only: success (with calculation and transactions) or
    failure (with error details, a zeroed calculation and no transactions).

    Attributes:
        success: Whether the payout (or dry run) succeeded
        order_id: The order that was processed
        calculations: Payout breakdown (zeroed on failure)
        transactions: Drafts in merchant, driver, house order
        error: Human-readable error if failed
        error_code: Machine-readable code if failed
        details: Error context (reason, recipient_id, step, ...)
        dry_run: True for previews
    """

    success: bool
    order_id: uuid.UUID
    calculations: PayoutCalculation
    transactions: list[TransactionDraft] = field(default_factory=list)
    error: str | None = None
    error_code: str | None = None
    details: dict[str, Any] = field(default_factory=dict)
    dry_run: bool = False

    @classmethod
    def ok(
        cls,
        order_id: uuid.UUID,
        calculations: PayoutCalculation,
        transactions: list[TransactionDraft],
        dry_run: bool = False,
    ) -> PayoutResult:
        """Create a successful result."""
        return cls(
            success=True,
            order_id=order_id,
            calculations=calculations,
            transactions=list(transactions),
            dry_run=dry_run,
        )

    @classmethod
    def failure(
        cls,
        order_id: uuid.UUID,
        exc: PayoutError,
        dry_run: bool = False,
    ) -> PayoutResult:
        """Create a failed result from a payout exception."""
        return cls(
            success=False,
            order_id=order_id,
            calculations=PayoutCalculation.zero(),
            transactions=[],
            error=exc.message,
            error_code=exc.error_code,
            details=dict(exc.details),
            dry_run=dry_run,
        )

    def to_response(self) -> dict[str, Any]:
        """Convert to API response format."""
        response: dict[str, Any] = {
            "success": self.success,
            "order_id": str(self.order_id),
            "dry_run": self.dry_run,
            "calculations": self.calculations.to_dict(),
            "transactions": [draft.to_dict() for draft in self.transactions],
        }
        if not self.success:
            response["error"] = self.error
            response["error_code"] = self.error_code
            if self.details:
                response["details"] = self.details
        return response

    def __bool__(self) -> bool:
        return self.success
