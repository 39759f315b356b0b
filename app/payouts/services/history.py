"""
Read-only payout history and earnings queries.

Usage:
    from payouts.services import PayoutHistoryService

    history = PayoutHistoryService.get_payout_history(driver_id, limit=20)
    month = PayoutHistoryService.get_total_earnings(driver_id, period="month")
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any

from django.db.models import QuerySet, Sum
from django.utils import timezone

from core.services import BaseService, ServiceResult

from payouts.exceptions import WalletNotFound
from payouts.models import PayoutTransaction, Wallet
from payouts.types import ZERO

PERIOD_DAY = "day"
PERIOD_WEEK = "week"
PERIOD_MONTH = "month"
PERIOD_YEAR = "year"
PERIODS = (PERIOD_DAY, PERIOD_WEEK, PERIOD_MONTH, PERIOD_YEAR)

DEFAULT_HISTORY_LIMIT = 100


class PayoutHistoryService(BaseService):
    """Queries over written payouts and wallet balances."""

    @staticmethod
    def get_payout_history(
        recipient_id: uuid.UUID,
        limit: int = DEFAULT_HISTORY_LIMIT,
    ) -> QuerySet[PayoutTransaction]:
        """Payout transactions for a recipient, newest first."""
        return (
            PayoutTransaction.objects.payouts()
            .for_recipient(recipient_id)
            .order_by("-created_at")[:limit]
        )

    @staticmethod
    def get_wallet_balance(recipient_id: uuid.UUID) -> Decimal:
        """
        Current wallet balance for a recipient.

        Raises:
            WalletNotFound: If the recipient has no wallet
        """
        balance = (
            Wallet.objects.filter(user_id=recipient_id)
            .values_list("balance", flat=True)
            .first()
        )
        if balance is None:
            raise WalletNotFound(
                f"No wallet for recipient {recipient_id}",
                details={"recipient_id": str(recipient_id)},
            )
        return balance

    @staticmethod
    def period_start(period: str, now: datetime | None = None) -> datetime:
        """
        Start of an earnings period.

        day: midnight today, week: 7 days ago, month: the 1st of this
        month, year: 1 January. Unknown periods are treated as month.
        """
        now = timezone.localtime(now or timezone.now())
        midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)

        if period == PERIOD_DAY:
            return midnight
        if period == PERIOD_WEEK:
            return now - timedelta(days=7)
        if period == PERIOD_YEAR:
            return midnight.replace(month=1, day=1)
        return midnight.replace(day=1)

    @classmethod
    def get_total_earnings(
        cls,
        recipient_id: uuid.UUID,
        period: str = PERIOD_MONTH,
        now: datetime | None = None,
    ) -> Decimal:
        """Sum of payouts to a recipient since the start of the period."""
        total = (
            PayoutTransaction.objects.payouts()
            .for_recipient(recipient_id)
            .filter(created_at__gte=cls.period_start(period, now))
            .aggregate(total=Sum("amount"))["total"]
        )
        return total if total is not None else ZERO

    @staticmethod
    def get_earnings_breakdown(recipient_id: uuid.UUID) -> dict[str, Decimal]:
        """All-time payout totals for a recipient, keyed by role."""
        rows = (
            PayoutTransaction.objects.payouts()
            .for_recipient(recipient_id)
            .values("role")
            .annotate(total=Sum("amount"))
            .order_by("role")
        )
        return {row["role"]: row["total"] for row in rows}

    @classmethod
    def get_wallet_summary(
        cls,
        recipient_id: uuid.UUID,
        period: str = PERIOD_MONTH,
    ) -> ServiceResult[dict[str, Any]]:
        """
        Balance, period earnings and role breakdown in one result.

        Returns:
            ServiceResult with the summary dict, or WALLET_NOT_FOUND
        """
        if period not in PERIODS:
            period = PERIOD_MONTH

        try:
            balance = cls.get_wallet_balance(recipient_id)
        except WalletNotFound as e:
            return cls.handle_exception(
                e, context="Wallet summary", log_level=logging.WARNING
            )

        return ServiceResult.success(
            {
                "recipient_id": recipient_id,
                "balance": balance,
                "period": period,
                "period_earnings": cls.get_total_earnings(recipient_id, period),
                "breakdown": cls.get_earnings_breakdown(recipient_id),
            }
        )
