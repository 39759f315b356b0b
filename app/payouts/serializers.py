"""
DRF serializers for the payouts app.

This module provides serializers for:
- Payout results (process and preview)
- Payout transaction history
- Wallet summaries

Related files:
    - types.py: PayoutResult, PayoutCalculation, TransactionDraft
    - views.py: Payout API views
"""

from __future__ import annotations

from rest_framework import serializers

from payouts.models import PayoutTransaction
from payouts.services.history import PERIODS, PERIOD_MONTH


class PayoutCalculationSerializer(serializers.Serializer):
    """Monetary breakdown of one payout."""

    merchant_amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    driver_amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    house_amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    service_fee_tax = serializers.DecimalField(max_digits=12, decimal_places=2)
    total_payout = serializers.DecimalField(max_digits=12, decimal_places=2)


class TransactionDraftSerializer(serializers.Serializer):
    """A built (possibly unpersisted) payout transaction."""

    order_id = serializers.UUIDField()
    recipient_id = serializers.UUIDField()
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    role = serializers.CharField()
    description = serializers.CharField()
    transaction_type = serializers.CharField()
    status = serializers.CharField()
    external_reference = serializers.CharField(allow_null=True)


class PayoutResultSerializer(serializers.Serializer):
    """
    Outcome of a payout or dry run.

    Usage:
        result = PayoutOrchestrator.process_payout(order_id)
        serializer = PayoutResultSerializer(result)
    """

    success = serializers.BooleanField()
    order_id = serializers.UUIDField()
    dry_run = serializers.BooleanField()
    calculations = PayoutCalculationSerializer()
    transactions = TransactionDraftSerializer(many=True)
    error = serializers.CharField(allow_null=True)
    error_code = serializers.CharField(allow_null=True)
    details = serializers.DictField()


class PayoutTransactionSerializer(serializers.ModelSerializer):
    """Read-only serializer for written ledger entries."""

    class Meta:
        """Serializer metadata."""

        model = PayoutTransaction
        fields = [
            "id",
            "order_id",
            "recipient_id",
            "amount",
            "role",
            "description",
            "transaction_type",
            "status",
            "external_reference",
            "created_at",
        ]
        read_only_fields = fields


class HistoryQuerySerializer(serializers.Serializer):
    limit = serializers.IntegerField(
        required=False,
        default=100,
        min_value=1,
        max_value=500,
        help_text="Maximum number of transactions to return",
    )


class WalletQuerySerializer(serializers.Serializer):
    period = serializers.ChoiceField(
        choices=PERIODS,
        required=False,
        default=PERIOD_MONTH,
        help_text="Earnings period",
    )


class WalletSummarySerializer(serializers.Serializer):
    """Balance, period earnings and role breakdown for a recipient."""

    recipient_id = serializers.UUIDField()
    balance = serializers.DecimalField(max_digits=14, decimal_places=2)
    period = serializers.CharField()
    period_earnings = serializers.DecimalField(max_digits=14, decimal_places=2)
    breakdown = serializers.DictField(
        child=serializers.DecimalField(max_digits=14, decimal_places=2),
    )
