"""
Payout admin configuration.

Registers payout models with the Django admin. Ledger entries and wallet
balances are read-only here: they change only through the payout services.
"""

from django.contrib import admin

from payouts.models import (
    Order,
    PaymentSetting,
    PayoutEvent,
    PayoutTransaction,
    Wallet,
)


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """Admin configuration for Order."""

    list_display = [
        "id",
        "status",
        "payout_status",
        "item_total",
        "delivery_fee",
        "service_fee",
        "completed_at",
        "paid_out_at",
    ]
    list_filter = ["status", "payout_status"]
    search_fields = ["id", "merchant_id", "driver_id", "customer_id"]
    readonly_fields = ["id", "payout_status", "paid_out_at", "created_at", "updated_at"]
    ordering = ["-created_at"]


@admin.register(PaymentSetting)
class PaymentSettingAdmin(admin.ModelAdmin):
    """Admin configuration for the payment settings store."""

    list_display = ["key", "value", "updated_at"]
    search_fields = ["key"]
    ordering = ["key"]


@admin.register(Wallet)
class WalletAdmin(admin.ModelAdmin):
    """Admin configuration for Wallet."""

    list_display = ["user_id", "balance", "currency", "is_house", "updated_at"]
    list_filter = ["is_house", "currency"]
    search_fields = ["user_id"]
    readonly_fields = ["id", "balance", "created_at", "updated_at"]
    ordering = ["-created_at"]


@admin.register(PayoutTransaction)
class PayoutTransactionAdmin(admin.ModelAdmin):
    """
    Admin configuration for PayoutTransaction.

    Read-only view of the payout ledger.
    """

    list_display = [
        "id",
        "order",
        "role",
        "recipient_id",
        "amount",
        "transaction_type",
        "status",
        "created_at",
    ]
    list_filter = ["transaction_type", "role", "status"]
    search_fields = ["id", "order__id", "recipient_id", "external_reference"]
    date_hierarchy = "created_at"
    ordering = ["-created_at"]

    def has_delete_permission(self, request, obj=None) -> bool:
        """Transactions are immutable; corrections are adjustments."""
        return False

    def has_change_permission(self, request, obj=None) -> bool:
        return False

    def has_add_permission(self, request) -> bool:
        """Transactions are created only by the LedgerWriter."""
        return False


@admin.register(PayoutEvent)
class PayoutEventAdmin(admin.ModelAdmin):
    """Admin configuration for the payout notification outbox."""

    list_display = ["id", "order", "event_type", "status", "attempts", "dispatched_at"]
    list_filter = ["status", "event_type"]
    search_fields = ["id", "order__id"]
    readonly_fields = [
        "id",
        "order",
        "event_type",
        "payload",
        "status",
        "attempts",
        "dispatched_at",
        "last_error",
        "created_at",
        "updated_at",
    ]
    ordering = ["-created_at"]
