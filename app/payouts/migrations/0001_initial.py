import uuid
from decimal import Decimal

import django.db.models.deletion
import django_fsm
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Order",
            fields=[
                (
                    "created_at",
                    models.DateTimeField(
                        auto_now_add=True,
                        db_index=True,
                        help_text="Timestamp when this record was created",
                    ),
                ),
                (
                    "updated_at",
                    models.DateTimeField(
                        auto_now=True,
                        help_text="Timestamp when this record was last modified",
                    ),
                ),
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        help_text="Unique identifier for this record",
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "merchant_id",
                    models.UUIDField(db_index=True, help_text="Merchant user id"),
                ),
                (
                    "driver_id",
                    models.UUIDField(db_index=True, help_text="Driver user id"),
                ),
                (
                    "customer_id",
                    models.UUIDField(db_index=True, help_text="Customer user id"),
                ),
                (
                    "item_total",
                    models.DecimalField(
                        decimal_places=2,
                        help_text="Total price of the items",
                        max_digits=12,
                    ),
                ),
                (
                    "delivery_fee",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0.00"),
                        help_text="Delivery fee charged to the customer",
                        max_digits=12,
                    ),
                ),
                (
                    "service_fee",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0.00"),
                        help_text="Service fee charged to the customer",
                        max_digits=12,
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending", "Pending"),
                            ("confirmed", "Confirmed"),
                            ("preparing", "Preparing"),
                            ("in_transit", "In Transit"),
                            ("delivered", "Delivered"),
                            ("completed", "Completed"),
                            ("cancelled", "Cancelled"),
                        ],
                        db_index=True,
                        default="pending",
                        help_text="Fulfilment status of the order",
                        max_length=20,
                    ),
                ),
                (
                    "payout_status",
                    models.CharField(
                        choices=[("pending", "Pending"), ("completed", "Completed")],
                        db_index=True,
                        default="pending",
                        help_text="Whether the order has been paid out",
                        max_length=20,
                    ),
                ),
                (
                    "completed_at",
                    models.DateTimeField(
                        blank=True,
                        help_text="When the order was completed",
                        null=True,
                    ),
                ),
                (
                    "paid_out_at",
                    models.DateTimeField(
                        blank=True,
                        help_text="When the payout was applied",
                        null=True,
                    ),
                ),
            ],
            options={
                "verbose_name": "Order",
                "verbose_name_plural": "Orders",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(
                        fields=["status", "payout_status"],
                        name="order_status_payout_idx",
                    )
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(item_total__gte=0),
                        name="order_item_total_non_negative",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(delivery_fee__gte=0),
                        name="order_delivery_fee_non_negative",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(service_fee__gte=0),
                        name="order_service_fee_non_negative",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="PaymentSetting",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(
                        auto_now_add=True,
                        db_index=True,
                        help_text="Timestamp when this record was created",
                    ),
                ),
                (
                    "updated_at",
                    models.DateTimeField(
                        auto_now=True,
                        help_text="Timestamp when this record was last modified",
                    ),
                ),
                (
                    "key",
                    models.CharField(help_text="Setting name", max_length=100, unique=True),
                ),
                (
                    "value",
                    models.CharField(
                        help_text="Setting value (decimal as text)", max_length=255
                    ),
                ),
                (
                    "description",
                    models.TextField(
                        blank=True,
                        default="",
                        help_text="What this setting controls",
                    ),
                ),
            ],
            options={
                "verbose_name": "Payment Setting",
                "verbose_name_plural": "Payment Settings",
                "ordering": ["key"],
            },
        ),
        migrations.CreateModel(
            name="Wallet",
            fields=[
                (
                    "created_at",
                    models.DateTimeField(
                        auto_now_add=True,
                        db_index=True,
                        help_text="Timestamp when this record was created",
                    ),
                ),
                (
                    "updated_at",
                    models.DateTimeField(
                        auto_now=True,
                        help_text="Timestamp when this record was last modified",
                    ),
                ),
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        help_text="Unique identifier for this record",
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "user_id",
                    models.UUIDField(help_text="Owner of this wallet", unique=True),
                ),
                (
                    "balance",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0.00"),
                        help_text="Current balance",
                        max_digits=14,
                    ),
                ),
                (
                    "currency",
                    models.CharField(
                        default="usd",
                        help_text="ISO 4217 currency code (lowercase)",
                        max_length=3,
                    ),
                ),
                (
                    "is_house",
                    models.BooleanField(
                        default=False,
                        help_text="Whether this is the platform's house account",
                    ),
                ),
            ],
            options={
                "verbose_name": "Wallet",
                "verbose_name_plural": "Wallets",
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="PayoutTransaction",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        help_text="Unique identifier for this record",
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "recipient_id",
                    models.UUIDField(
                        db_index=True,
                        help_text="Wallet owner credited by this entry",
                    ),
                ),
                (
                    "amount",
                    models.DecimalField(
                        decimal_places=2,
                        help_text="Amount credited to the recipient",
                        max_digits=12,
                    ),
                ),
                (
                    "role",
                    models.CharField(
                        choices=[
                            ("merchant", "Merchant"),
                            ("driver", "Driver"),
                            ("house", "House"),
                        ],
                        help_text="Recipient role",
                        max_length=20,
                    ),
                ),
                (
                    "description",
                    models.TextField(
                        blank=True,
                        default="",
                        help_text="Human-readable description of this entry",
                    ),
                ),
                (
                    "transaction_type",
                    models.CharField(
                        choices=[
                            ("payout", "Payout"),
                            ("refund", "Refund"),
                            ("adjustment", "Adjustment"),
                        ],
                        db_index=True,
                        default="payout",
                        help_text="Category of this entry",
                        max_length=20,
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending", "Pending"),
                            ("completed", "Completed"),
                            ("failed", "Failed"),
                        ],
                        default="pending",
                        help_text="Status of this entry",
                        max_length=20,
                    ),
                ),
                (
                    "external_reference",
                    models.CharField(
                        blank=True,
                        help_text="Reference in an external system (e.g., a transfer id)",
                        max_length=255,
                        null=True,
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(
                        auto_now_add=True,
                        db_index=True,
                        help_text="Timestamp when this entry was written",
                    ),
                ),
                (
                    "order",
                    models.ForeignKey(
                        help_text="Order this entry belongs to",
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="transactions",
                        to="payouts.order",
                    ),
                ),
            ],
            options={
                "verbose_name": "Payout Transaction",
                "verbose_name_plural": "Payout Transactions",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(
                        fields=["recipient_id", "transaction_type"],
                        name="ptx_recipient_type_idx",
                    )
                ],
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(transaction_type="payout"),
                        fields=("order", "role"),
                        name="unique_payout_per_order_role",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="PayoutEvent",
            fields=[
                (
                    "created_at",
                    models.DateTimeField(
                        auto_now_add=True,
                        db_index=True,
                        help_text="Timestamp when this record was created",
                    ),
                ),
                (
                    "updated_at",
                    models.DateTimeField(
                        auto_now=True,
                        help_text="Timestamp when this record was last modified",
                    ),
                ),
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        help_text="Unique identifier for this record",
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "event_type",
                    models.CharField(
                        default="payout.completed",
                        help_text="Event name",
                        max_length=50,
                    ),
                ),
                (
                    "payload",
                    models.JSONField(
                        default=dict,
                        help_text="Event payload sent to integrations",
                    ),
                ),
                (
                    "status",
                    django_fsm.FSMField(
                        choices=[
                            ("pending", "Pending"),
                            ("dispatched", "Dispatched"),
                            ("failed", "Failed"),
                        ],
                        db_index=True,
                        default="pending",
                        help_text="Delivery state (managed by FSM)",
                        max_length=50,
                        protected=True,
                    ),
                ),
                (
                    "attempts",
                    models.PositiveIntegerField(
                        default=0,
                        help_text="Number of dispatch attempts",
                    ),
                ),
                (
                    "dispatched_at",
                    models.DateTimeField(
                        blank=True,
                        help_text="When the event was delivered",
                        null=True,
                    ),
                ),
                (
                    "last_error",
                    models.TextField(
                        blank=True,
                        help_text="Error from the most recent failed attempt",
                        null=True,
                    ),
                ),
                (
                    "order",
                    models.OneToOneField(
                        help_text="Order whose payout completed",
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="payout_event",
                        to="payouts.order",
                    ),
                ),
            ],
            options={
                "verbose_name": "Payout Event",
                "verbose_name_plural": "Payout Events",
                "ordering": ["-created_at"],
            },
        ),
    ]
