"""
Model mixins providing reusable functionality for Django models.

This module contains abstract mixin classes that can be combined with
BaseModel to add specific functionality.

Available Mixins:
    UUIDPrimaryKeyMixin: Use UUID as primary key

Usage:
    from core.models import BaseModel
    from core.model_mixins import UUIDPrimaryKeyMixin

    class Order(UUIDPrimaryKeyMixin, BaseModel):
        item_total = models.DecimalField(max_digits=12, decimal_places=2)

Note:
    - Always list mixins before BaseModel in inheritance
    - Mixins are abstract and don't create database tables
"""

from __future__ import annotations

import uuid

from django.db import models


class UUIDPrimaryKeyMixin(models.Model):
    """
    Use UUID as primary key instead of auto-increment integer.

    Orders, wallets and transactions are referenced by opaque ids from
    other services, so ids must be safe to generate outside the database
    and must not reveal record counts.

    Fields:
        id: UUIDField as primary key (auto-generated)

    Usage:
        order = Order.objects.create(item_total=Decimal("10.00"), ...)
        print(order.id)  # UUID like: 550e8400-e29b-41d4-a716-446655440000

        # Can also provide your own UUID
        order = Order.objects.create(id=uuid.uuid4(), ...)
    """

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
        help_text="Unique identifier for this record",
    )

    class Meta:
        abstract = True
