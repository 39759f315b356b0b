"""
PayoutEvent model: outbox for "payout completed" notifications.

The Ledger Writer creates one PayoutEvent per paid-out order inside the
same database transaction as the wallet credits. A Celery task dispatches
it after commit, so notification delivery is decoupled from the payout
and can be retried without touching the ledger.

Usage:
    from payouts.models import PayoutEvent

    event = PayoutEvent.objects.get(order_id=order_id)
    event.mark_dispatched()
    event.save()
"""

from __future__ import annotations

from django.db import models
from django.utils import timezone

from django_fsm import FSMField, transition

from core.model_mixins import UUIDPrimaryKeyMixin
from core.models import BaseModel

from payouts.constants import PAYOUT_COMPLETED_EVENT
from payouts.state_machines import PayoutEventStatus


class PayoutEvent(UUIDPrimaryKeyMixin, BaseModel):
    """
    A pending or delivered payout notification.

    State Flow:
        PENDING -> DISPATCHED
        PENDING -> FAILED -> PENDING (retry)

    Fields:
        order: The paid-out order
        event_type: Event name ("payout.completed")
        payload: {order_id, timestamp, calculations}
        status: Current FSM state
        attempts: Number of dispatch attempts
        dispatched_at: When the event was delivered
        last_error: Error from the most recent failed attempt
    """

    order = models.OneToOneField(
        "payouts.Order",
        on_delete=models.PROTECT,
        related_name="payout_event",
        help_text="Order whose payout completed",
    )
    event_type = models.CharField(
        max_length=50,
        default=PAYOUT_COMPLETED_EVENT,
        help_text="Event name",
    )
    payload = models.JSONField(
        default=dict,
        help_text="Event payload sent to integrations",
    )
    status = FSMField(
        default=PayoutEventStatus.PENDING,
        choices=PayoutEventStatus.choices,
        db_index=True,
        protected=True,
        help_text="Delivery state (managed by FSM)",
    )
    attempts = models.PositiveIntegerField(
        default=0,
        help_text="Number of dispatch attempts",
    )
    dispatched_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text="When the event was delivered",
    )
    last_error = models.TextField(
        null=True,
        blank=True,
        help_text="Error from the most recent failed attempt",
    )

    class Meta:
        ordering = ["-created_at"]
        verbose_name = "Payout Event"
        verbose_name_plural = "Payout Events"

    def __str__(self) -> str:
        return f"PayoutEvent({self.event_type}, {self.order_id}, {self.status})"

    # ==========================================================================
    # State Transitions (django-fsm)
    # ==========================================================================

    @transition(
        field=status,
        source=PayoutEventStatus.PENDING,
        target=PayoutEventStatus.DISPATCHED,
    )
    def mark_dispatched(self):
        """
        Mark the event as delivered.

        Transition: PENDING -> DISPATCHED
        """
        self.attempts += 1
        self.dispatched_at = timezone.now()
        self.last_error = None

    @transition(
        field=status,
        source=PayoutEventStatus.PENDING,
        target=PayoutEventStatus.FAILED,
    )
    def mark_failed(self, error_message: str):
        """
        Record a failed delivery attempt.

        Transition: PENDING -> FAILED
        """
        self.attempts += 1
        self.last_error = error_message

    @transition(
        field=status,
        source=PayoutEventStatus.FAILED,
        target=PayoutEventStatus.PENDING,
    )
    def retry(self):
        """
        Queue a failed event for another attempt.

        Transition: FAILED -> PENDING
        """
        pass
