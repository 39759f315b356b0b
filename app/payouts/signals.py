"""
Django signals for the payouts app.

payout_completed is sent by ``payouts.tasks.dispatch_payout_event`` after
a payout's database transaction has committed. It is the extension point
for external integrations (webhooks, analytics, push notifications).

Receivers get:
    order_id: str
    timestamp: ISO 8601 string
    calculations: dict of amount strings

Usage:
    from django.dispatch import receiver
    from payouts.signals import payout_completed

    @receiver(payout_completed)
    def notify_merchant(sender, order_id, timestamp, calculations, **kwargs):
        ...

A receiver that raises marks the event as failed; it is retried by the
periodic redispatch task.
"""

from django.dispatch import Signal

payout_completed = Signal()
