"""
Celery tasks for payout notifications.

This module provides async tasks for:
- Dispatching a payout completed event to signal receivers
- Periodically retrying failed or stale pending events

Usage:
    from payouts.tasks import dispatch_payout_event

    # Queued by the orchestrator after the payout commits
    dispatch_payout_event.delay(str(event_id))

    # Retry failed events (typically via celery-beat)
    from payouts.tasks import redispatch_failed_payout_events
    redispatch_failed_payout_events.delay()
"""

from __future__ import annotations

import logging
from datetime import timedelta
from uuid import UUID

from celery import shared_task
from django.conf import settings
from django.db.models import Q
from django.utils import timezone

from payouts.models import PayoutEvent
from payouts.signals import payout_completed
from payouts.state_machines import PayoutEventStatus

logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

MAX_EVENT_ATTEMPTS = getattr(settings, "PAYOUT_EVENT_MAX_ATTEMPTS", 5)
REDISPATCH_BATCH_SIZE = 100
STALE_PENDING_THRESHOLD_MINUTES = 15


# =============================================================================
# Tasks
# =============================================================================


@shared_task(acks_late=True)
def dispatch_payout_event(event_id: str) -> dict:
    """
    Deliver a payout completed event.

    Sends ``payout_completed`` to all receivers. Any receiver error marks
    the event FAILED with the error recorded; the payout itself is never
    affected.

    Args:
        event_id: UUID of the PayoutEvent

    Returns:
        Dict with dispatch result status
    """
    if isinstance(event_id, str):
        event_id = UUID(event_id)

    try:
        event = PayoutEvent.objects.get(id=event_id)
    except PayoutEvent.DoesNotExist:
        logger.error(
            "PayoutEvent not found",
            extra={"event_id": str(event_id)},
        )
        return {"status": "not_found", "event_id": str(event_id)}

    if event.status != PayoutEventStatus.PENDING:
        logger.info(
            f"PayoutEvent is {event.status}, skipping",
            extra={"event_id": str(event_id), "order_id": str(event.order_id)},
        )
        return {"status": f"skipped_{event.status}", "event_id": str(event_id)}

    logger.info(
        f"Dispatching {event.event_type}",
        extra={
            "event_id": str(event_id),
            "order_id": str(event.order_id),
            "attempts": event.attempts,
            "payload": event.payload,
        },
    )

    responses = payout_completed.send_robust(
        sender=PayoutEvent,
        order_id=event.payload.get("order_id", str(event.order_id)),
        timestamp=event.payload.get("timestamp"),
        calculations=event.payload.get("calculations", {}),
    )
    errors = [
        f"{getattr(receiver, '__name__', repr(receiver))}: {type(response).__name__}: {response}"
        for receiver, response in responses
        if isinstance(response, Exception)
    ]

    if errors:
        error_msg = "; ".join(errors)
        event.mark_failed(error_msg)
        event.save()
        logger.warning(
            f"Payout event receivers failed: {error_msg}",
            extra={
                "event_id": str(event_id),
                "order_id": str(event.order_id),
                "attempts": event.attempts,
            },
        )
        return {"status": "failed", "event_id": str(event_id), "error": error_msg}

    event.mark_dispatched()
    event.save()
    logger.info(
        "Payout event dispatched",
        extra={"event_id": str(event_id), "order_id": str(event.order_id)},
    )
    return {"status": "dispatched", "event_id": str(event_id)}


@shared_task
def redispatch_failed_payout_events() -> dict:
    """
    Periodic task to retry undelivered payout events.

    Picks up two kinds of events that haven't exceeded MAX_EVENT_ATTEMPTS:
    - FAILED events, moved back to PENDING and queued again
    - PENDING events untouched for STALE_PENDING_THRESHOLD_MINUTES, whose
      original enqueue was lost (broker down at commit, worker crash)

    Scheduled via celery-beat (see migration 0003).

    Returns:
        Dict with count of events queued for retry
    """
    threshold = timezone.now() - timedelta(minutes=STALE_PENDING_THRESHOLD_MINUTES)

    events = PayoutEvent.objects.filter(
        Q(status=PayoutEventStatus.FAILED)
        | Q(status=PayoutEventStatus.PENDING, updated_at__lt=threshold),
        attempts__lt=MAX_EVENT_ATTEMPTS,
    ).order_by("created_at")[:REDISPATCH_BATCH_SIZE]

    queued_count = 0
    for event in events:
        if event.status == PayoutEventStatus.FAILED:
            event.retry()
            event.save()
        else:
            logger.warning(
                "Requeueing stale pending payout event",
                extra={
                    "event_id": str(event.id),
                    "order_id": str(event.order_id),
                    "pending_since": event.updated_at.isoformat(),
                },
            )
            # Touch updated_at so the next sweep waits a full threshold again
            event.save(update_fields=["updated_at"])
        try:
            dispatch_payout_event.delay(str(event.id))
        except Exception as e:
            logger.error(
                f"Failed to queue payout event for retry: {e}",
                extra={"event_id": str(event.id)},
            )
            continue
        queued_count += 1

    logger.info(
        f"Queued {queued_count} undelivered payout events for retry",
        extra={"queued_count": queued_count},
    )
    return {"queued_count": queued_count}
