"""
Add celery-beat schedule for retrying failed payout events.

This migration creates the periodic task schedule for the
redispatch_failed_payout_events task, which runs every 5 minutes to
re-queue payout notifications whose receivers failed.
"""

from django.db import migrations

TASK_NAME = "Redispatch Failed Payout Events"


def create_periodic_task(apps, schema_editor):
    """Create the periodic task for redispatching failed payout events."""
    IntervalSchedule = apps.get_model("django_celery_beat", "IntervalSchedule")
    PeriodicTask = apps.get_model("django_celery_beat", "PeriodicTask")

    # Create interval schedule: every 5 minutes
    schedule, _ = IntervalSchedule.objects.get_or_create(
        every=5,
        period="minutes",
    )

    PeriodicTask.objects.get_or_create(
        name=TASK_NAME,
        defaults={
            "task": "payouts.tasks.redispatch_failed_payout_events",
            "interval": schedule,
            "enabled": True,
            "description": (
                "Re-queues failed payout completed events that have not "
                "exhausted their dispatch attempts."
            ),
        },
    )


def remove_periodic_task(apps, schema_editor):
    """Remove the periodic task on migration rollback."""
    PeriodicTask = apps.get_model("django_celery_beat", "PeriodicTask")

    PeriodicTask.objects.filter(name=TASK_NAME).delete()


class Migration(migrations.Migration):
    dependencies = [
        ("payouts", "0002_provision_house_wallet"),
        ("django_celery_beat", "0019_alter_periodictasks_options"),
    ]

    operations = [
        migrations.RunPython(create_periodic_task, remove_periodic_task),
    ]
