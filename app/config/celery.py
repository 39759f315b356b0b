"""
Celery configuration for the payout engine.

Celery carries the payout engine's only asynchronous work: delivering
"payout completed" events after the payout's database transaction has
committed, and periodically retrying events whose receivers failed.
Payouts themselves never run on a worker.

Redis is the message broker and result backend. Periodic tasks are
stored in the database by django-celery-beat.

Usage:
    celery -A config worker -l info
    celery -A config beat -l info --scheduler django_celery_beat.schedulers:DatabaseScheduler
"""

import os

from celery import Celery

# Set the default Django settings module for the Celery worker
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

app = Celery("config")

# All Celery settings are prefixed with CELERY_ in settings.py
app.config_from_object("django.conf:settings", namespace="CELERY")

# Finds payouts.tasks
app.autodiscover_tasks()
