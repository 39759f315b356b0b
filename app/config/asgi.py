"""
ASGI config for the payout engine.

Exposes the ASGI callable as a module-level variable named `application`,
served by Uvicorn in production.
"""

import os

from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

application = get_asgi_application()
