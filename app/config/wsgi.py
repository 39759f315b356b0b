"""
WSGI config for the payout engine.

Used by the admin and by deployments that front Django with a WSGI
server (gunicorn). Exposes the callable as `application`.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

application = get_wsgi_application()
