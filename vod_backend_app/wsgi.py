"""WSGI entry point for the VOD backend."""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "vod_backend_app.settings")

application = get_wsgi_application()
