"""
ASGI config for the service-marketplace backend.

All endpoints are plain HTTP; no WebSocket routing is configured.
"""

import os

from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

application = get_asgi_application()
