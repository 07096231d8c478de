"""
Webhook handling for payment events from PayMongo.

Webhooks are verified and processed synchronously.

Usage:
    # In urls.py
    from payments.webhooks import paymongo_webhook

    urlpatterns = [
        path("webhooks/paymongo/", paymongo_webhook, name="paymongo-webhook"),
    ]
"""

from payments.webhooks.handlers import (
    PayMongoEvent,
    dispatch_webhook,
    register_handler,
)
from payments.webhooks.views import paymongo_webhook

__all__ = [
    "PayMongoEvent",
    "dispatch_webhook",
    "register_handler",
    "paymongo_webhook",
]
