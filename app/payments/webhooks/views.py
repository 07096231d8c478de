"""
Webhook endpoint views for PayMongo.

The view verifies the signature, dispatches the event to its handler and
answers synchronously. Processing is short (two row writes), so there is
no queue between receipt and handling.

Usage:
    # In urls.py
    from payments.webhooks.views import paymongo_webhook

    urlpatterns = [
        path("webhooks/paymongo/", paymongo_webhook, name="paymongo-webhook"),
    ]
"""

from __future__ import annotations

import logging

from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_POST

from core.helpers import get_client_ip
from payments.adapters import PayMongoAdapter
from payments.exceptions import PayMongoSignatureError
from payments.webhooks.handlers import PayMongoEvent, dispatch_webhook

logger = logging.getLogger(__name__)

SIGNATURE_HEADER = "paymongo-signature-v1"


@csrf_exempt
@require_POST
def paymongo_webhook(request: HttpRequest) -> JsonResponse:
    """
    Receive and process PayMongo webhook events.

    Security:
    - Signature verification rejects requests not signed by PayMongo
    - CSRF exemption required for external webhooks
    - Only POST requests accepted

    Returns:
        JsonResponse with status:
        - 200: {"received": true}
        - 400: {"error": ...} for a bad signature, bad payload or a
          handler failure

    Example paymongo-signature-v1 header:
        t=1496734173,v1=5257a869e7ecebeda32affa62cdca3fa51cad7e77a0e56ff536d0ce8e108d8bd
    """
    payload = request.body
    signature = request.headers.get(SIGNATURE_HEADER)

    try:
        event_data = PayMongoAdapter.verify_webhook_signature(payload, signature)
    except PayMongoSignatureError as e:
        logger.warning(
            "Webhook signature verification failed",
            extra={"error": e.message, "client_ip": get_client_ip(request)},
        )
        return JsonResponse({"error": e.message}, status=400)

    event = PayMongoEvent.from_payload(event_data)
    if not event.event_type:
        logger.warning(
            "Webhook missing event type",
            extra={"paymongo_event_id": event.event_id},
        )
        return JsonResponse({"error": "Webhook event type is missing."}, status=400)

    logger.info(
        f"Received PayMongo webhook: {event.event_type}",
        extra={
            "paymongo_event_id": event.event_id,
            "event_type": event.event_type,
            "livemode": event.livemode,
        },
    )

    try:
        result = dispatch_webhook(event)
    except Exception as e:
        logger.error(
            f"Unexpected error processing webhook: {type(e).__name__}",
            extra={"paymongo_event_id": event.event_id},
            exc_info=True,
        )
        return JsonResponse(
            {"error": getattr(e, "message", None) or str(e)},
            status=400,
        )

    if not result:
        logger.warning(
            f"Webhook handler failed: {result.error}",
            extra={
                "paymongo_event_id": event.event_id,
                "error_code": result.error_code,
            },
        )
        return JsonResponse({"error": result.error}, status=400)

    return JsonResponse({"received": True})
