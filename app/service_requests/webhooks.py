"""
Webhook endpoint for service request status changes.

The database posts a change event for every update of a service request
row. Cancellations trigger a push notification to the other participant.

Endpoints:
    POST /api/v1/service-requests/webhooks/status-change/

Security:
    - X-Webhook-Signature carries hex HMAC-SHA256 of the raw body
    - Signed with SERVICE_REQUEST_WEBHOOK_SECRET
    - Unset secret or bad signature returns 401
"""

from __future__ import annotations

import logging

from django.conf import settings
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.exceptions import ParseError
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from core.exceptions import BaseApplicationError
from core.helpers import get_client_ip, verify_hmac_signature
from service_requests.serializers import (
    StatusChangeEventSerializer,
    StatusChangeResponseSerializer,
    WebhookErrorResponseSerializer,
)
from service_requests.services import CancellationNotifier

logger = logging.getLogger(__name__)

SIGNATURE_HEADER = "X-Webhook-Signature"


class StatusChangeWebhookView(APIView):
    """
    Database-change webhook for service requests.

    Requires HMAC-SHA256 signature verification via X-Webhook-Signature.
    """

    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_classes = []

    @extend_schema(
        operation_id="service_request_status_change_webhook",
        summary="Service request status change",
        description=(
            "Receives service request update events and sends a push "
            "notification when a request is cancelled. Requires HMAC-SHA256 "
            "signature verification using the X-Webhook-Signature header."
        ),
        request=StatusChangeEventSerializer,
        responses={
            200: StatusChangeResponseSerializer,
            400: OpenApiResponse(
                response=WebhookErrorResponseSerializer,
                description="Invalid request payload",
            ),
            401: OpenApiResponse(
                response=WebhookErrorResponseSerializer,
                description="Invalid or missing signature",
            ),
            500: OpenApiResponse(
                response=WebhookErrorResponseSerializer,
                description="Notification could not be sent",
            ),
        },
        tags=["Service Requests - Webhooks"],
    )
    def post(self, request):
        """Handle a service request change event."""
        signature = request.headers.get(SIGNATURE_HEADER, "")
        secret = getattr(settings, "SERVICE_REQUEST_WEBHOOK_SECRET", "")

        if not verify_hmac_signature(request.body, signature, secret):
            logger.warning(
                "Service request webhook signature verification failed",
                extra={"client_ip": get_client_ip(request)},
            )
            return Response(
                {"error": "Invalid signature"},
                status=status.HTTP_401_UNAUTHORIZED,
            )

        try:
            data = request.data
        except ParseError:
            return Response(
                {"error": "Invalid JSON payload"},
                status=status.HTTP_400_BAD_REQUEST,
            )

        serializer = StatusChangeEventSerializer(data=data)
        if not serializer.is_valid():
            return Response(
                {"error": "Invalid payload", "details": serializer.errors},
                status=status.HTTP_400_BAD_REQUEST,
            )

        change = serializer.to_change()

        try:
            result = CancellationNotifier.handle_status_change(change)
        except BaseApplicationError as e:
            logger.error(
                "Error processing cancellation notification",
                extra={
                    "service_request_id": str(change.request_id),
                    "error_code": e.error_code,
                    "error": e.message,
                },
            )
            return Response(
                {"error": e.message},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
        except Exception as e:
            logger.exception(
                "Unexpected error processing cancellation notification",
                extra={"service_request_id": str(change.request_id)},
            )
            return Response(
                {"error": str(e) or "An unknown error occurred."},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        return Response({"message": result.data.message})
