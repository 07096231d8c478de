"""
DRF views for payments app.

Endpoints:
    POST /api/v1/payments/sources/ - Create an e-wallet checkout source

Security:
    - Requires authentication (JWT or session)
    - Callers can only pay for their own service requests

Related files:
    - services/payment_source_service.py: PaymentSourceService
    - serializers.py: Request/response serializers
    - webhooks/views.py: PayMongo webhook endpoint
"""

from __future__ import annotations

import logging

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.exceptions import ParseError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from payments.serializers import (
    CreatePaymentSourceSerializer,
    PaymentErrorResponseSerializer,
    PaymentSourceResponseSerializer,
    first_error_message,
)
from payments.services import CreateCheckoutParams, PaymentSourceService

logger = logging.getLogger(__name__)


class CreatePaymentSourceView(APIView):
    """
    Create a PayMongo source and return its checkout URL.

    POST /api/v1/payments/sources/

    Request:
        {"amount": 50000, "serviceRequestId": "<uuid>", "paymentMethod": "gcash"}

    Returns:
        200 {"checkout_url": "..."}
        400 {"error": "...", ...}
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="payments_create_source",
        summary="Create payment source",
        description=(
            "Creates an e-wallet source with PayMongo for one of the caller's "
            "service requests and returns the checkout URL."
        ),
        request=CreatePaymentSourceSerializer,
        responses={
            200: PaymentSourceResponseSerializer,
            400: OpenApiResponse(
                response=PaymentErrorResponseSerializer,
                description="Invalid request or PayMongo error",
            ),
        },
        tags=["Payments"],
    )
    def post(self, request):
        """Create a checkout source."""
        try:
            data = request.data
        except ParseError:
            return Response(
                {"error": "Invalid JSON payload"},
                status=status.HTTP_400_BAD_REQUEST,
            )

        serializer = CreatePaymentSourceSerializer(data=data)
        if not serializer.is_valid():
            return Response(
                {
                    "error": first_error_message(serializer.errors),
                    "errors": serializer.errors,
                },
                status=status.HTTP_400_BAD_REQUEST,
            )

        result = PaymentSourceService.create_checkout(
            CreateCheckoutParams(user=request.user, **serializer.validated_data)
        )
        if not result:
            logger.info(
                "Checkout creation failed",
                extra={
                    "user_id": str(request.user.id),
                    "error_code": result.error_code,
                },
            )
            return Response(result.to_response(), status=status.HTTP_400_BAD_REQUEST)

        return Response({"checkout_url": result.data.checkout_url})
