"""
DRF serializers for payments app.

Field names on the wire are camelCase to match the mobile client.

Related files:
    - views.py: Payment API views
    - services/payment_source_service.py: Checkout creation
"""

from __future__ import annotations

from rest_framework import serializers

from payments.models import PaymentMethod


class CreatePaymentSourceSerializer(serializers.Serializer):
    """
    Request body for creating an e-wallet payment source.

    Fields:
        amount: Amount in centavos
        serviceRequestId: Service request being paid for
        paymentMethod: gcash, grab_pay or paymaya
    """

    amount = serializers.IntegerField(
        min_value=1,
        help_text="Amount in centavos",
    )
    serviceRequestId = serializers.UUIDField(
        source="service_request_id",
        help_text="Service request being paid for",
    )
    paymentMethod = serializers.ChoiceField(
        source="payment_method",
        choices=PaymentMethod.choices,
        help_text="E-wallet to pay with",
    )


class PaymentSourceResponseSerializer(serializers.Serializer):
    checkout_url = serializers.URLField(help_text="PayMongo checkout page")


class PaymentErrorResponseSerializer(serializers.Serializer):
    error = serializers.CharField(help_text="Error description")
    error_code = serializers.CharField(required=False)
    errors = serializers.DictField(required=False, help_text="Field-level errors")


def first_error_message(errors) -> str:
    """Return the first message from a (possibly nested) DRF errors structure."""
    if isinstance(errors, dict):
        for value in errors.values():
            return first_error_message(value)
    if isinstance(errors, list) and errors:
        return first_error_message(errors[0])
    return str(errors) if errors else "Invalid request."
