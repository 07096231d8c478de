"""
Payment-specific exceptions.

Exception Hierarchy:
    PaymentError (base for payment domain)
    ├── PaymentNotFoundError - Service request or transaction lookup failures
    ├── PaymentValidationError - Service request cannot be paid
    └── PaymentGatewayError - Payment gateway failures
        └── PayMongoError - Base for all PayMongo errors
            ├── PayMongoAPIError - PayMongo API rejected or could not be reached
            └── PayMongoSignatureError - Webhook failed verification

Usage:
    from payments.exceptions import PayMongoAPIError, PayMongoSignatureError

    try:
        event = PayMongoAdapter.verify_webhook_signature(payload, header)
    except PayMongoSignatureError as e:
        return JsonResponse({"error": e.message}, status=400)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.exceptions import BaseApplicationError

if TYPE_CHECKING:
    from typing import Any


class PaymentError(BaseApplicationError):
    """
    Base exception for all payment operations.

    Example:
        try:
            PaymentSourceService.create_checkout(...)
        except PaymentError as e:
            return Response({"error": e.message}, status=400)
    """

    default_error_code: str = "PAYMENT_ERROR"


class PaymentNotFoundError(PaymentError):
    """Raised when the service request being paid for is missing or not the caller's."""

    default_error_code: str = "PAYMENT_NOT_FOUND"


class PaymentValidationError(PaymentError):
    """
    Raised when payment validation fails.

    Use for:
    - Paying for an already paid service request
    """

    default_error_code: str = "PAYMENT_VALIDATION_ERROR"


class PaymentGatewayError(PaymentError):
    """Raised when the payment gateway fails."""

    default_error_code: str = "PAYMENT_GATEWAY_ERROR"


class PayMongoError(PaymentGatewayError):
    """
    Base exception for PayMongo errors.

    Attributes:
        status_code: HTTP status returned by PayMongo, if any
        paymongo_code: PayMongo error code (errors[0].code), if any
    """

    default_error_code: str = "PAYMONGO_ERROR"

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
        status_code: int | None = None,
        paymongo_code: str | None = None,
    ):
        super().__init__(message, error_code=error_code, details=details)
        self.status_code = status_code
        self.paymongo_code = paymongo_code


class PayMongoAPIError(PayMongoError):
    """
    Raised when a PayMongo API call fails.

    The message is PayMongo's first error detail when the response has one.
    """

    default_error_code: str = "PAYMONGO_API_ERROR"


class PayMongoSignatureError(PayMongoError):
    """Raised when a webhook signature or payload fails verification."""

    default_error_code: str = "INVALID_WEBHOOK_SIGNATURE"
