"""
PayMongo API adapter for payment operations.

This module provides the PayMongoAdapter class which encapsulates all
PayMongo interactions: creating e-wallet payment sources and verifying
webhook signatures. PayMongo has no Python SDK here; calls go through
requests with HTTP Basic auth (secret key as username, empty password).

Configuration (via settings):
- PAYMONGO_SECRET_KEY: PayMongo secret API key
- PAYMONGO_WEBHOOK_SECRET: Webhook signing secret
- PAYMONGO_API_BASE_URL: API root (default: https://api.paymongo.com/v1)
- PAYMONGO_API_TIMEOUT_SECONDS: API call timeout (default: 10)
- PAYMONGO_WEBHOOK_TOLERANCE_SECONDS: Max webhook timestamp age (0 disables)
- PAYMONGO_CURRENCY: Source currency (default: PHP)
- PAYMENT_REDIRECT_URL: App deep link PayMongo redirects to after checkout

Usage:
    from payments.adapters import CreateSourceParams, PayMongoAdapter

    result = PayMongoAdapter.create_source(
        CreateSourceParams(
            amount=50000,
            service_request_id=str(service_request.id),
            payment_method="gcash",
        )
    )
    result.checkout_url  # redirect the customer here

    event = PayMongoAdapter.verify_webhook_signature(
        request.body,
        request.headers.get("paymongo-signature-v1"),
    )
"""

from __future__ import annotations

import base64
import hmac
import json
import logging
import time
from dataclasses import dataclass, field
from typing import Any

import requests
from django.conf import settings

from core.exceptions import ConfigurationError
from core.helpers import compute_hmac_sha256
from payments.exceptions import PayMongoAPIError, PayMongoSignatureError


DEFAULT_API_BASE_URL = "https://api.paymongo.com/v1"
DEFAULT_REDIRECT_URL = "yourapp://payment/callback"
UNKNOWN_API_ERROR = "Unknown error from PayMongo"


# =============================================================================
# Data Types
# =============================================================================


@dataclass
class CreateSourceParams:
    """
    Parameters for creating a PayMongo source.

    Attributes:
        amount: Amount in centavos (smallest PHP unit)
        service_request_id: Service request being paid for, stored in
            source metadata and echoed back by the webhook
        payment_method: Source type (gcash, grab_pay, paymaya)
        currency: ISO 4217 currency code
        redirect_url: Base URL PayMongo redirects to after checkout. A
            status and request_id query string is appended.
    """

    amount: int
    service_request_id: str
    payment_method: str
    currency: str = ""
    redirect_url: str = ""

    def __post_init__(self) -> None:
        """Validate parameters after initialization."""
        if self.amount <= 0:
            raise ValueError("amount must be positive")
        if not self.payment_method:
            raise ValueError("payment_method is required")
        if not self.service_request_id:
            raise ValueError("service_request_id is required")
        if not self.currency:
            self.currency = getattr(settings, "PAYMONGO_CURRENCY", "PHP")
        if not self.redirect_url:
            self.redirect_url = getattr(
                settings, "PAYMENT_REDIRECT_URL", DEFAULT_REDIRECT_URL
            )

    def redirect_for(self, status: str) -> str:
        return f"{self.redirect_url}?status={status}&request_id={self.service_request_id}"

    def to_payload(self) -> dict[str, Any]:
        return {
            "data": {
                "attributes": {
                    "amount": self.amount,
                    "redirect": {
                        "success": self.redirect_for("success"),
                        "failed": self.redirect_for("failed"),
                    },
                    "type": self.payment_method,
                    "currency": self.currency,
                    "metadata": {
                        "service_request_id": self.service_request_id,
                    },
                }
            }
        }


@dataclass
class SourceResult:
    """
    Result from PayMongo source creation.

    Attributes:
        id: Source ID (src_xxx)
        type: Source type (gcash, grab_pay, paymaya)
        amount: Amount in centavos
        status: Source status (pending until the customer authorizes)
        checkout_url: URL the customer completes the payment at
        raw_response: Full PayMongo response dict (for debugging)
    """

    id: str
    type: str
    amount: int
    status: str
    checkout_url: str
    raw_response: dict[str, Any] = field(default_factory=dict)


@dataclass
class SignatureHeader:
    """Parsed paymongo-signature-v1 header."""

    timestamp: str
    signature: str


def parse_signature_header(header: str) -> SignatureHeader:
    """
    Parse a "t=<timestamp>,v1=<hex>" signature header.

    Unknown keys are ignored. A repeated key keeps its first value.

    Raises:
        PayMongoSignatureError: Timestamp or signature missing
    """
    values: dict[str, str] = {}
    for part in header.split(","):
        key, sep, value = part.strip().partition("=")
        if sep and key and value:
            values.setdefault(key, value.strip())

    timestamp = values.get("t", "")
    signature = values.get("v1", "")
    if not timestamp or not signature:
        raise PayMongoSignatureError("Invalid signature format.")

    return SignatureHeader(timestamp=timestamp, signature=signature)


# =============================================================================
# PayMongo Adapter
# =============================================================================


class PayMongoAdapter:
    """
    Adapter for PayMongo API operations.

    All methods are classmethods that hold no state; credentials are read
    from settings on every call.

    Error Handling:
        - Non-2xx responses and network failures raise PayMongoAPIError
        - Missing credentials raise ConfigurationError
        - Webhook verification failures raise PayMongoSignatureError
    """

    @classmethod
    def get_logger(cls) -> logging.Logger:
        """Get logger for this adapter."""
        return logging.getLogger(f"{cls.__module__}.{cls.__name__}")

    @classmethod
    def _get_api_key(cls) -> str:
        api_key = getattr(settings, "PAYMONGO_SECRET_KEY", "")
        if not api_key:
            raise ConfigurationError("PayMongo secret key is not configured.")
        return api_key

    @classmethod
    def _get_timeout(cls) -> float:
        return getattr(settings, "PAYMONGO_API_TIMEOUT_SECONDS", 10)

    @classmethod
    def _get_base_url(cls) -> str:
        return getattr(settings, "PAYMONGO_API_BASE_URL", DEFAULT_API_BASE_URL).rstrip("/")

    @classmethod
    def _auth_header(cls, api_key: str) -> str:
        credentials = base64.b64encode(f"{api_key}:".encode("utf-8")).decode("ascii")
        return f"Basic {credentials}"

    @classmethod
    def _get_headers(cls) -> dict[str, str]:
        return {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "Authorization": cls._auth_header(cls._get_api_key()),
        }

    # =========================================================================
    # Source Operations
    # =========================================================================

    @classmethod
    def create_source(cls, params: CreateSourceParams) -> SourceResult:
        """
        Create an e-wallet payment source.

        Args:
            params: CreateSourceParams with amount and payment method

        Returns:
            SourceResult with the checkout URL

        Raises:
            ConfigurationError: PAYMONGO_SECRET_KEY not set
            PayMongoAPIError: PayMongo rejected the request or was unreachable
        """
        headers = cls._get_headers()
        url = f"{cls._get_base_url()}/sources"

        log_context = {
            "operation": "create_source",
            "amount": params.amount,
            "payment_method": params.payment_method,
            "service_request_id": params.service_request_id,
        }
        cls.get_logger().info("Creating PayMongo source", extra=log_context)
        start_time = time.time()

        try:
            response = requests.post(
                url,
                json=params.to_payload(),
                headers=headers,
                timeout=cls._get_timeout(),
            )
        except requests.RequestException as e:
            duration_ms = (time.time() - start_time) * 1000
            cls.get_logger().error(
                "PayMongo request failed",
                extra={**log_context, "duration_ms": duration_ms, "error": str(e)},
            )
            raise PayMongoAPIError(
                f"Could not reach PayMongo: {e}",
                error_code="PAYMONGO_CONNECTION_ERROR",
            ) from e

        duration_ms = (time.time() - start_time) * 1000

        try:
            body = response.json()
        except ValueError:
            body = {}

        if not response.ok:
            cls._raise_api_error(response.status_code, body, log_context, duration_ms)

        data = body.get("data") if isinstance(body, dict) else None
        attributes = data.get("attributes") if isinstance(data, dict) else None
        redirect = attributes.get("redirect") if isinstance(attributes, dict) else None
        checkout_url = redirect.get("checkout_url") if isinstance(redirect, dict) else None

        # A source without a checkout URL cannot be paid
        if not checkout_url:
            cls.get_logger().error(
                "PayMongo source response has no checkout URL",
                extra={
                    **log_context,
                    "status_code": response.status_code,
                    "duration_ms": duration_ms,
                },
            )
            raise PayMongoAPIError(
                UNKNOWN_API_ERROR,
                error_code="PAYMONGO_INVALID_RESPONSE",
                status_code=response.status_code,
                details={"status_code": response.status_code},
            )

        result = SourceResult(
            id=data.get("id", ""),
            type=attributes.get("type", params.payment_method),
            amount=attributes.get("amount", params.amount),
            status=attributes.get("status", ""),
            checkout_url=checkout_url,
            raw_response=body,
        )

        cls.get_logger().info(
            "PayMongo source created",
            extra={
                **log_context,
                "source_id": result.id,
                "status": result.status,
                "duration_ms": duration_ms,
            },
        )
        return result

    @classmethod
    def _raise_api_error(
        cls,
        status_code: int,
        body: dict[str, Any],
        log_context: dict[str, Any],
        duration_ms: float,
    ) -> None:
        """
        Translate a PayMongo error response into PayMongoAPIError.

        PayMongo error bodies look like:
            {"errors": [{"code": "parameter_invalid", "detail": "..."}]}
        """
        errors = body.get("errors") if isinstance(body, dict) else None
        first_error = errors[0] if errors and isinstance(errors[0], dict) else {}
        message = first_error.get("detail") or UNKNOWN_API_ERROR

        cls.get_logger().warning(
            "PayMongo API error",
            extra={
                **log_context,
                "status_code": status_code,
                "paymongo_code": first_error.get("code"),
                "duration_ms": duration_ms,
            },
        )
        raise PayMongoAPIError(
            message,
            status_code=status_code,
            paymongo_code=first_error.get("code"),
            details={"status_code": status_code},
        )

    # =========================================================================
    # Webhook Operations
    # =========================================================================

    @classmethod
    def verify_webhook_signature(
        cls,
        payload: bytes,
        signature_header: str | None,
    ) -> dict[str, Any]:
        """
        Verify and parse a PayMongo webhook event.

        The signature is HMAC-SHA256 of "<timestamp>.<raw body>" keyed with
        PAYMONGO_WEBHOOK_SECRET.

        Args:
            payload: Raw webhook payload bytes
            signature_header: paymongo-signature-v1 header value

        Returns:
            Parsed event data dict

        Raises:
            PayMongoSignatureError: Missing, malformed or mismatched
                signature, stale timestamp, or non-JSON payload
        """
        secret = getattr(settings, "PAYMONGO_WEBHOOK_SECRET", "")
        if not signature_header or not secret:
            raise PayMongoSignatureError("Webhook signature or secret key is missing.")

        header = parse_signature_header(signature_header)

        signed_payload = header.timestamp.encode("utf-8") + b"." + payload
        expected = compute_hmac_sha256(secret, signed_payload)
        if not hmac.compare_digest(
            expected.encode("ascii"), header.signature.lower().encode("utf-8")
        ):
            raise PayMongoSignatureError(
                "Webhook signature mismatch. Request is not from PayMongo."
            )

        tolerance = getattr(settings, "PAYMONGO_WEBHOOK_TOLERANCE_SECONDS", 0)
        if tolerance:
            try:
                timestamp = int(header.timestamp)
            except ValueError as e:
                raise PayMongoSignatureError("Invalid signature format.") from e
            if abs(time.time() - timestamp) > tolerance:
                raise PayMongoSignatureError(
                    "Webhook timestamp outside the tolerance window.",
                    details={"timestamp": timestamp, "tolerance": tolerance},
                )

        try:
            event = json.loads(payload)
        except ValueError as e:
            raise PayMongoSignatureError("Invalid webhook payload.") from e
        if not isinstance(event, dict):
            raise PayMongoSignatureError("Invalid webhook payload.")

        return event
