"""
Helper functions for common infrastructure operations.

This module provides domain-agnostic utility functions for:
- HMAC-SHA256 signing and constant-time signature checks
- HTTP request helpers (client IP extraction)

Usage:
    from core.helpers import compute_hmac_sha256, verify_hmac_signature

    digest = compute_hmac_sha256(secret, b"1496734173.{...}")
    if not verify_hmac_signature(request.body, signature, secret):
        return JsonResponse({"error": "Invalid signature"}, status=401)
"""

from __future__ import annotations

import hashlib
import hmac
import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from django.http import HttpRequest

logger = logging.getLogger(__name__)


def compute_hmac_sha256(secret: str, message: bytes) -> str:
    """
    Compute a lowercase hex HMAC-SHA256 digest.

    Args:
        secret: Shared secret (UTF-8 encoded before use)
        message: Raw bytes to sign

    Returns:
        64-character hexadecimal digest
    """
    return hmac.new(
        secret.encode("utf-8"),
        message,
        hashlib.sha256,
    ).hexdigest()


def verify_hmac_signature(payload: bytes, signature: str, secret: str) -> bool:
    """
    Verify a hex HMAC-SHA256 signature of a raw request body.

    Returns False when either the secret or the signature is empty.
    """
    if not secret:
        logger.warning("Webhook secret not configured, rejecting request")
        return False
    if not signature:
        return False

    expected = compute_hmac_sha256(secret, payload)
    return hmac.compare_digest(
        expected.encode("ascii"), signature.strip().lower().encode("utf-8")
    )


def get_client_ip(request: HttpRequest) -> str:
    """
    Extract client IP from request, handling proxies.

    Checks X-Forwarded-For header for proxy chains.
    """
    x_forwarded_for = request.META.get("HTTP_X_FORWARDED_FOR")
    if x_forwarded_for:
        # First IP in the chain is the original client
        ip = x_forwarded_for.split(",")[0].strip()
    else:
        ip = request.META.get("REMOTE_ADDR", "")
    return ip
