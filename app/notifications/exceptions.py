"""
Push notification exceptions.

Exception Hierarchy:
    ExternalServiceError (core)
    └── PushNotificationError - FCM rejected or could not be reached
    NotFoundError (core)
    └── MissingDeviceTokenError - Recipient has no registered device

Usage:
    from notifications.exceptions import PushNotificationError

    try:
        client.send(message)
    except PushNotificationError as e:
        if e.is_permanent:
            ...
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.exceptions import ExternalServiceError, NotFoundError

if TYPE_CHECKING:
    from typing import Any


class PushNotificationError(ExternalServiceError):
    """
    Raised when a push message could not be delivered to FCM.

    Attributes:
        is_permanent: True when retrying the same token cannot succeed
            (unregistered or malformed token)
        status_code: HTTP status returned by FCM, if any
    """

    default_error_code: str = "PUSH_NOTIFICATION_FAILED"

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
        is_permanent: bool = False,
        status_code: int | None = None,
    ):
        super().__init__(message, error_code=error_code, details=details)
        self.is_permanent = is_permanent
        self.status_code = status_code


class MissingDeviceTokenError(NotFoundError):
    """Raised when the recipient has no profile or no FCM token."""

    default_error_code: str = "MISSING_DEVICE_TOKEN"
