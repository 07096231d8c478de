"""
Base exception classes for application-wide error handling.

Exception Hierarchy:
    BaseApplicationError (base)
    ├── ValidationError - Input or payload validation failures
    ├── NotFoundError - Record lookup failures
    ├── ConfigurationError - Required setting (secret, credentials) missing
    └── ExternalServiceError - Third-party service failures (PayMongo, FCM)

Usage:
    from core.exceptions import ConfigurationError, NotFoundError

    if not settings.PAYMONGO_SECRET_KEY:
        raise ConfigurationError("PayMongo secret key is not configured.")

    try:
        ...
    except BaseApplicationError as e:
        return JsonResponse({"error": e.message}, status=400)

Note:
    str(exc) includes the error code. Views return exc.message to clients.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Any


class BaseApplicationError(Exception):
    """
    Base exception for all application-specific errors.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable code for client-side handling
        details: Additional error context (field errors, ids, etc.)
    """

    default_error_code: str = "APPLICATION_ERROR"

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for API response.

        Example:
            {
                "error": "Service request not found",
                "error_code": "SERVICE_REQUEST_NOT_FOUND",
                "details": {"service_request_id": "..."}
            }
        """
        result: dict[str, Any] = {
            "error": self.message,
            "error_code": self.error_code,
        }
        if self.details:
            result["details"] = self.details
        return result

    def __str__(self) -> str:
        """Return string representation with error code."""
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code!r}, "
            f"details={self.details!r})"
        )


class ValidationError(BaseApplicationError):
    """
    Raised when input validation fails in the service layer.

    For request bodies, prefer DRF serializer validation.
    """

    default_error_code: str = "VALIDATION_ERROR"


class NotFoundError(BaseApplicationError):
    """
    Raised when a record that is expected to exist is missing.

    Example:
        profile = Profile.objects.filter(user_id=user_id).first()
        if not profile:
            raise NotFoundError(
                f"Profile for user {user_id} not found",
                error_code="PROFILE_NOT_FOUND",
                details={"user_id": str(user_id)},
            )
    """

    default_error_code: str = "NOT_FOUND"


class ConfigurationError(BaseApplicationError):
    """
    Raised when a required setting is missing or malformed.

    Secrets are read at request time, so a misconfigured deployment fails
    the affected request instead of refusing to boot.
    """

    default_error_code: str = "CONFIGURATION_ERROR"


class ExternalServiceError(BaseApplicationError):
    """
    Raised when an external service call fails.

    Use for:
    - PayMongo / FCM API errors
    - Network timeouts
    - Unexpected external service responses

    Note:
        Log the original error for debugging. Put the upstream status code
        in details when there is one.
    """

    default_error_code: str = "EXTERNAL_SERVICE_ERROR"
