"""
Firebase Cloud Messaging (HTTP v1) client.

Authenticates with a Google service account through google-auth and sends
messages with requests. The OAuth2 access token is cached in the Django
cache until shortly before it expires, so consecutive webhooks reuse it.

Configuration (via settings):
- FCM_SERVICE_ACCOUNT_JSON: Service-account key file contents (JSON string)
- FCM_API_TIMEOUT_SECONDS: HTTP timeout for FCM calls (default: 10)

Usage:
    from notifications.fcm import FCMClient, PushMessage

    client = FCMClient.from_settings()
    message_name = client.send(
        PushMessage(
            token=profile.fcm_token,
            title="Service Request Cancelled",
            body="Your service request has been cancelled.",
            data={"requestId": str(service_request.id)},
        )
    )
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

import google.auth.exceptions
import google.auth.transport.requests
import requests
from django.conf import settings
from django.core.cache import cache
from google.oauth2 import service_account

from core.exceptions import ConfigurationError
from notifications.exceptions import PushNotificationError

logger = logging.getLogger(__name__)


FCM_SCOPES = ["https://www.googleapis.com/auth/cloud-platform"]
FCM_SEND_URL = "https://fcm.googleapis.com/v1/projects/{project_id}/messages:send"

REQUIRED_SERVICE_ACCOUNT_KEYS = ("project_id", "client_email", "private_key")

# FCM error codes after which the same token will never succeed
PERMANENT_ERROR_CODES = {
    "UNREGISTERED",
    "INVALID_ARGUMENT",
    "SENDER_ID_MISMATCH",
}

# FCM answers 404 for tokens that no longer exist
NOT_FOUND_STATUS = 404

# Refresh the cached token this many seconds before Google expires it
TOKEN_EXPIRY_MARGIN_SECONDS = 60


@dataclass
class PushMessage:
    """
    A notification addressed to a single device.

    Attributes:
        token: FCM registration token of the target device
        title: Notification title
        body: Notification body text
        data: Extra key/value pairs delivered to the app (values are sent
            as strings, as FCM requires)
    """

    token: str
    title: str
    body: str
    data: dict[str, Any] = field(default_factory=dict)

    def to_payload(self) -> dict[str, Any]:
        message: dict[str, Any] = {
            "token": self.token,
            "notification": {
                "title": self.title,
                "body": self.body,
            },
        }
        if self.data:
            message["data"] = {key: str(value) for key, value in self.data.items()}
        return {"message": message}


def _extract_fcm_error_code(response: requests.Response) -> str | None:
    """Pull the FCM errorCode (or the Google status) out of an error body."""
    try:
        error = response.json().get("error", {})
    except ValueError:
        return None
    if not isinstance(error, dict):
        return None

    for detail in error.get("details") or []:
        if isinstance(detail, dict) and detail.get("errorCode"):
            return detail["errorCode"]
    return error.get("status")


class FCMClient:
    """
    Sends push notifications through the FCM HTTP v1 API.

    One client is bound to one service account (and so one Firebase
    project). Instances hold no connection state and are cheap to build.
    """

    def __init__(
        self,
        service_account_info: dict[str, Any],
        timeout: float | None = None,
    ) -> None:
        missing = [
            key for key in REQUIRED_SERVICE_ACCOUNT_KEYS if not service_account_info.get(key)
        ]
        if missing:
            raise ConfigurationError(
                "FCM service account JSON is missing required keys.",
                details={"missing_keys": missing},
            )

        self.service_account_info = service_account_info
        self.project_id = service_account_info["project_id"]
        self.client_email = service_account_info["client_email"]
        self.timeout = (
            timeout
            if timeout is not None
            else getattr(settings, "FCM_API_TIMEOUT_SECONDS", 10)
        )

    @classmethod
    def from_settings(cls) -> FCMClient:
        """
        Build a client from FCM_SERVICE_ACCOUNT_JSON.

        Raises:
            ConfigurationError: Setting unset or not a JSON object
        """
        raw = getattr(settings, "FCM_SERVICE_ACCOUNT_JSON", "")
        if not raw:
            raise ConfigurationError("FCM service account JSON is not set.")

        try:
            info = json.loads(raw)
        except ValueError as e:
            raise ConfigurationError(
                "FCM service account JSON is not valid JSON.",
                details={"error": str(e)},
            ) from e

        if not isinstance(info, dict):
            raise ConfigurationError("FCM service account JSON must be an object.")

        return cls(info)

    @property
    def send_url(self) -> str:
        return FCM_SEND_URL.format(project_id=self.project_id)

    @property
    def _token_cache_key(self) -> str:
        return f"notifications:fcm:access_token:{self.client_email}"

    def get_access_token(self) -> str:
        """
        Return an OAuth2 access token for the service account.

        Raises:
            PushNotificationError: Google rejected the credentials or could
                not be reached
        """
        cached = cache.get(self._token_cache_key)
        if cached:
            return cached

        try:
            credentials = service_account.Credentials.from_service_account_info(
                self.service_account_info,
                scopes=FCM_SCOPES,
            )
        except ValueError as e:
            raise ConfigurationError(
                "FCM service account credentials are malformed.",
                details={"error": str(e)},
            ) from e

        try:
            credentials.refresh(google.auth.transport.requests.Request())
        except (
            google.auth.exceptions.RefreshError,
            google.auth.exceptions.TransportError,
        ) as e:
            logger.error(
                "Failed to obtain FCM access token",
                extra={"client_email": self.client_email, "error": str(e)},
            )
            raise PushNotificationError(
                f"Could not obtain FCM access token: {e}",
                error_code="FCM_AUTH_FAILED",
            ) from e

        # google-auth reports expiry as a naive UTC datetime
        if credentials.expiry is not None:
            now = datetime.now(timezone.utc).replace(tzinfo=None)
            ttl = (credentials.expiry - now).total_seconds() - TOKEN_EXPIRY_MARGIN_SECONDS
            if ttl > 0:
                cache.set(self._token_cache_key, credentials.token, timeout=int(ttl))

        return credentials.token

    def send(self, message: PushMessage) -> str:
        """
        Send one message.

        Returns:
            The FCM message name (projects/<id>/messages/<message_id>)

        Raises:
            PushNotificationError: Network failure or non-2xx response.
                is_permanent is set for unregistered/invalid tokens.
        """
        access_token = self.get_access_token()

        log_context = {
            "operation": "fcm_send",
            "project_id": self.project_id,
        }
        start_time = time.time()

        try:
            response = requests.post(
                self.send_url,
                json=message.to_payload(),
                headers={
                    "Content-Type": "application/json",
                    "Authorization": f"Bearer {access_token}",
                },
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(
                "FCM request failed",
                extra={**log_context, "error": str(e)},
            )
            raise PushNotificationError(
                f"FCM request failed: {e}",
                error_code="FCM_CONNECTION_ERROR",
            ) from e

        duration_ms = (time.time() - start_time) * 1000

        if not response.ok:
            fcm_code = _extract_fcm_error_code(response)
            logger.warning(
                "FCM rejected message",
                extra={
                    **log_context,
                    "status_code": response.status_code,
                    "fcm_error_code": fcm_code,
                    "duration_ms": duration_ms,
                },
            )
            raise PushNotificationError(
                f"FCM request failed with status {response.status_code}: {response.text}",
                error_code=fcm_code or "FCM_REQUEST_FAILED",
                is_permanent=(
                    fcm_code in PERMANENT_ERROR_CODES
                    or response.status_code == NOT_FOUND_STATUS
                ),
                status_code=response.status_code,
                details={"status_code": response.status_code},
            )

        # The message is already accepted; an unreadable body only loses its name
        try:
            body = response.json()
        except ValueError:
            body = {}
        message_name = body.get("name", "") if isinstance(body, dict) else ""
        logger.info(
            "FCM message sent",
            extra={**log_context, "message_name": message_name, "duration_ms": duration_ms},
        )
        return message_name
