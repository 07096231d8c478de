"""
Push notification service layer.

Resolves a user's device token and delivers a push message through FCM.

Usage:
    from notifications.services import PushNotificationService

    PushNotificationService.send_to_user(
        user_id=recipient_id,
        title="Service Request Cancelled",
        body="Your service request has been cancelled.",
        data={"requestId": str(request_id)},
    )
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.services import BaseService

from authentication.models import Profile
from notifications.exceptions import MissingDeviceTokenError, PushNotificationError
from notifications.fcm import FCMClient, PushMessage

if TYPE_CHECKING:
    import uuid
    from typing import Any


# FCM errors that mean the stored token belongs to no installed app
STALE_TOKEN_ERROR_CODES = {"UNREGISTERED"}


class PushNotificationService(BaseService):
    """
    Service for single-recipient push notifications.

    Methods:
        get_device_token: Look up a user's FCM registration token
        send_to_user: Deliver a notification to a user's device
    """

    @classmethod
    def get_device_token(cls, user_id: uuid.UUID | str) -> str:
        """
        Return the FCM token stored on the user's profile.

        Raises:
            MissingDeviceTokenError: No profile, or profile has no token
        """
        fcm_token = (
            Profile.objects.filter(user_id=user_id)
            .values_list("fcm_token", flat=True)
            .first()
        )
        if not fcm_token:
            raise MissingDeviceTokenError(
                f"Could not find FCM token for user {user_id}.",
                details={"user_id": str(user_id)},
            )
        return fcm_token

    @classmethod
    def send_to_user(
        cls,
        user_id: uuid.UUID | str,
        title: str,
        body: str,
        data: dict[str, Any] | None = None,
        client: FCMClient | None = None,
    ) -> str:
        """
        Send a push notification to a user's registered device.

        The FCM client is built before the token lookup so a misconfigured
        deployment is reported as such regardless of the recipient.

        Args:
            user_id: Recipient user id
            title: Notification title
            body: Notification body
            data: Extra data for the app (values stringified)
            client: FCM client to use (defaults to FCMClient.from_settings())

        Returns:
            FCM message name

        Raises:
            ConfigurationError: FCM credentials not configured
            MissingDeviceTokenError: Recipient has no device token
            PushNotificationError: FCM rejected the message
        """
        client = client or FCMClient.from_settings()
        fcm_token = cls.get_device_token(user_id)

        try:
            message_name = client.send(
                PushMessage(token=fcm_token, title=title, body=body, data=data or {})
            )
        except PushNotificationError as e:
            if e.error_code in STALE_TOKEN_ERROR_CODES:
                cleared = Profile.objects.filter(
                    user_id=user_id, fcm_token=fcm_token
                ).update(fcm_token=None)
                cls.get_logger().warning(
                    f"Cleared stale FCM token for user {user_id}",
                    extra={"user_id": str(user_id), "cleared": cleared},
                )
            raise

        cls.get_logger().info(
            f"Push notification sent to user {user_id}",
            extra={"user_id": str(user_id), "message_name": message_name},
        )
        return message_name
