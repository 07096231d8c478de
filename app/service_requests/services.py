"""
Cancellation notification service.

When a service request becomes cancelled, the participant who did not
cancel it receives a push notification.

Recipient rules:
    - Requester cancelled and a mechanic is assigned -> notify the mechanic
    - Mechanic cancelled -> notify the requester
    - Anything else -> nobody is notified

Usage:
    from service_requests.services import CancellationNotifier

    result = CancellationNotifier.handle_status_change(change)
    result.data.message  # "Notification sent successfully."
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass

from core.services import BaseService, ServiceResult

from notifications.services import PushNotificationService
from service_requests.models import ServiceRequestStatus

NOT_A_CANCELLATION_MESSAGE = "Not a cancellation event or already processed."
NO_RECIPIENT_MESSAGE = "No recipient found for notification."
NOTIFICATION_SENT_MESSAGE = "Notification sent successfully."

CANCELLATION_TITLE = "Service Request Cancelled"
CANCELLATION_BODY = (
    "Your service request has been cancelled. Please check the app for details."
)


@dataclass(frozen=True)
class ServiceRequestChange:
    """
    One observed update of a service request row.

    Attributes:
        request_id: Service request id
        status: Status after the update
        previous_status: Status before the update (None for inserts)
        requester_id: Customer who created the request
        mechanic_id: Assigned mechanic, if any
        cancelled_by: User who cancelled the request, if recorded
    """

    request_id: uuid.UUID
    status: str
    previous_status: str | None
    requester_id: uuid.UUID
    mechanic_id: uuid.UUID | None = None
    cancelled_by: uuid.UUID | None = None

    @property
    def is_new_cancellation(self) -> bool:
        return (
            self.status == ServiceRequestStatus.CANCELLED
            and self.previous_status != ServiceRequestStatus.CANCELLED
        )


@dataclass(frozen=True)
class CancellationOutcome:
    message: str
    recipient_id: uuid.UUID | None = None
    notified: bool = False


class CancellationNotifier(BaseService):
    """
    Service for cancellation notifications.

    Methods:
        resolve_recipient: Pick the participant to notify
        handle_status_change: Notify on a new cancellation
    """

    @classmethod
    def resolve_recipient(cls, change: ServiceRequestChange) -> uuid.UUID | None:
        """
        Return the user who should hear about the cancellation.

        cancelled_by and mechanic_id are compared as-is, so an unassigned
        request cancelled without a recorded actor notifies the requester.
        """
        if change.cancelled_by == change.requester_id and change.mechanic_id:
            return change.mechanic_id
        if change.cancelled_by == change.mechanic_id:
            return change.requester_id
        return None

    @classmethod
    def handle_status_change(
        cls, change: ServiceRequestChange
    ) -> ServiceResult[CancellationOutcome]:
        """
        Notify the other participant when a request is newly cancelled.

        Returns:
            ServiceResult with a CancellationOutcome. Updates that are not a
            new cancellation, or that have no recipient, succeed without
            sending anything.

        Raises:
            ConfigurationError: FCM credentials not configured
            MissingDeviceTokenError: Recipient has no device token
            PushNotificationError: FCM rejected the message
        """
        logger = cls.get_logger()

        if not change.is_new_cancellation:
            logger.debug(
                "Ignoring non-cancellation update",
                extra={
                    "service_request_id": str(change.request_id),
                    "status": change.status,
                    "previous_status": change.previous_status,
                },
            )
            return ServiceResult.success(CancellationOutcome(NOT_A_CANCELLATION_MESSAGE))

        recipient_id = cls.resolve_recipient(change)
        if recipient_id is None:
            logger.info(
                "Cancelled request has no one to notify",
                extra={
                    "service_request_id": str(change.request_id),
                    "cancelled_by": str(change.cancelled_by),
                },
            )
            return ServiceResult.success(CancellationOutcome(NO_RECIPIENT_MESSAGE))

        PushNotificationService.send_to_user(
            user_id=recipient_id,
            title=CANCELLATION_TITLE,
            body=CANCELLATION_BODY,
            data={"requestId": str(change.request_id)},
        )

        logger.info(
            "Cancellation notification sent",
            extra={
                "service_request_id": str(change.request_id),
                "recipient_id": str(recipient_id),
            },
        )
        return ServiceResult.success(
            CancellationOutcome(
                NOTIFICATION_SENT_MESSAGE,
                recipient_id=recipient_id,
                notified=True,
            )
        )
