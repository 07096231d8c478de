"""
Tests for the service request status-change webhook.

Tests cover:
- Signature verification
- Payload validation
- Ignored updates and missing recipients
- Notification delivery through a mocked FCM client
- Error responses
"""

from unittest import mock

import pytest
from rest_framework.test import APIClient

from authentication.models import Profile
from notifications.exceptions import PushNotificationError
from service_requests.models import ServiceRequestStatus
from service_requests.tests.factories import (
    ServiceRequestFactory,
    make_status_change_event,
)

WEBHOOK_URL = "/api/v1/service-requests/webhooks/status-change/"


@pytest.fixture
def fcm_client():
    """Mocked FCM client returned by FCMClient.from_settings()."""
    client = mock.MagicMock()
    client.send.return_value = "projects/demo/messages/0:123"
    with mock.patch(
        "notifications.services.FCMClient.from_settings", return_value=client
    ):
        yield client


def _cancel_event(service_request, cancelled_by):
    return make_status_change_event(
        service_request,
        status=ServiceRequestStatus.CANCELLED,
        previous_status=ServiceRequestStatus.ACCEPTED,
        cancelled_by=cancelled_by,
    )


class TestSignatureVerification:
    def test_missing_signature_returns_401(self, webhook_secret, assigned_request):
        response = APIClient().post(
            WEBHOOK_URL,
            _cancel_event(assigned_request, assigned_request.requester_id),
            format="json",
        )

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid signature"}

    def test_wrong_signature_returns_401(self, signed_post, assigned_request, fcm_client):
        response = signed_post(
            _cancel_event(assigned_request, assigned_request.requester_id),
            signature="0" * 64,
        )

        assert response.status_code == 401
        fcm_client.send.assert_not_called()

    def test_unset_secret_returns_401(self, signed_post, settings, assigned_request):
        settings.SERVICE_REQUEST_WEBHOOK_SECRET = ""

        response = signed_post(
            _cancel_event(assigned_request, assigned_request.requester_id)
        )

        assert response.status_code == 401


class TestPayloadValidation:
    def test_invalid_json_returns_400(self, signed_post):
        response = signed_post(b"{not json")

        assert response.status_code == 400
        assert "error" in response.json()

    def test_missing_record_returns_400(self, signed_post):
        response = signed_post({"type": "UPDATE", "old_record": {"status": "accepted"}})

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid payload"


class TestIgnoredEvents:
    def test_status_change_other_than_cancel(self, signed_post, assigned_request, fcm_client):
        event = make_status_change_event(
            assigned_request,
            status=ServiceRequestStatus.IN_PROGRESS,
            previous_status=ServiceRequestStatus.ACCEPTED,
        )

        response = signed_post(event)

        assert response.status_code == 200
        assert response.json() == {
            "message": "Not a cancellation event or already processed."
        }
        fcm_client.send.assert_not_called()

    def test_already_cancelled(self, signed_post, assigned_request, fcm_client):
        event = make_status_change_event(
            assigned_request,
            status=ServiceRequestStatus.CANCELLED,
            previous_status=ServiceRequestStatus.CANCELLED,
            cancelled_by=assigned_request.requester_id,
        )

        response = signed_post(event)

        assert response.status_code == 200
        assert response.json()["message"] == (
            "Not a cancellation event or already processed."
        )

    def test_no_recipient(self, signed_post, requester, fcm_client):
        unassigned = ServiceRequestFactory(requester=requester)

        response = signed_post(_cancel_event(unassigned, requester.id))

        assert response.status_code == 200
        assert response.json() == {"message": "No recipient found for notification."}
        fcm_client.send.assert_not_called()


class TestNotificationDelivery:
    def test_requester_cancel_notifies_mechanic(self, signed_post, assigned_request, fcm_client):
        response = signed_post(
            _cancel_event(assigned_request, assigned_request.requester_id)
        )

        assert response.status_code == 200
        assert response.json() == {"message": "Notification sent successfully."}

        message = fcm_client.send.call_args.args[0]
        assert message.token == "mechanic-device-token"
        assert message.title == "Service Request Cancelled"
        assert message.body == (
            "Your service request has been cancelled. Please check the app for details."
        )
        assert message.data == {"requestId": str(assigned_request.id)}

    def test_mechanic_cancel_notifies_requester(self, signed_post, assigned_request, fcm_client):
        response = signed_post(
            _cancel_event(assigned_request, assigned_request.mechanic_id)
        )

        assert response.status_code == 200
        assert fcm_client.send.call_args.args[0].token == "requester-device-token"

    def test_unassigned_request_without_actor_notifies_requester(
        self, signed_post, requester, fcm_client
    ):
        unassigned = ServiceRequestFactory(requester=requester)

        response = signed_post(_cancel_event(unassigned, cancelled_by=None))

        assert response.status_code == 200
        assert fcm_client.send.call_args.args[0].token == "requester-device-token"


class TestErrors:
    def test_fcm_not_configured_returns_500(self, signed_post, settings, assigned_request):
        settings.FCM_SERVICE_ACCOUNT_JSON = ""

        response = signed_post(
            _cancel_event(assigned_request, assigned_request.requester_id)
        )

        assert response.status_code == 500
        assert response.json() == {"error": "FCM service account JSON is not set."}

    def test_missing_device_token_returns_500(self, signed_post, assigned_request, fcm_client):
        Profile.objects.filter(user_id=assigned_request.mechanic_id).update(fcm_token=None)

        response = signed_post(
            _cancel_event(assigned_request, assigned_request.requester_id)
        )

        assert response.status_code == 500
        assert response.json() == {
            "error": f"Could not find FCM token for user {assigned_request.mechanic_id}."
        }
        fcm_client.send.assert_not_called()

    def test_fcm_failure_returns_500(self, signed_post, assigned_request, fcm_client):
        fcm_client.send.side_effect = PushNotificationError(
            "FCM request failed with status 503: unavailable",
            error_code="UNAVAILABLE",
        )

        response = signed_post(
            _cancel_event(assigned_request, assigned_request.requester_id)
        )

        assert response.status_code == 500
        assert response.json() == {
            "error": "FCM request failed with status 503: unavailable"
        }

    def test_unexpected_error_returns_500(self, signed_post, assigned_request):
        with mock.patch(
            "service_requests.webhooks.CancellationNotifier.handle_status_change",
            side_effect=RuntimeError("boom"),
        ):
            response = signed_post(
                _cancel_event(assigned_request, assigned_request.requester_id)
            )

        assert response.status_code == 500
        assert response.json() == {"error": "boom"}
