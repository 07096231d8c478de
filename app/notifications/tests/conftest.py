"""
Test configuration and fixtures for notification tests.

FCM is never contacted: google-auth credentials and requests.post are
patched in notifications.fcm.

Usage:
    def test_send(fcm_client, mock_credentials, mock_post):
        mock_post.return_value = fcm_response(200, {"name": "projects/demo/messages/1"})
        client.send(message)
"""

import json
from datetime import datetime, timedelta, timezone
from unittest import mock

import pytest

from authentication.tests.factories import UserFactory, set_device_token
from notifications.fcm import FCMClient
from notifications.tests.factories import SERVICE_ACCOUNT_INFO, fcm_response


@pytest.fixture
def service_account_info():
    return dict(SERVICE_ACCOUNT_INFO)


@pytest.fixture
def fcm_settings(settings, service_account_info):
    settings.FCM_SERVICE_ACCOUNT_JSON = json.dumps(service_account_info)
    settings.FCM_API_TIMEOUT_SECONDS = 5
    return settings


@pytest.fixture
def fcm_client(service_account_info):
    return FCMClient(service_account_info, timeout=5)


@pytest.fixture
def mock_credentials():
    """Patch service-account credentials to hand out a fixed access token."""
    credentials = mock.MagicMock()
    credentials.token = "ya29.access-token"
    credentials.expiry = datetime.now(timezone.utc).replace(tzinfo=None) + timedelta(
        hours=1
    )
    with mock.patch(
        "notifications.fcm.service_account.Credentials.from_service_account_info",
        return_value=credentials,
    ) as from_info:
        yield from_info


@pytest.fixture
def mock_post():
    with mock.patch("notifications.fcm.requests.post") as post:
        post.return_value = fcm_response(200, {"name": "projects/demo-project/messages/1"})
        yield post


@pytest.fixture
def recipient(db):
    """User with a registered device."""
    user = UserFactory(email="recipient@example.com")
    set_device_token(user, "device-token-abc")
    return user
