"""
Pytest fixtures for service request tests.

Usage:
    def test_cancel(signed_post, assigned_request):
        response = signed_post(make_status_change_event(assigned_request, ...))
"""

import json

import pytest
from rest_framework.test import APIClient

from authentication.tests.factories import UserFactory, set_device_token
from authentication.models import Profile
from core.helpers import compute_hmac_sha256
from service_requests.models import ServiceRequestStatus
from service_requests.tests.factories import ServiceRequestFactory

WEBHOOK_SECRET = "test-status-webhook-secret"
WEBHOOK_URL = "/api/v1/service-requests/webhooks/status-change/"


@pytest.fixture
def requester(db):
    user = UserFactory(email="customer@example.com")
    set_device_token(user, "requester-device-token")
    return user


@pytest.fixture
def mechanic(db):
    user = UserFactory(email="mechanic@example.com")
    set_device_token(user, "mechanic-device-token", role=Profile.Role.MECHANIC)
    return user


@pytest.fixture
def assigned_request(requester, mechanic):
    """An accepted request with both participants registered for push."""
    return ServiceRequestFactory(
        requester=requester,
        mechanic=mechanic,
        status=ServiceRequestStatus.ACCEPTED,
    )


@pytest.fixture
def webhook_secret(settings):
    settings.SERVICE_REQUEST_WEBHOOK_SECRET = WEBHOOK_SECRET
    return WEBHOOK_SECRET


@pytest.fixture
def signed_post(webhook_secret):
    """POST a JSON event to the status-change webhook with a valid signature."""
    client = APIClient()

    def _post(event, signature=None):
        body = json.dumps(event).encode("utf-8") if not isinstance(event, bytes) else event
        if signature is None:
            signature = compute_hmac_sha256(webhook_secret, body)
        return client.generic(
            "POST",
            WEBHOOK_URL,
            data=body,
            content_type="application/json",
            HTTP_X_WEBHOOK_SIGNATURE=signature,
        )

    return _post

