"""
Pytest fixtures for payment tests.

PayMongo is never contacted: requests.post is patched in
payments.adapters.paymongo_adapter.

Usage:
    def test_checkout(authenticated_client, service_request, mock_paymongo_post):
        response = authenticated_client.post("/api/v1/payments/sources/", {...})
"""

from unittest import mock

import pytest
from rest_framework.test import APIClient

from authentication.tests.factories import UserFactory
from payments.tests.factories import source_response
from service_requests.tests.factories import ServiceRequestFactory

PAYMONGO_SECRET_KEY = "sk_test_paymongo"
PAYMONGO_WEBHOOK_SECRET = "whsk_test_paymongo"


@pytest.fixture
def paymongo_settings(settings):
    settings.PAYMONGO_SECRET_KEY = PAYMONGO_SECRET_KEY
    settings.PAYMONGO_WEBHOOK_SECRET = PAYMONGO_WEBHOOK_SECRET
    settings.PAYMONGO_API_BASE_URL = "https://api.paymongo.com/v1"
    settings.PAYMONGO_API_TIMEOUT_SECONDS = 10
    settings.PAYMONGO_WEBHOOK_TOLERANCE_SECONDS = 0
    settings.PAYMONGO_CURRENCY = "PHP"
    settings.PAYMENT_REDIRECT_URL = "yourapp://payment/callback"
    return settings


@pytest.fixture
def mock_paymongo_post():
    with mock.patch("payments.adapters.paymongo_adapter.requests.post") as post:
        post.return_value = source_response()
        yield post


@pytest.fixture
def customer(db):
    return UserFactory(email="customer@example.com")


@pytest.fixture
def service_request(customer):
    return ServiceRequestFactory(requester=customer)


@pytest.fixture
def authenticated_client(customer):
    client = APIClient()
    client.force_authenticate(user=customer)
    return client
