"""
Tests for webhook event handlers.

Tests cover:
- Event envelope parsing
- Handler registration and dispatch
- source.chargeable handling
"""

import uuid
from decimal import Decimal
from unittest import mock

import pytest

from core.services import ServiceResult
from payments.models import Transaction, TransactionStatus
from payments.tests.factories import source_chargeable_event
from payments.webhooks.handlers import (
    WEBHOOK_HANDLERS,
    PayMongoEvent,
    dispatch_webhook,
    handle_source_chargeable,
    register_handler,
)
from service_requests.models import PaymentStatus


def _event(service_request_id, **kwargs):
    return PayMongoEvent.from_payload(source_chargeable_event(service_request_id, **kwargs))


# =============================================================================
# Event Parsing Tests
# =============================================================================


class TestPayMongoEvent:
    def test_from_payload(self):
        payload = source_chargeable_event("req-1")

        event = PayMongoEvent.from_payload(payload)

        assert event.event_id == "evt_AbCd5678"
        assert event.event_type == "source.chargeable"
        assert event.livemode is False
        assert event.resource["id"] == "src_WxYz1234"
        assert event.payload is payload

    @pytest.mark.parametrize(
        "payload",
        [{}, {"data": None}, {"data": {"attributes": "x"}}, {"data": []}],
    )
    def test_tolerates_malformed_envelopes(self, payload):
        event = PayMongoEvent.from_payload(payload)

        assert event.event_type == ""
        assert event.resource == {}


# =============================================================================
# Handler Registration Tests
# =============================================================================


class TestRegisterHandler:
    def test_source_chargeable_is_registered(self):
        assert WEBHOOK_HANDLERS["source.chargeable"] == handle_source_chargeable

    def test_register_new_handler(self):
        @register_handler("test.event.type")
        def test_handler(event):
            return ServiceResult.success(None)

        try:
            assert WEBHOOK_HANDLERS["test.event.type"] == test_handler
        finally:
            del WEBHOOK_HANDLERS["test.event.type"]


# =============================================================================
# Dispatch Tests
# =============================================================================


class TestDispatchWebhook:
    def test_unknown_event_type_is_acknowledged(self, db):
        event = PayMongoEvent(event_id="evt_1", event_type="payment.paid")

        result = dispatch_webhook(event)

        assert result.success is True
        assert result.data is None
        assert Transaction.objects.count() == 0

    def test_dispatches_to_registered_handler(self):
        handler = mock.MagicMock(return_value=ServiceResult.success("handled"))
        event = PayMongoEvent(event_id="evt_1", event_type="source.chargeable")

        with mock.patch.dict(WEBHOOK_HANDLERS, {"source.chargeable": handler}):
            result = dispatch_webhook(event)

        handler.assert_called_once_with(event)
        assert result.data == "handled"


# =============================================================================
# source.chargeable Tests
# =============================================================================


class TestHandleSourceChargeable:
    def test_records_transaction_and_marks_paid(self, service_request):
        result = handle_source_chargeable(
            _event(service_request.id, amount=50000, payment_method="gcash")
        )

        assert result.success is True
        transaction = result.data
        assert transaction.service_request == service_request
        assert transaction.amount == Decimal("500.00")
        assert transaction.payment_method == "gcash"
        assert transaction.status == TransactionStatus.SUCCESSFUL
        assert transaction.gateway_reference_id == "src_WxYz1234"

        service_request.refresh_from_db()
        assert service_request.payment_status == PaymentStatus.PAID

    def test_converts_centavos_to_pesos(self, service_request):
        result = handle_source_chargeable(_event(service_request.id, amount=12345))

        assert result.data.amount == Decimal("123.45")

    def test_unknown_service_request(self, db):
        missing_id = uuid.uuid4()

        result = handle_source_chargeable(_event(missing_id))

        assert result.success is False
        assert result.error_code == "SERVICE_REQUEST_NOT_FOUND"
        assert Transaction.objects.count() == 0

    def test_malformed_service_request_id(self, db):
        result = handle_source_chargeable(_event("not-a-uuid"))

        assert result.success is False
        assert result.error_code == "INVALID_WEBHOOK_PAYLOAD"

    def test_malformed_amount(self, service_request):
        result = handle_source_chargeable(_event(service_request.id, amount="lots"))

        assert result.error_code == "INVALID_WEBHOOK_PAYLOAD"

    def test_missing_source(self, db):
        event = PayMongoEvent(event_id="evt_1", event_type="source.chargeable")

        result = handle_source_chargeable(event)

        assert result.success is False
        assert result.error_code == "INVALID_WEBHOOK_PAYLOAD"

    def test_missing_metadata(self, service_request):
        payload = source_chargeable_event(service_request.id)
        del payload["data"]["attributes"]["data"]["attributes"]["metadata"]

        result = handle_source_chargeable(PayMongoEvent.from_payload(payload))

        assert result.error_code == "INVALID_WEBHOOK_PAYLOAD"

    def test_transaction_kept_when_status_update_fails(self, service_request):
        with mock.patch(
            "service_requests.models.ServiceRequest.save",
            side_effect=RuntimeError("database went away"),
        ):
            with pytest.raises(RuntimeError):
                handle_source_chargeable(_event(service_request.id))

        assert Transaction.objects.filter(service_request=service_request).count() == 1
        service_request.refresh_from_db()
        assert service_request.payment_status == PaymentStatus.UNPAID
