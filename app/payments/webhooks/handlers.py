"""
Webhook event handlers for PayMongo events.

This module provides a handler registry and implementations for
processing PayMongo webhook events.

PayMongo wraps the affected resource in an event envelope:

    {
        "data": {
            "id": "evt_...",
            "type": "event",
            "attributes": {
                "type": "source.chargeable",
                "livemode": false,
                "data": {"id": "src_...", "type": "source", "attributes": {...}}
            }
        }
    }

Usage:
    from payments.webhooks.handlers import dispatch_webhook, register_handler

    @register_handler("payment.paid")
    def handle_payment_paid(event: PayMongoEvent) -> ServiceResult:
        ...

    result = dispatch_webhook(PayMongoEvent.from_payload(payload))
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Callable

from core.services import ServiceResult

from payments.models import Transaction, TransactionStatus
from service_requests.models import PaymentStatus, ServiceRequest


logger = logging.getLogger(__name__)


@dataclass
class PayMongoEvent:
    """
    A verified PayMongo webhook event.

    Attributes:
        event_id: PayMongo event ID (evt_xxx), empty if absent
        event_type: Event type (e.g., "source.chargeable"), empty if absent
        livemode: Whether the event came from live mode
        resource: The resource the event is about (data.attributes.data)
        payload: Full event payload
    """

    event_id: str
    event_type: str
    livemode: bool = False
    resource: dict[str, Any] = field(default_factory=dict)
    payload: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> PayMongoEvent:
        data = payload.get("data")
        data = data if isinstance(data, dict) else {}
        attributes = data.get("attributes")
        attributes = attributes if isinstance(attributes, dict) else {}
        resource = attributes.get("data")

        return cls(
            event_id=str(data.get("id") or ""),
            event_type=str(attributes.get("type") or ""),
            livemode=bool(attributes.get("livemode", False)),
            resource=resource if isinstance(resource, dict) else {},
            payload=payload,
        )


# =============================================================================
# Handler Registry
# =============================================================================


# Maps event type strings to handler functions
WEBHOOK_HANDLERS: dict[str, Callable[[PayMongoEvent], ServiceResult]] = {}


def register_handler(event_type: str) -> Callable:
    """
    Decorator to register a webhook event handler.

    Args:
        event_type: The PayMongo event type (e.g., "source.chargeable")
    """

    def decorator(func: Callable[[PayMongoEvent], ServiceResult]) -> Callable:
        WEBHOOK_HANDLERS[event_type] = func
        logger.debug(f"Registered webhook handler for {event_type}")
        return func

    return decorator


def dispatch_webhook(event: PayMongoEvent) -> ServiceResult:
    """
    Dispatch a webhook event to the appropriate handler.

    Unregistered event types are acknowledged with a successful result so
    PayMongo stops redelivering them.

    Returns:
        ServiceResult from the handler, or success if no handler
    """
    handler = WEBHOOK_HANDLERS.get(event.event_type)

    if not handler:
        logger.info(
            f"No handler registered for event type: {event.event_type}",
            extra={"paymongo_event_id": event.event_id},
        )
        return ServiceResult.success(None)

    logger.info(
        f"Dispatching {event.event_type} to handler",
        extra={"paymongo_event_id": event.event_id},
    )

    return handler(event)


# =============================================================================
# Source Handlers
# =============================================================================


def _centavos_to_pesos(amount: Any) -> Decimal:
    centavos = Decimal(str(amount))
    if not centavos.is_finite():
        raise InvalidOperation(f"Non-finite amount: {amount}")
    return (centavos / 100).quantize(Decimal("0.01"))


@register_handler("source.chargeable")
def handle_source_chargeable(event: PayMongoEvent) -> ServiceResult[Transaction]:
    """
    Record a payment once the customer has authorized an e-wallet source.

    Writes a successful Transaction, then marks the service request paid.
    The two writes are not wrapped in one database transaction: if the
    second fails, the recorded payment stays.

    Returns:
        ServiceResult with the created Transaction
    """
    source = event.resource
    attributes = source.get("attributes") or {}
    metadata = attributes.get("metadata") or {}

    source_id = source.get("id")
    service_request_id = metadata.get("service_request_id")
    payment_method = attributes.get("type")
    raw_amount = attributes.get("amount")

    if not source_id or not service_request_id or not payment_method or raw_amount is None:
        logger.error(
            "source.chargeable: Source is missing required fields",
            extra={"paymongo_event_id": event.event_id, "source_id": source_id},
        )
        return ServiceResult.failure(
            "Webhook payload is missing source details.",
            error_code="INVALID_WEBHOOK_PAYLOAD",
        )

    try:
        request_uuid = uuid.UUID(str(service_request_id))
        amount = _centavos_to_pesos(raw_amount)
    except (ValueError, InvalidOperation):
        logger.error(
            "source.chargeable: Malformed source details",
            extra={
                "paymongo_event_id": event.event_id,
                "source_id": source_id,
                "service_request_id": str(service_request_id),
            },
        )
        return ServiceResult.failure(
            "Webhook payload has malformed source details.",
            error_code="INVALID_WEBHOOK_PAYLOAD",
        )

    service_request = ServiceRequest.objects.filter(id=request_uuid).first()
    if not service_request:
        logger.error(
            f"source.chargeable: ServiceRequest not found for {request_uuid}",
            extra={"paymongo_event_id": event.event_id, "source_id": source_id},
        )
        return ServiceResult.failure(
            f"Service request {request_uuid} not found.",
            error_code="SERVICE_REQUEST_NOT_FOUND",
        )

    transaction_record = Transaction.objects.create(
        service_request=service_request,
        amount=amount,
        payment_method=payment_method,
        status=TransactionStatus.SUCCESSFUL,
        gateway_reference_id=source_id,
    )

    service_request.payment_status = PaymentStatus.PAID
    service_request.save(update_fields=["payment_status", "updated_at"])

    logger.info(
        f"Recorded payment for service request {service_request.id}",
        extra={
            "paymongo_event_id": event.event_id,
            "source_id": source_id,
            "transaction_id": str(transaction_record.id),
            "amount": str(amount),
        },
    )

    return ServiceResult.success(transaction_record)
