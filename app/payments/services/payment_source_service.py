"""
Payment source service for e-wallet checkout.

Creates a PayMongo source for a service request and hands back the
checkout URL the mobile app opens. The payment itself is recorded later,
when PayMongo reports the source as chargeable.

Usage:
    from payments.services import CreateCheckoutParams, PaymentSourceService

    result = PaymentSourceService.create_checkout(
        CreateCheckoutParams(
            user=request.user,
            service_request_id=service_request.id,
            amount=50000,
            payment_method="gcash",
        )
    )

    if result.success:
        checkout_url = result.data.checkout_url
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import TYPE_CHECKING

from core.exceptions import ConfigurationError
from core.services import BaseService, ServiceResult

from payments.adapters import CreateSourceParams, PayMongoAdapter, SourceResult
from payments.exceptions import (
    PaymentNotFoundError,
    PaymentValidationError,
    PayMongoError,
)
from service_requests.models import ServiceRequest

if TYPE_CHECKING:
    from authentication.models import User


@dataclass
class CreateCheckoutParams:
    """
    Parameters for starting an e-wallet checkout.

    Attributes:
        user: User paying (must be the service request's requester)
        service_request_id: Service request being paid for
        amount: Amount in centavos
        payment_method: Source type (gcash, grab_pay, paymaya)
    """

    user: User
    service_request_id: uuid.UUID
    amount: int
    payment_method: str

    def __post_init__(self) -> None:
        """Validate parameters after initialization."""
        if self.amount <= 0:
            raise ValueError("amount must be positive")
        if not self.payment_method:
            raise ValueError("payment_method is required")


class PaymentSourceService(BaseService):
    """
    Service for creating checkout sources.

    Methods:
        create_checkout: Create a PayMongo source for a service request
    """

    @classmethod
    def get_payable_request(cls, user: User, service_request_id: uuid.UUID) -> ServiceRequest:
        """
        Return the caller's unpaid service request.

        Another user's request is reported as missing.

        Raises:
            PaymentNotFoundError: Unknown id or not the caller's request
            PaymentValidationError: Request is already paid
        """
        service_request = ServiceRequest.objects.filter(id=service_request_id).first()
        if not service_request:
            raise PaymentNotFoundError(
                "Service request not found.",
                error_code="SERVICE_REQUEST_NOT_FOUND",
            )

        if service_request.requester_id != user.id:
            cls.get_logger().warning(
                "Checkout attempted for another user's service request",
                extra={
                    "service_request_id": str(service_request.id),
                    "user_id": str(user.id),
                },
            )
            raise PaymentNotFoundError(
                "Service request not found.",
                error_code="SERVICE_REQUEST_NOT_FOUND",
            )

        if service_request.is_paid:
            raise PaymentValidationError(
                "Service request is already paid.",
                error_code="ALREADY_PAID",
            )

        return service_request

    @classmethod
    def create_checkout(cls, params: CreateCheckoutParams) -> ServiceResult[SourceResult]:
        """
        Create a PayMongo source for the caller's service request.

        Returns:
            ServiceResult with the SourceResult on success. Failures carry
            PayMongo's error detail or the configuration error message.
        """
        try:
            service_request = cls.get_payable_request(
                params.user, params.service_request_id
            )
        except (PaymentNotFoundError, PaymentValidationError) as e:
            return ServiceResult.failure(e.message, error_code=e.error_code)

        try:
            source = PayMongoAdapter.create_source(
                CreateSourceParams(
                    amount=params.amount,
                    service_request_id=str(service_request.id),
                    payment_method=params.payment_method,
                )
            )
        except (PayMongoError, ConfigurationError) as e:
            return cls.handle_exception(e, "PayMongo source creation")

        cls.get_logger().info(
            "Checkout created",
            extra={
                "service_request_id": str(service_request.id),
                "source_id": source.id,
            },
        )
        return ServiceResult.success(source)
