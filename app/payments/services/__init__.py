"""
Payment services.

- PaymentSourceService: Starts e-wallet checkouts through PayMongo

Usage:
    from payments.services import CreateCheckoutParams, PaymentSourceService

    result = PaymentSourceService.create_checkout(
        CreateCheckoutParams(
            user=user,
            service_request_id=service_request.id,
            amount=50000,
            payment_method="gcash",
        )
    )
"""

from payments.services.payment_source_service import (
    CreateCheckoutParams,
    PaymentSourceService,
)

__all__ = [
    "CreateCheckoutParams",
    "PaymentSourceService",
]
