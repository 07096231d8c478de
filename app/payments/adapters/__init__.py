"""
Payment adapters for external services.

All PayMongo API calls and webhook verification go through these adapters
to keep error handling, timeouts and logging consistent.

Usage:
    from payments.adapters import PayMongoAdapter, CreateSourceParams

    result = PayMongoAdapter.create_source(
        CreateSourceParams(
            amount=50000,
            service_request_id="7d0c...",
            payment_method="gcash",
        )
    )
"""

from payments.adapters.paymongo_adapter import (
    CreateSourceParams,
    PayMongoAdapter,
    SignatureHeader,
    SourceResult,
    parse_signature_header,
)

__all__ = [
    "CreateSourceParams",
    "PayMongoAdapter",
    "SignatureHeader",
    "SourceResult",
    "parse_signature_header",
]
