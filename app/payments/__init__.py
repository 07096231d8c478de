"""
Payments app for PayMongo integration.

This app handles:
- E-wallet checkout source creation (GCash, GrabPay, Maya)
- Webhook verification and event handling
- Transaction records for paid service requests

Related apps:
    - service_requests: ServiceRequest payment status

Usage:
    from payments.adapters import PayMongoAdapter

    event = PayMongoAdapter.verify_webhook_signature(body, signature_header)
"""
