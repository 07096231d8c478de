"""
URL configuration for the payments app.

Routes:
    - POST /sources/ - Create an e-wallet checkout source
    - POST /webhooks/paymongo/ - PayMongo webhook endpoint

All routes are prefixed with /api/v1/payments/ when included in the main URLconf.
"""

from django.urls import path

from payments.views import CreatePaymentSourceView
from payments.webhooks.views import paymongo_webhook

app_name = "payments"

urlpatterns = [
    path("sources/", CreatePaymentSourceView.as_view(), name="create-source"),
    # Webhook endpoints
    path("webhooks/paymongo/", paymongo_webhook, name="paymongo-webhook"),
]
