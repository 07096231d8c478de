"""
URL configuration for service_requests app.

Mounted at /api/v1/service-requests/.
"""

from django.urls import path

from service_requests.webhooks import StatusChangeWebhookView

app_name = "service_requests"

urlpatterns = [
    path(
        "webhooks/status-change/",
        StatusChangeWebhookView.as_view(),
        name="status-change-webhook",
    ),
]
