"""
Django admin configuration for service requests.
"""

from django.contrib import admin

from service_requests.models import ServiceRequest


@admin.register(ServiceRequest)
class ServiceRequestAdmin(admin.ModelAdmin):
    """Admin configuration for ServiceRequest model."""

    list_display = (
        "id",
        "requester",
        "mechanic",
        "status",
        "payment_status",
        "created_at",
    )
    list_filter = ("status", "payment_status", "created_at")
    search_fields = ("id", "requester__email", "mechanic__email")
    raw_id_fields = ("requester", "mechanic", "cancelled_by")
    readonly_fields = ("id", "created_at", "updated_at")
