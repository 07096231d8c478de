"""
Payment admin configuration.
"""

from django.contrib import admin

from payments.models import Transaction


@admin.register(Transaction)
class TransactionAdmin(admin.ModelAdmin):
    """
    Admin configuration for Transaction.

    Transactions are written by the PayMongo webhook and are read-only here.
    """

    list_display = [
        "id",
        "service_request",
        "amount",
        "payment_method",
        "status",
        "gateway_reference_id",
        "created_at",
    ]
    list_filter = ["status", "payment_method", "created_at"]
    search_fields = ["id", "gateway_reference_id", "service_request__id"]
    raw_id_fields = ["service_request"]
    readonly_fields = [
        "id",
        "service_request",
        "amount",
        "payment_method",
        "status",
        "gateway_reference_id",
        "created_at",
        "updated_at",
    ]

    def has_add_permission(self, request):
        return False
