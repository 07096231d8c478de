"""
Serializers for service request webhooks.

The database-change webhook posts the updated row and the row as it was
before the update:

    {
        "type": "UPDATE",
        "table": "service_requests",
        "record": {"id": "...", "status": "cancelled", "requester_id": "...",
                   "mechanic_id": "...", "cancelled_by": "..."},
        "old_record": {"id": "...", "status": "accepted", ...}
    }
"""

from rest_framework import serializers

from service_requests.services import ServiceRequestChange


class ServiceRequestRecordSerializer(serializers.Serializer):
    """A service_requests row as sent by the database webhook."""

    id = serializers.UUIDField()
    status = serializers.CharField()
    requester_id = serializers.UUIDField()
    mechanic_id = serializers.UUIDField(allow_null=True, default=None)
    cancelled_by = serializers.UUIDField(allow_null=True, default=None)


class PreviousRecordSerializer(serializers.Serializer):
    """Only the previous status matters for change detection."""

    status = serializers.CharField(allow_null=True, default=None)


class StatusChangeEventSerializer(serializers.Serializer):
    """
    Database-change event for a service request.

    old_record is null for INSERT events.
    """

    type = serializers.CharField(required=False)
    table = serializers.CharField(required=False)
    record = ServiceRequestRecordSerializer()
    old_record = PreviousRecordSerializer(allow_null=True, required=False, default=None)

    def to_change(self) -> ServiceRequestChange:
        record = self.validated_data["record"]
        old_record = self.validated_data.get("old_record") or {}
        return ServiceRequestChange(
            request_id=record["id"],
            status=record["status"],
            previous_status=old_record.get("status"),
            requester_id=record["requester_id"],
            mechanic_id=record["mechanic_id"],
            cancelled_by=record["cancelled_by"],
        )


class StatusChangeResponseSerializer(serializers.Serializer):
    message = serializers.CharField()


class WebhookErrorResponseSerializer(serializers.Serializer):
    error = serializers.CharField(help_text="Error description")
