"""
Service request model.

Related files:
    - services.py: Cancellation notification logic
    - webhooks.py: Database-change webhook endpoint
"""

from django.conf import settings
from django.db import models

from core.model_mixins import UUIDPrimaryKeyMixin
from core.models import BaseModel


class ServiceRequestStatus(models.TextChoices):
    """Lifecycle states of a service request."""

    PENDING = "pending", "Pending"
    ACCEPTED = "accepted", "Accepted"
    IN_PROGRESS = "in_progress", "In progress"
    COMPLETED = "completed", "Completed"
    CANCELLED = "cancelled", "Cancelled"


class PaymentStatus(models.TextChoices):
    """Payment state of a service request."""

    UNPAID = "unpaid", "Unpaid"
    PAID = "paid", "Paid"


class ServiceRequest(UUIDPrimaryKeyMixin, BaseModel):
    """
    A customer's request for a mechanic's service.

    Fields:
        requester: Customer who created the request
        mechanic: Mechanic assigned to the request (null until accepted)
        cancelled_by: User who cancelled the request (null unless cancelled
            by a participant)
        status: Lifecycle status
        payment_status: Whether the request has been paid for
        description: Free-text description of the problem
    """

    requester = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="service_requests",
        help_text="Customer who created the request",
    )
    mechanic = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="assigned_service_requests",
        help_text="Mechanic assigned to the request",
    )
    cancelled_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
        help_text="User who cancelled the request",
    )

    status = models.CharField(
        max_length=20,
        choices=ServiceRequestStatus.choices,
        default=ServiceRequestStatus.PENDING,
        db_index=True,
    )
    payment_status = models.CharField(
        max_length=20,
        choices=PaymentStatus.choices,
        default=PaymentStatus.UNPAID,
        db_index=True,
    )

    description = models.TextField(blank=True)

    class Meta:
        db_table = "service_requests"
        ordering = ["-created_at"]
        verbose_name = "service request"
        verbose_name_plural = "service requests"

    def __str__(self):
        return f"ServiceRequest {self.id} ({self.status})"

    @property
    def is_cancelled(self) -> bool:
        return self.status == ServiceRequestStatus.CANCELLED

    @property
    def is_paid(self) -> bool:
        return self.payment_status == PaymentStatus.PAID
