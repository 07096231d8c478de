"""
Transaction model for gateway payments.

A Transaction records money received for a service request through the
payment gateway. Rows are written by the PayMongo webhook when a source
becomes chargeable.

Usage:
    from payments.models import Transaction, TransactionStatus

    Transaction.objects.create(
        service_request=service_request,
        amount=Decimal("500.00"),
        payment_method="gcash",
        status=TransactionStatus.SUCCESSFUL,
        gateway_reference_id="src_xxx",
    )
"""

from __future__ import annotations

from django.db import models

from core.model_mixins import UUIDPrimaryKeyMixin
from core.models import BaseModel


class PaymentMethod(models.TextChoices):
    """E-wallet source types accepted at checkout."""

    GCASH = "gcash", "GCash"
    GRAB_PAY = "grab_pay", "GrabPay"
    PAYMAYA = "paymaya", "Maya"


class TransactionStatus(models.TextChoices):
    """Gateway transaction states."""

    PENDING = "pending", "Pending"
    SUCCESSFUL = "successful", "Successful"
    FAILED = "failed", "Failed"


class Transaction(UUIDPrimaryKeyMixin, BaseModel):
    """
    A payment made for a service request.

    Fields:
        service_request: Service request that was paid for
        amount: Amount in pesos (the gateway reports centavos)
        payment_method: Gateway source type (gcash, grab_pay, paymaya)
        status: Transaction state
        gateway_reference_id: PayMongo source ID (src_xxx)

    Note:
        gateway_reference_id is indexed but not unique. A redelivered
        webhook records a second row.
    """

    service_request = models.ForeignKey(
        "service_requests.ServiceRequest",
        on_delete=models.PROTECT,
        related_name="transactions",
        help_text="Service request this payment is for",
    )

    amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        help_text="Amount in pesos",
    )

    payment_method = models.CharField(
        max_length=32,
        help_text="Gateway payment method (gcash, grab_pay, paymaya)",
    )

    status = models.CharField(
        max_length=20,
        choices=TransactionStatus.choices,
        default=TransactionStatus.PENDING,
        db_index=True,
    )

    gateway_reference_id = models.CharField(
        max_length=255,
        db_index=True,
        help_text="PayMongo source ID (src_xxx)",
    )

    class Meta:
        db_table = "transactions"
        ordering = ["-created_at"]
        verbose_name = "transaction"
        verbose_name_plural = "transactions"

    def __str__(self):
        return f"Transaction {self.gateway_reference_id} ({self.status})"

    @property
    def is_successful(self) -> bool:
        return self.status == TransactionStatus.SUCCESSFUL
