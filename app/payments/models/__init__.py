"""
Payment domain models.

- Transaction: Money received for a service request through PayMongo
"""

from payments.models.transaction import PaymentMethod, Transaction, TransactionStatus

__all__ = [
    "PaymentMethod",
    "Transaction",
    "TransactionStatus",
]
