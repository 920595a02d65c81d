"""
Choice enums for payment and refund records.

These are Django TextChoices for database storage and admin integration.
Statuses are written by the upstream capture and settlement flows; the
ledger reads them but never transitions them.

Payment Statuses:
    pending, paid, refunded, failed

Refund Statuses:
    pending, completed, rejected
"""

from django.db import models


class PaymentStatus(models.TextChoices):
    """
    Status of a recorded payment.

    Only PAID payments accept refunds and count towards lodgements.
    """

    PENDING = "pending", "Pending"
    PAID = "paid", "Paid"
    REFUNDED = "refunded", "Refunded"
    FAILED = "failed", "Failed"


class RefundStatus(models.TextChoices):
    """
    Status of a refund request.

    PENDING and COMPLETED refunds both consume the refundable balance of
    their payment. REJECTED refunds release it again.
    """

    PENDING = "pending", "Pending"
    COMPLETED = "completed", "Completed"
    REJECTED = "rejected", "Rejected"


class PaymentMethod(models.TextChoices):
    """
    Well-known payment method tags.

    The ledger accepts any tag in ``Payment.payment_method``; these are the
    values the admin offers and the lodgement report usually groups by.
    """

    CARD = "card", "Card"
    CHEQUE = "cheque", "Cheque"
    OFFLINE = "offline", "Offline"
    CASH = "cash", "Cash"
    BANK_TRANSFER = "bank_transfer", "Bank Transfer"


# Refund statuses that count against the refundable balance
OUTSTANDING_REFUND_STATUSES = frozenset(
    [
        RefundStatus.PENDING,
        RefundStatus.COMPLETED,
    ]
)
