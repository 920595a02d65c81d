"""
Refund model for tracking money returned against a payment.

A payment may carry several partial refunds. Refunds are only created by
PaymentService.request_refund, which checks the refundable balance under a
row lock on the payment. Provider fields are filled in later by the
external settlement flow.

Usage:
    from payments.models import Refund

    outstanding = Refund.objects.filter(payment=payment).outstanding_total()
"""

from __future__ import annotations

from django.db import models

from core.model_mixins import MetadataMixin, UUIDPrimaryKeyMixin
from core.models import BaseModel

from payments.choices import RefundStatus
from payments.managers import RefundQuerySet


class Refund(UUIDPrimaryKeyMixin, MetadataMixin, BaseModel):
    """
    Represents money returned (or to be returned) against a payment.

    Fields:
        payment: Payment being refunded
        organisation_id: Tenant; always equal to payment.organisation_id
        refund_amount: Amount to return, strictly positive
        refund_reason: Admin-supplied reason
        refund_status: Current status (see RefundStatus)
        refund_provider: Processor that executed the refund
        provider_refund_id: Processor refund reference
        refund_date: When the processor completed the refund
        requested_by: Identifier of the admin who asked for the refund
        requested_at: When the refund was requested
        metadata: Opaque JSON from upstream systems
    """

    # ==========================================================================
    # Relationships
    # ==========================================================================

    payment = models.ForeignKey(
        "payments.Payment",
        on_delete=models.PROTECT,
        related_name="refunds",
        help_text="Payment being refunded",
    )

    organisation_id = models.UUIDField(
        help_text="Organisation that owns the refunded payment",
    )

    # ==========================================================================
    # Refund Details
    # ==========================================================================

    refund_amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        help_text="Amount to return to the payer",
    )

    refund_reason = models.TextField(
        null=True,
        blank=True,
        help_text="Reason for the refund",
    )

    refund_status = models.CharField(
        max_length=20,
        choices=RefundStatus.choices,
        default=RefundStatus.PENDING,
        help_text="Current status of the refund",
    )

    # ==========================================================================
    # Provider
    # ==========================================================================

    refund_provider = models.CharField(
        max_length=50,
        null=True,
        blank=True,
        help_text="Processor that executed the refund",
    )

    provider_refund_id = models.CharField(
        max_length=255,
        null=True,
        blank=True,
        help_text="Processor refund reference",
    )

    refund_date = models.DateTimeField(
        null=True,
        blank=True,
        help_text="When the processor completed the refund",
    )

    # ==========================================================================
    # Audit
    # ==========================================================================

    requested_by = models.CharField(
        max_length=255,
        help_text="Identifier of the admin who requested the refund",
    )

    requested_at = models.DateTimeField(
        help_text="When the refund was requested",
    )

    objects = RefundQuerySet.as_manager()

    # ==========================================================================
    # Meta & Methods
    # ==========================================================================

    class Meta:
        db_table = "refunds"
        ordering = ["-created_at"]
        verbose_name = "Refund"
        verbose_name_plural = "Refunds"
        indexes = [
            models.Index(
                fields=["payment", "refund_status"],
                name="refunds_payment_status_idx",
            ),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(refund_amount__gt=0),
                name="refund_amount_positive",
            ),
        ]

    def __str__(self) -> str:
        """Return string representation with ID, status, and amount."""
        return f"Refund({self.id}, {self.refund_status}, {self.refund_amount})"
