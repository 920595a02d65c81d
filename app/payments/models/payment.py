"""
Payment model: the record of money collected by an organisation.

Payments are written by the upstream capture flow (card processor
callbacks, manual cheque and cash entry, imports). The ledger reads them,
refunds against them and reconciles them into lodgements. It never deletes
a payment and never changes its status.

Usage:
    from payments.models import Payment

    payments = (
        Payment.objects.for_organisation(org_id)
        .paid()
        .settled_between(start, end)
    )
"""

from __future__ import annotations

from django.conf import settings
from django.db import models

from core.model_mixins import MetadataMixin, UUIDPrimaryKeyMixin
from core.models import BaseModel

from payments.choices import PaymentMethod, PaymentStatus
from payments.managers import PaymentQuerySet


class Payment(UUIDPrimaryKeyMixin, MetadataMixin, BaseModel):
    """
    A payment received by an organisation.

    Fields:
        organisation_id: Owning tenant, provisioned outside this service
        payer: User who paid
        payment_type: Category tag such as event_entry or membership
        context_id: Business object paid for (event, membership, form)
        amount: Amount collected, two decimal places, never negative
        currency: ISO 4217 currency code (uppercase)
        payment_method: Method tag such as card or cheque
        payment_status: Current status (see PaymentStatus)
        payment_provider: Processor name, if any
        provider_transaction_id: Processor reference, if any
        settlement_date: When funds were received; required for lodgement
        metadata: Opaque JSON from upstream systems

    Note:
        The sum of pending and completed refunds against a payment never
        exceeds its amount. PaymentService.request_refund enforces this.
    """

    # ==========================================================================
    # Ownership
    # ==========================================================================

    organisation_id = models.UUIDField(
        help_text="Organisation that received this payment",
    )

    payer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="payments",
        help_text="User who made the payment",
    )

    # ==========================================================================
    # What was paid for
    # ==========================================================================

    payment_type = models.CharField(
        max_length=50,
        help_text="Category of the payment (e.g. event_entry, membership)",
    )

    context_id = models.UUIDField(
        null=True,
        blank=True,
        help_text="Identifier of the object paid for; never dereferenced here",
    )

    # ==========================================================================
    # Amount & Currency
    # ==========================================================================

    amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        help_text="Amount collected",
    )

    currency = models.CharField(
        max_length=3,
        default="EUR",
        help_text="ISO 4217 currency code (uppercase)",
    )

    # ==========================================================================
    # Method, Status & Provider
    # ==========================================================================

    payment_method = models.CharField(
        max_length=50,
        default=PaymentMethod.CARD,
        help_text="How the payment was made (card, cheque, offline, ...)",
    )

    payment_status = models.CharField(
        max_length=20,
        choices=PaymentStatus.choices,
        default=PaymentStatus.PENDING,
        help_text="Current status of the payment",
    )

    payment_provider = models.CharField(
        max_length=50,
        null=True,
        blank=True,
        help_text="Payment processor name",
    )

    provider_transaction_id = models.CharField(
        max_length=255,
        null=True,
        blank=True,
        help_text="Processor transaction reference",
    )

    settlement_date = models.DateTimeField(
        null=True,
        blank=True,
        help_text="When the funds were received",
    )

    objects = PaymentQuerySet.as_manager()

    # ==========================================================================
    # Meta & Methods
    # ==========================================================================

    class Meta:
        db_table = "payments"
        ordering = ["-created_at"]
        verbose_name = "Payment"
        verbose_name_plural = "Payments"
        indexes = [
            models.Index(
                fields=["organisation_id", "payment_status"],
                name="payments_org_status_idx",
            ),
            models.Index(
                fields=["organisation_id", "settlement_date"],
                name="payments_org_settled_idx",
            ),
            models.Index(
                fields=["payer", "settlement_date"],
                name="payments_payer_settled_idx",
            ),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(amount__gte=0),
                name="payment_amount_non_negative",
            ),
        ]

    def __str__(self) -> str:
        """Return string representation with ID, status, and amount."""
        return f"Payment({self.id}, {self.payment_status}, {self.amount} {self.currency})"

    def save(self, *args, **kwargs):
        if self.currency:
            self.currency = self.currency.upper()
        super().save(*args, **kwargs)

    @property
    def is_refundable(self) -> bool:
        """Whether refunds may be requested against this payment."""
        return self.payment_status == PaymentStatus.PAID
