"""
Create the payments and refunds tables.

Indexes cover the ledger's hot paths: tenant + status (refund checks and
lists), tenant + settlement date (lists and lodgements), payer + settlement
date (payer history), and payment + refund status (outstanding sums).
"""

import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Payment",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        help_text="Unique identifier for this record",
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "metadata",
                    models.JSONField(
                        blank=True,
                        default=dict,
                        help_text="Opaque key-value metadata, never interpreted by the ledger",
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(
                        auto_now_add=True,
                        db_index=True,
                        help_text="Timestamp when this record was created",
                    ),
                ),
                (
                    "updated_at",
                    models.DateTimeField(
                        auto_now=True,
                        help_text="Timestamp when this record was last modified",
                    ),
                ),
                (
                    "organisation_id",
                    models.UUIDField(
                        help_text="Organisation that received this payment",
                    ),
                ),
                (
                    "payment_type",
                    models.CharField(
                        help_text="Category of the payment (e.g. event_entry, membership)",
                        max_length=50,
                    ),
                ),
                (
                    "context_id",
                    models.UUIDField(
                        blank=True,
                        help_text="Identifier of the object paid for; never dereferenced here",
                        null=True,
                    ),
                ),
                (
                    "amount",
                    models.DecimalField(
                        decimal_places=2,
                        help_text="Amount collected",
                        max_digits=12,
                    ),
                ),
                (
                    "currency",
                    models.CharField(
                        default="EUR",
                        help_text="ISO 4217 currency code (uppercase)",
                        max_length=3,
                    ),
                ),
                (
                    "payment_method",
                    models.CharField(
                        default="card",
                        help_text="How the payment was made (card, cheque, offline, ...)",
                        max_length=50,
                    ),
                ),
                (
                    "payment_status",
                    models.CharField(
                        choices=[
                            ("pending", "Pending"),
                            ("paid", "Paid"),
                            ("refunded", "Refunded"),
                            ("failed", "Failed"),
                        ],
                        default="pending",
                        help_text="Current status of the payment",
                        max_length=20,
                    ),
                ),
                (
                    "payment_provider",
                    models.CharField(
                        blank=True,
                        help_text="Payment processor name",
                        max_length=50,
                        null=True,
                    ),
                ),
                (
                    "provider_transaction_id",
                    models.CharField(
                        blank=True,
                        help_text="Processor transaction reference",
                        max_length=255,
                        null=True,
                    ),
                ),
                (
                    "settlement_date",
                    models.DateTimeField(
                        blank=True,
                        help_text="When the funds were received",
                        null=True,
                    ),
                ),
                (
                    "payer",
                    models.ForeignKey(
                        help_text="User who made the payment",
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="payments",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Payment",
                "verbose_name_plural": "Payments",
                "db_table": "payments",
                "ordering": ["-created_at"],
                "indexes": [
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
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("amount__gte", 0)),
                        name="payment_amount_non_negative",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="Refund",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        help_text="Unique identifier for this record",
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "metadata",
                    models.JSONField(
                        blank=True,
                        default=dict,
                        help_text="Opaque key-value metadata, never interpreted by the ledger",
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(
                        auto_now_add=True,
                        db_index=True,
                        help_text="Timestamp when this record was created",
                    ),
                ),
                (
                    "updated_at",
                    models.DateTimeField(
                        auto_now=True,
                        help_text="Timestamp when this record was last modified",
                    ),
                ),
                (
                    "organisation_id",
                    models.UUIDField(
                        help_text="Organisation that owns the refunded payment",
                    ),
                ),
                (
                    "refund_amount",
                    models.DecimalField(
                        decimal_places=2,
                        help_text="Amount to return to the payer",
                        max_digits=12,
                    ),
                ),
                (
                    "refund_reason",
                    models.TextField(
                        blank=True,
                        help_text="Reason for the refund",
                        null=True,
                    ),
                ),
                (
                    "refund_status",
                    models.CharField(
                        choices=[
                            ("pending", "Pending"),
                            ("completed", "Completed"),
                            ("rejected", "Rejected"),
                        ],
                        default="pending",
                        help_text="Current status of the refund",
                        max_length=20,
                    ),
                ),
                (
                    "refund_provider",
                    models.CharField(
                        blank=True,
                        help_text="Processor that executed the refund",
                        max_length=50,
                        null=True,
                    ),
                ),
                (
                    "provider_refund_id",
                    models.CharField(
                        blank=True,
                        help_text="Processor refund reference",
                        max_length=255,
                        null=True,
                    ),
                ),
                (
                    "refund_date",
                    models.DateTimeField(
                        blank=True,
                        help_text="When the processor completed the refund",
                        null=True,
                    ),
                ),
                (
                    "requested_by",
                    models.CharField(
                        help_text="Identifier of the admin who requested the refund",
                        max_length=255,
                    ),
                ),
                (
                    "requested_at",
                    models.DateTimeField(
                        help_text="When the refund was requested",
                    ),
                ),
                (
                    "payment",
                    models.ForeignKey(
                        help_text="Payment being refunded",
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="refunds",
                        to="payments.payment",
                    ),
                ),
            ],
            options={
                "verbose_name": "Refund",
                "verbose_name_plural": "Refunds",
                "db_table": "refunds",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(
                        fields=["payment", "refund_status"],
                        name="refunds_payment_status_idx",
                    ),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("refund_amount__gt", 0)),
                        name="refund_amount_positive",
                    ),
                ],
            },
        ),
    ]
