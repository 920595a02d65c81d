"""
DRF serializers for the payments app.

This module provides serializers for:
- Payment list rows and payment detail (with refunds and balance)
- Refund history and refund requests
- Payment list query parameters
- Lodgement summaries

Related files:
    - models/: Payment, Refund
    - types.py: PaymentFilters, RefundRequest, LodgementSummary
    - views.py: Payment API views
"""

from __future__ import annotations

from rest_framework import serializers

from payments.choices import PaymentStatus
from payments.models import Payment, Refund
from payments.types import PaymentFilters, RefundRequest


class RefundSerializer(serializers.ModelSerializer):
    """Refund as shown in refund history."""

    class Meta:
        model = Refund
        fields = [
            "id",
            "payment",
            "organisation_id",
            "refund_amount",
            "refund_reason",
            "refund_status",
            "refund_provider",
            "provider_refund_id",
            "refund_date",
            "requested_by",
            "requested_at",
            "metadata",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class PaymentSerializer(serializers.ModelSerializer):
    """
    Payment list row.

    payer_name and payer_email come from PaymentQuerySet.with_payer_details().
    """

    payer_name = serializers.CharField(read_only=True, default="")
    payer_email = serializers.CharField(read_only=True, default="")

    class Meta:
        model = Payment
        fields = [
            "id",
            "organisation_id",
            "payer",
            "payer_name",
            "payer_email",
            "payment_type",
            "context_id",
            "amount",
            "currency",
            "payment_method",
            "payment_status",
            "payment_provider",
            "provider_transaction_id",
            "settlement_date",
            "metadata",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class RefundBalanceSerializer(serializers.Serializer):
    payment_amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    outstanding = serializers.DecimalField(max_digits=12, decimal_places=2)
    remaining = serializers.DecimalField(max_digits=12, decimal_places=2)
    currency = serializers.CharField()


class PaymentDetailSerializer(PaymentSerializer):
    """
    Payment with its refund history and refund balance.

    Expects ``refunds`` and ``balance`` in the serializer context.
    """

    refunds = serializers.SerializerMethodField()
    refund_balance = serializers.SerializerMethodField()

    class Meta(PaymentSerializer.Meta):
        fields = PaymentSerializer.Meta.fields + ["refunds", "refund_balance"]
        read_only_fields = fields

    def get_refunds(self, obj) -> list[dict]:
        return RefundSerializer(self.context.get("refunds", []), many=True).data

    def get_refund_balance(self, obj) -> dict:
        return RefundBalanceSerializer(self.context["balance"]).data


class RefundRequestSerializer(serializers.Serializer):
    """
    Body of a refund request.

    Fields:
        organisation_id: Organisation the admin acts for
        refund_amount: Amount to refund; at most two decimal places
        refund_reason: Optional reason
        requested_by: Optional admin identifier (defaults to the caller)

    Note:
        Amount rules (positive, within the payment, within the remainder)
        are enforced by the service, not here.
    """

    organisation_id = serializers.UUIDField()
    refund_amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    refund_reason = serializers.CharField(
        required=False, allow_blank=True, allow_null=True
    )
    requested_by = serializers.CharField(required=False, max_length=255)

    def to_refund_request(self, payment_id, default_requested_by) -> RefundRequest:
        data = self.validated_data
        return RefundRequest(
            payment_id=payment_id,
            organisation_id=data["organisation_id"],
            refund_amount=data["refund_amount"],
            requested_by=data.get("requested_by") or str(default_requested_by),
            refund_reason=data.get("refund_reason") or None,
        )


class PaymentQuerySerializer(serializers.Serializer):
    """Query parameters of the payment list endpoint."""

    payment_status = serializers.ListField(
        child=serializers.ChoiceField(choices=PaymentStatus.choices),
        required=False,
    )
    payment_method = serializers.ListField(
        child=serializers.CharField(max_length=50), required=False
    )
    payment_type = serializers.ListField(
        child=serializers.CharField(max_length=50), required=False
    )
    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)
    search_term = serializers.CharField(required=False, allow_blank=True)

    def to_filters(self) -> PaymentFilters:
        data = self.validated_data
        return PaymentFilters(
            payment_status=data.get("payment_status", []),
            payment_method=data.get("payment_method", []),
            payment_type=data.get("payment_type", []),
            start_date=data.get("start_date"),
            end_date=data.get("end_date"),
            search_term=data.get("search_term"),
        )


class LodgementQuerySerializer(serializers.Serializer):
    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)


class LodgementSerializer(serializers.Serializer):
    """One lodgement line."""

    date = serializers.DateField()
    payment_method = serializers.CharField()
    currency = serializers.CharField()
    total_amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    transaction_count = serializers.IntegerField()
