"""
Tests for payment serializers.

These tests verify:
- Refund request parsing and the requested_by default
- Payment list query parsing into PaymentFilters
"""

import uuid
from datetime import date
from decimal import Decimal

from django.http import QueryDict

from payments.serializers import PaymentQuerySerializer, RefundRequestSerializer


class TestRefundRequestSerializer:
    def test_to_refund_request_defaults_requested_by(self):
        organisation_id = uuid.uuid4()
        payment_id = uuid.uuid4()
        serializer = RefundRequestSerializer(
            data={"organisation_id": str(organisation_id), "refund_amount": "12.50"}
        )

        assert serializer.is_valid(), serializer.errors
        request = serializer.to_refund_request(payment_id, 7)

        assert request.payment_id == payment_id
        assert request.organisation_id == organisation_id
        assert request.refund_amount == Decimal("12.50")
        assert request.requested_by == "7"
        assert request.refund_reason is None

    def test_blank_reason_becomes_none(self):
        serializer = RefundRequestSerializer(
            data={
                "organisation_id": str(uuid.uuid4()),
                "refund_amount": "1.00",
                "refund_reason": "",
                "requested_by": "treasurer",
            }
        )

        assert serializer.is_valid(), serializer.errors
        request = serializer.to_refund_request(uuid.uuid4(), 7)

        assert request.refund_reason is None
        assert request.requested_by == "treasurer"

    def test_rejects_three_decimal_places(self):
        serializer = RefundRequestSerializer(
            data={"organisation_id": str(uuid.uuid4()), "refund_amount": "1.005"}
        )

        assert not serializer.is_valid()
        assert "refund_amount" in serializer.errors

    def test_requires_organisation(self):
        serializer = RefundRequestSerializer(data={"refund_amount": "1.00"})

        assert not serializer.is_valid()
        assert "organisation_id" in serializer.errors


class TestPaymentQuerySerializer:
    def test_repeated_params_become_lists(self):
        params = QueryDict(
            "payment_status=paid&payment_status=refunded"
            "&payment_method=card&start_date=2025-01-01&search_term=smith"
        )
        serializer = PaymentQuerySerializer(data=params)

        assert serializer.is_valid(), serializer.errors
        filters = serializer.to_filters()

        assert filters.payment_status == ["paid", "refunded"]
        assert filters.payment_method == ["card"]
        assert filters.payment_type == []
        assert filters.start_date == date(2025, 1, 1)
        assert filters.end_date is None
        assert filters.search_term == "smith"

    def test_unknown_status_is_invalid(self):
        serializer = PaymentQuerySerializer(data=QueryDict("payment_status=settled"))

        assert not serializer.is_valid()
        assert "payment_status" in serializer.errors
