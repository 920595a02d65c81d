"""
DRF views for the payments app.

Thin HTTP wrappers around PaymentService. Request parsing happens in
serializers; every rule lives in the service. Ledger errors propagate to
core.exception_handler, which renders them with their status code.

Endpoints:
    GET  /api/v1/payments/organisations/<org_id>/payments/   - Filtered, paginated payment list
    GET  /api/v1/payments/organisations/<org_id>/lodgements/ - Lodgement summaries
    GET  /api/v1/payments/<payment_id>/                      - Payment detail with refunds
    GET  /api/v1/payments/<payment_id>/refunds/              - Refund history
    POST /api/v1/payments/<payment_id>/refunds/              - Request a refund

Security:
    - All endpoints require authentication
"""

from __future__ import annotations

import logging

from django.apps import apps
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.pagination import PageNumberPagination
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from payments.exceptions import PaymentNotFoundError
from payments.serializers import (
    LodgementQuerySerializer,
    LodgementSerializer,
    PaymentDetailSerializer,
    PaymentQuerySerializer,
    PaymentSerializer,
    RefundRequestSerializer,
    RefundSerializer,
)

logger = logging.getLogger(__name__)


def get_payment_service():
    """Return the process-wide PaymentService built by PaymentsConfig."""
    return apps.get_app_config("payments").payment_service


class PaymentPagination(PageNumberPagination):
    page_size = 20
    page_size_query_param = "page_size"
    max_page_size = 100


class OrganisationPaymentListView(APIView):
    """
    List an organisation's payments.

    GET /api/v1/payments/organisations/<org_id>/payments/

    Query params (all optional, repeat list params for OR):
        payment_status, payment_method, payment_type, start_date,
        end_date, search_term, page, page_size
    """

    permission_classes = [IsAuthenticated]
    pagination_class = PaymentPagination

    @extend_schema(
        summary="List organisation payments",
        description=(
            "Payments ordered by settlement date (newest first, unsettled last). "
            "Criteria combine with AND; repeated values of one criterion combine with OR."
        ),
        tags=["Payments"],
        parameters=[
            PaymentQuerySerializer,
            OpenApiParameter("page", OpenApiTypes.INT, OpenApiParameter.QUERY),
            OpenApiParameter("page_size", OpenApiTypes.INT, OpenApiParameter.QUERY),
        ],
        responses={200: PaymentSerializer(many=True)},
    )
    def get(self, request, organisation_id):
        query = PaymentQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        payments = get_payment_service().get_payments_by_organisation(
            organisation_id, query.to_filters()
        )

        paginator = self.pagination_class()
        page = paginator.paginate_queryset(payments, request, view=self)
        serializer = PaymentSerializer(page, many=True)
        return paginator.get_paginated_response(serializer.data)


class OrganisationLodgementListView(APIView):
    """
    Daily lodgement summaries of an organisation's paid payments.

    GET /api/v1/payments/organisations/<org_id>/lodgements/?start_date=&end_date=
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="List lodgement summaries",
        description=(
            "Paid payments grouped by settlement day, payment method and currency. "
            "Date bounds are inclusive."
        ),
        tags=["Payments"],
        parameters=[LodgementQuerySerializer],
        responses={200: LodgementSerializer(many=True)},
    )
    def get(self, request, organisation_id):
        query = LodgementQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        lodgements = get_payment_service().get_lodgements_by_organisation(
            organisation_id,
            start_date=query.validated_data.get("start_date"),
            end_date=query.validated_data.get("end_date"),
        )
        return Response(LodgementSerializer(lodgements, many=True).data)


class PaymentDetailView(APIView):
    """
    Payment detail with refund history and refund balance.

    GET /api/v1/payments/<payment_id>/
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Get payment",
        tags=["Payments"],
        responses={200: PaymentDetailSerializer},
    )
    def get(self, request, payment_id):
        service = get_payment_service()
        payment = service.get_payment_by_id(payment_id)
        if payment is None:
            raise PaymentNotFoundError(
                "Payment not found",
                details={"payment_id": str(payment_id)},
            )

        serializer = PaymentDetailSerializer(
            payment,
            context={
                "request": request,
                "refunds": service.get_refunds_for_payment(payment.id),
                "balance": service.get_refund_balance(payment.id),
            },
        )
        return Response(serializer.data)


class PaymentRefundView(APIView):
    """
    Refund history and refund requests for a payment.

    GET  /api/v1/payments/<payment_id>/refunds/
    POST /api/v1/payments/<payment_id>/refunds/
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="List refunds of a payment",
        tags=["Payments - Refunds"],
        responses={200: RefundSerializer(many=True)},
    )
    def get(self, request, payment_id):
        service = get_payment_service()
        if service.get_payment_by_id(payment_id) is None:
            raise PaymentNotFoundError(
                "Payment not found",
                details={"payment_id": str(payment_id)},
            )
        refunds = service.get_refunds_for_payment(payment_id)
        return Response(RefundSerializer(refunds, many=True).data)

    @extend_schema(
        summary="Request a refund",
        description=(
            "Records a pending refund. Rejected when the payment belongs to another "
            "organisation, is not paid, or the amount exceeds what is left to refund."
        ),
        tags=["Payments - Refunds"],
        request=RefundRequestSerializer,
        responses={201: RefundSerializer},
    )
    def post(self, request, payment_id):
        serializer = RefundRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        refund = get_payment_service().request_refund(
            serializer.to_refund_request(payment_id, request.user.pk)
        )
        return Response(RefundSerializer(refund).data, status=status.HTTP_201_CREATED)
