"""
URL configuration for the payments app.

Routes:
    - GET  organisations/<org_id>/payments/   - Payment list
    - GET  organisations/<org_id>/lodgements/ - Lodgement summaries
    - GET  <payment_id>/                      - Payment detail
    - GET/POST <payment_id>/refunds/          - Refund history / refund request

All routes are prefixed with /api/v1/payments/ when included in the main URLconf.
"""

from django.urls import path

from payments.views import (
    OrganisationLodgementListView,
    OrganisationPaymentListView,
    PaymentDetailView,
    PaymentRefundView,
)

app_name = "payments"

urlpatterns = [
    path(
        "organisations/<uuid:organisation_id>/payments/",
        OrganisationPaymentListView.as_view(),
        name="organisation-payments",
    ),
    path(
        "organisations/<uuid:organisation_id>/lodgements/",
        OrganisationLodgementListView.as_view(),
        name="organisation-lodgements",
    ),
    path("<uuid:payment_id>/", PaymentDetailView.as_view(), name="payment-detail"),
    path(
        "<uuid:payment_id>/refunds/",
        PaymentRefundView.as_view(),
        name="payment-refunds",
    ),
]
