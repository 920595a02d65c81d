"""
Pytest fixtures for payment tests.

This module provides fixtures for creating payment-related test data and
an isolated PaymentService wired to the real stores.

Usage:
    def test_refund(payment_service, paid_payment, refund_request):
        refund = payment_service.request_refund(refund_request(Decimal("25.00")))
        assert refund.refund_status == RefundStatus.PENDING
"""

import uuid
from decimal import Decimal

import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from payments.choices import PaymentStatus
from payments.services import LodgementReconciler, PaymentService, RefundValidator
from payments.stores import PaymentStore, RefundLedger
from payments.tests.factories import PaymentFactory, UserFactory
from payments.types import RefundRequest


# =============================================================================
# Tenant and User Fixtures
# =============================================================================


@pytest.fixture
def organisation_id():
    """Organisation the tests act for."""
    return uuid.uuid4()


@pytest.fixture
def other_organisation_id():
    """A second, unrelated organisation."""
    return uuid.uuid4()


@pytest.fixture
def user(db):
    """Create a test user."""
    return UserFactory()


@pytest.fixture
def api_client():
    """Return unauthenticated API client."""
    return APIClient()


@pytest.fixture
def authenticated_client(user):
    """Return API client authenticated with JWT token."""
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {refresh.access_token}")
    return client


# =============================================================================
# Payment Fixtures
# =============================================================================


@pytest.fixture
def paid_payment(db, organisation_id):
    """Paid, settled 100.00 EUR payment of the test organisation."""
    return PaymentFactory(
        organisation_id=organisation_id,
        amount=Decimal("100.00"),
        currency="EUR",
        payment_status=PaymentStatus.PAID,
    )


@pytest.fixture
def pending_payment(db, organisation_id):
    """Payment that has not been paid yet."""
    return PaymentFactory(
        organisation_id=organisation_id,
        payment_status=PaymentStatus.PENDING,
        settlement_date=None,
    )


# =============================================================================
# Service Fixtures
# =============================================================================


@pytest.fixture
def payment_service():
    """PaymentService wired to the real stores."""
    return PaymentService(
        payments=PaymentStore(),
        refunds=RefundLedger(),
        validator=RefundValidator(),
        reconciler=LodgementReconciler(),
    )


@pytest.fixture
def refund_request(paid_payment, organisation_id):
    """Build a RefundRequest against paid_payment."""

    def _build(amount, payment=None, organisation=None, requested_by="admin-1"):
        return RefundRequest(
            payment_id=(payment or paid_payment).id,
            organisation_id=organisation or organisation_id,
            refund_amount=Decimal(amount),
            requested_by=requested_by,
            refund_reason="Event cancelled",
        )

    return _build
