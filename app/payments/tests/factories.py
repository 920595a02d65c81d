"""
Factory Boy factories for payment test data.

This module provides factories for creating test instances of payment models.
Factories generate realistic test data while allowing easy customization.

Usage:
    from payments.tests.factories import PaymentFactory, RefundFactory, UserFactory

    # A paid, settled 100.00 EUR card payment
    payment = PaymentFactory()

    # A payment in a specific status for a specific organisation
    payment = PaymentFactory(payment_status=PaymentStatus.PENDING, organisation_id=org_id)

    # A completed refund against an existing payment
    refund = RefundFactory(payment=payment, refund_status=RefundStatus.COMPLETED)
"""

import uuid
from decimal import Decimal

import factory
from django.utils import timezone

from payments.choices import PaymentMethod, PaymentStatus, RefundStatus
from payments.models import Payment, Refund


class UserFactory(factory.django.DjangoModelFactory):
    """Factory for payers (the default Django user model)."""

    class Meta:
        model = "auth.User"
        skip_postgeneration_save = True

    username = factory.Sequence(lambda n: f"payer{n}")
    email = factory.Sequence(lambda n: f"payer{n}@example.com")
    first_name = factory.Faker("first_name")
    last_name = factory.Faker("last_name")
    password = factory.PostGenerationMethodCall("set_password", "testpass123")


class PaymentFactory(factory.django.DjangoModelFactory):
    """
    Factory for creating Payment instances.

    Default creates a paid, settled 100.00 EUR card payment for a fresh
    organisation.

    Example:
        # Unsettled payment
        payment = PaymentFactory(settlement_date=None)

        # Cheque payment settled on a given day
        payment = PaymentFactory(
            payment_method=PaymentMethod.CHEQUE,
            settlement_date=datetime(2025, 1, 15, 10, 0, tzinfo=dt_timezone.utc),
        )
    """

    class Meta:
        model = Payment
        skip_postgeneration_save = True

    organisation_id = factory.LazyFunction(uuid.uuid4)
    payer = factory.SubFactory(UserFactory)
    payment_type = "event_entry"
    context_id = factory.LazyFunction(uuid.uuid4)
    amount = Decimal("100.00")
    currency = "EUR"
    payment_method = PaymentMethod.CARD
    payment_status = PaymentStatus.PAID
    payment_provider = "stripe"
    provider_transaction_id = factory.Sequence(lambda n: f"txn_{n:06d}")
    settlement_date = factory.LazyFunction(timezone.now)
    metadata = factory.LazyFunction(dict)


class RefundFactory(factory.django.DjangoModelFactory):
    """
    Factory for creating Refund instances.

    Bypasses PaymentService on purpose, so tests can set up refund history
    directly. organisation_id follows the payment.
    """

    class Meta:
        model = Refund
        skip_postgeneration_save = True

    payment = factory.SubFactory(PaymentFactory)
    organisation_id = factory.LazyAttribute(lambda o: o.payment.organisation_id)
    refund_amount = Decimal("10.00")
    refund_reason = "Requested by member"
    refund_status = RefundStatus.PENDING
    requested_by = "admin-1"
    requested_at = factory.LazyFunction(timezone.now)
    metadata = factory.LazyFunction(dict)
