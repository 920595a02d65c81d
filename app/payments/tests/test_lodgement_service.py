"""Tests for LodgementReconciler."""

import uuid
from datetime import date, datetime, timezone as dt_timezone
from decimal import Decimal
from unittest.mock import patch

import pytest
from django.db import DatabaseError

from payments.choices import PaymentMethod, PaymentStatus
from payments.exceptions import LedgerStoreError
from payments.managers import PaymentQuerySet
from payments.models import Payment
from payments.services import LodgementReconciler
from payments.tests.factories import PaymentFactory
from payments.types import LodgementSummary


def settled(day, hour=12, minute=0):
    return datetime(2025, 1, day, hour, minute, tzinfo=dt_timezone.utc)


@pytest.fixture
def reconciler():
    return LodgementReconciler()


@pytest.fixture
def january(db, organisation_id, other_organisation_id):
    """Paid and unpaid payments spread over January 2025."""
    paid = {"organisation_id": organisation_id, "payment_status": PaymentStatus.PAID}
    PaymentFactory(**paid, amount=Decimal("10.00"), settlement_date=settled(3, 9))
    PaymentFactory(**paid, amount=Decimal("15.50"), settlement_date=settled(3, 18))
    PaymentFactory(
        **paid,
        amount=Decimal("40.00"),
        payment_method=PaymentMethod.CHEQUE,
        settlement_date=settled(3),
    )
    PaymentFactory(
        **paid, amount=Decimal("25.00"), currency="GBP", settlement_date=settled(3)
    )
    PaymentFactory(
        **paid, amount=Decimal("99.99"), settlement_date=settled(31, 23, 30)
    )
    # Never lodged
    PaymentFactory(**paid, amount=Decimal("500.00"), settlement_date=None)
    PaymentFactory(
        organisation_id=organisation_id,
        payment_status=PaymentStatus.PENDING,
        amount=Decimal("70.00"),
        settlement_date=settled(3),
    )
    PaymentFactory(
        organisation_id=organisation_id,
        payment_status=PaymentStatus.FAILED,
        amount=Decimal("80.00"),
        settlement_date=settled(3),
    )
    PaymentFactory(
        organisation_id=other_organisation_id,
        payment_status=PaymentStatus.PAID,
        amount=Decimal("1000.00"),
        settlement_date=settled(3),
    )


@pytest.mark.django_db
class TestLodgementSummaries:
    """Tests for grouping and ordering."""

    def test_groups_by_day_method_and_currency(
        self, reconciler, january, organisation_id
    ):
        """One line per settlement day, method and currency, newest day first."""
        lines = reconciler.summarise(organisation_id)

        assert lines == [
            LodgementSummary(date(2025, 1, 31), "card", "EUR", Decimal("99.99"), 1),
            LodgementSummary(date(2025, 1, 3), "card", "EUR", Decimal("25.50"), 2),
            LodgementSummary(date(2025, 1, 3), "card", "GBP", Decimal("25.00"), 1),
            LodgementSummary(date(2025, 1, 3), "cheque", "EUR", Decimal("40.00"), 1),
        ]

    def test_end_date_includes_whole_day(self, reconciler, january, organisation_id):
        """A payment settled late on the end date is included."""
        lines = reconciler.summarise(
            organisation_id, start_date=date(2025, 1, 31), end_date=date(2025, 1, 31)
        )

        assert [(line.date, line.total_amount) for line in lines] == [
            (date(2025, 1, 31), Decimal("99.99"))
        ]

    def test_empty_range(self, reconciler, january, organisation_id):
        """No paid payments in range yields an empty list."""
        assert (
            reconciler.summarise(
                organisation_id, start_date=date(2025, 2, 1), end_date=date(2025, 2, 28)
            )
            == []
        )

    def test_unknown_organisation(self, reconciler, db):
        """An organisation without payments has no lodgements."""
        assert reconciler.summarise(uuid.uuid4()) == []


@pytest.mark.django_db
class TestLodgementProperties:
    """Idempotence and conservation of totals."""

    def test_idempotent(self, reconciler, january, organisation_id):
        """Summarising twice gives the same answer."""
        assert reconciler.summarise(organisation_id) == reconciler.summarise(
            organisation_id
        )

    @pytest.mark.parametrize(
        "start_date, end_date",
        [
            (None, None),
            (date(2025, 1, 1), date(2025, 1, 3)),
            (date(2025, 1, 4), None),
        ],
    )
    def test_totals_conserved(
        self, reconciler, january, organisation_id, start_date, end_date
    ):
        """Line totals and counts add up to the paid, settled payments in range."""
        lines = reconciler.summarise(organisation_id, start_date, end_date)

        payments = list(
            Payment.objects.for_organisation(organisation_id)
            .paid()
            .filter(settlement_date__isnull=False)
            .settled_between(start_date, end_date)
        )
        by_currency = {}
        for payment in payments:
            by_currency[payment.currency] = (
                by_currency.get(payment.currency, Decimal("0")) + payment.amount
            )

        line_totals = {}
        for line in lines:
            line_totals[line.currency] = (
                line_totals.get(line.currency, Decimal("0")) + line.total_amount
            )

        assert line_totals == by_currency
        assert sum(line.transaction_count for line in lines) == len(payments)


@pytest.mark.django_db
class TestLodgementFailures:
    """Tests for database failures."""

    def test_database_error_is_wrapped(self, reconciler, organisation_id):
        """Aggregation failures surface as LedgerStoreError."""
        with patch.object(
            PaymentQuerySet, "paid", side_effect=DatabaseError("statement timeout")
        ):
            with pytest.raises(LedgerStoreError):
                reconciler.summarise(organisation_id)
