"""Tests for PaymentStore and RefundLedger."""

import uuid
from decimal import Decimal
from unittest.mock import patch

import pytest
from django.db import DatabaseError

from payments.choices import RefundStatus
from payments.exceptions import LedgerStoreError
from payments.managers import PaymentQuerySet, RefundQuerySet
from payments.models import Refund
from payments.services import RefundValidator
from payments.stores import PaymentStore, RefundLedger
from payments.tests.factories import PaymentFactory, RefundFactory
from payments.types import RefundRequest


@pytest.mark.django_db
class TestPaymentStore:
    """Tests for PaymentStore."""

    def test_get_by_id_annotates_payer(self):
        """Loaded payments carry payer_name and payer_email."""
        payment = PaymentFactory(
            payer__first_name="Aoife",
            payer__last_name="Byrne",
            payer__email="aoife@example.com",
        )

        loaded = PaymentStore().get_by_id(payment.id)

        assert loaded.payer_name == "Aoife Byrne"
        assert loaded.payer_email == "aoife@example.com"

    def test_get_for_update_returns_payment(self):
        """get_for_update loads the payment inside a transaction."""
        payment = PaymentFactory()

        assert PaymentStore().get_for_update(payment.id) == payment

    def test_get_for_update_missing(self):
        """get_for_update returns None for unknown ids."""
        assert PaymentStore().get_for_update(uuid.uuid4()) is None

    def test_database_error_is_wrapped(self):
        """Driver errors surface as LedgerStoreError chained to the cause."""
        with patch.object(
            PaymentQuerySet, "first", side_effect=DatabaseError("timeout")
        ):
            with pytest.raises(LedgerStoreError) as exc_info:
                PaymentStore().get_by_id(uuid.uuid4())

        assert isinstance(exc_info.value.__cause__, DatabaseError)
        assert exc_info.value.error_code == "LEDGER_STORE_ERROR"

    def test_database_error_is_logged(self, caplog):
        """Store failures are logged at ERROR with the traceback."""
        with patch.object(
            PaymentQuerySet, "first", side_effect=DatabaseError("timeout")
        ):
            with caplog.at_level("ERROR", logger="payments"):
                with pytest.raises(LedgerStoreError):
                    PaymentStore().get_for_update(uuid.uuid4())

        assert any(
            record.levelname == "ERROR" and record.exc_info for record in caplog.records
        )


@pytest.mark.django_db
class TestRefundLedger:
    """Tests for RefundLedger."""

    def test_create_persists_without_balance_check(self):
        """create() writes whatever it is given; rules live in the validator."""
        payment = PaymentFactory(amount=Decimal("10.00"))
        RefundFactory(payment=payment, refund_amount=Decimal("10.00"))
        refund = RefundValidator().build_refund(
            payment,
            RefundRequest(
                payment_id=payment.id,
                organisation_id=payment.organisation_id,
                refund_amount=Decimal("5.00"),
                requested_by="admin-1",
            ),
            requested_at=payment.created_at,
        )

        created = RefundLedger().create(refund)

        assert Refund.objects.filter(pk=created.pk).exists()

    def test_sum_outstanding_defaults_to_zero(self):
        """No refunds means Decimal('0.00')."""
        payment = PaymentFactory()

        assert RefundLedger().sum_outstanding(payment.id) == Decimal("0.00")

    def test_sum_outstanding(self):
        """Pending and completed refunds are summed."""
        payment = PaymentFactory()
        RefundFactory(payment=payment, refund_amount=Decimal("12.34"))
        RefundFactory(
            payment=payment,
            refund_amount=Decimal("0.66"),
            refund_status=RefundStatus.COMPLETED,
        )

        assert RefundLedger().sum_outstanding(payment.id) == Decimal("13.00")

    def test_sum_outstanding_wraps_errors(self):
        """Balance query failures surface as LedgerStoreError."""
        with patch.object(
            RefundQuerySet, "outstanding_total", side_effect=DatabaseError("boom")
        ):
            with pytest.raises(LedgerStoreError):
                RefundLedger().sum_outstanding(uuid.uuid4())
