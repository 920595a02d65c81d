"""
Persistence access for payments and refunds.

PaymentStore and RefundLedger are the only classes that query the payment
tables on behalf of PaymentService. They apply no business rules. Every
database failure is logged with its context and re-raised as
LedgerStoreError, chained to the driver exception.

Usage:
    from payments.stores import PaymentStore, RefundLedger

    payments = PaymentStore()
    refunds = RefundLedger()

    with transaction.atomic():
        payment = payments.get_for_update(payment_id)
        outstanding = refunds.sum_outstanding(payment_id)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from django.db import DatabaseError

from payments.exceptions import LedgerStoreError
from payments.filters import PaymentFilterSet
from payments.models import Payment, Refund

if TYPE_CHECKING:
    import uuid
    from decimal import Decimal

    from payments.types import PaymentFilters


logger = logging.getLogger(__name__)


class PaymentStore:
    """
    Read access to payment records.

    Methods:
        get_by_id(): Single payment, or None
        get_for_update(): Single payment with its row locked, or None
        get_by_organisation(): Filtered, ordered list for one organisation
    """

    def get_by_id(self, payment_id: uuid.UUID) -> Payment | None:
        try:
            return (
                Payment.objects.with_payer_details().filter(id=payment_id).first()
            )
        except DatabaseError as exc:
            logger.exception(
                "Failed to load payment",
                extra={"payment_id": str(payment_id)},
            )
            raise LedgerStoreError(
                "Failed to load payment",
                details={"payment_id": str(payment_id)},
            ) from exc

    def get_for_update(self, payment_id: uuid.UUID) -> Payment | None:
        """
        Load a payment and lock its row until the transaction ends.

        Must be called inside transaction.atomic(). Concurrent callers for
        the same payment block here until the holder commits or rolls back.
        """
        try:
            return Payment.objects.select_for_update().filter(id=payment_id).first()
        except DatabaseError as exc:
            logger.exception(
                "Failed to lock payment",
                extra={"payment_id": str(payment_id)},
            )
            raise LedgerStoreError(
                "Failed to lock payment",
                details={"payment_id": str(payment_id)},
            ) from exc

    def get_by_organisation(
        self,
        organisation_id: uuid.UUID,
        filters: PaymentFilters | None = None,
    ) -> list[Payment]:
        """
        List an organisation's payments, newest settlement first.

        Args:
            organisation_id: Tenant to list
            filters: Optional criteria, applied by PaymentFilterSet

        Returns:
            Payments annotated with payer_name and payer_email

        Raises:
            PaymentFilterError: If the criteria are malformed
            LedgerStoreError: If the query fails
        """
        data = filters.as_filter_data() if filters is not None else {}
        queryset = PaymentFilterSet.for_organisation(organisation_id, data)
        try:
            return list(queryset)
        except DatabaseError as exc:
            logger.exception(
                "Failed to list payments",
                extra={"organisation_id": str(organisation_id)},
            )
            raise LedgerStoreError(
                "Failed to list payments",
                details={"organisation_id": str(organisation_id)},
            ) from exc


class RefundLedger:
    """
    Write and balance access to refund records.

    Methods:
        create(): Persist a built refund
        sum_outstanding(): Total of pending and completed refunds
        list_for_payment(): Refund history, newest first
    """

    def create(self, refund: Refund) -> Refund:
        """Persist an unsaved refund. Performs no balance check."""
        try:
            refund.save(force_insert=True)
        except DatabaseError as exc:
            logger.exception(
                "Failed to create refund",
                extra={
                    "payment_id": str(refund.payment_id),
                    "refund_amount": str(refund.refund_amount),
                },
            )
            raise LedgerStoreError(
                "Failed to create refund",
                details={"payment_id": str(refund.payment_id)},
            ) from exc
        return refund

    def sum_outstanding(self, payment_id: uuid.UUID) -> Decimal:
        try:
            return Refund.objects.filter(payment_id=payment_id).outstanding_total()
        except DatabaseError as exc:
            logger.exception(
                "Failed to sum outstanding refunds",
                extra={"payment_id": str(payment_id)},
            )
            raise LedgerStoreError(
                "Failed to sum outstanding refunds",
                details={"payment_id": str(payment_id)},
            ) from exc

    def list_for_payment(self, payment_id: uuid.UUID) -> list[Refund]:
        try:
            return list(
                Refund.objects.filter(payment_id=payment_id).order_by(
                    "-requested_at", "-created_at"
                )
            )
        except DatabaseError as exc:
            logger.exception(
                "Failed to list refunds",
                extra={"payment_id": str(payment_id)},
            )
            raise LedgerStoreError(
                "Failed to list refunds",
                details={"payment_id": str(payment_id)},
            ) from exc
