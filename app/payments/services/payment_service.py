"""
Payment service: the caller-facing facade of the payment ledger.

PaymentService wires the stores, the refund validator and the lodgement
reconciler together. Views, the admin and scripts talk to it; nothing
else in the ledger is called directly from outside.

Refund Flow:
    1. Open a transaction and lock the payment row (SELECT ... FOR UPDATE)
    2. Run tenant, status and amount checks
    3. Sum pending and completed refunds
    4. Reject amounts above the remainder
    5. Build and persist the pending refund
    6. Commit, releasing the row lock

Concurrent requests for the same payment queue on the row lock in step 1,
so the second one always sees the first one's refund in step 3.

Usage:
    from django.apps import apps

    service = apps.get_app_config("payments").payment_service
    refund = service.request_refund(
        RefundRequest(
            payment_id=payment_id,
            organisation_id=org_id,
            refund_amount=Decimal("25.00"),
            requested_by=str(request.user.pk),
        )
    )
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.utils import timezone

from core.services import BaseService

from payments.exceptions import PaymentError, PaymentNotFoundError
from payments.types import RefundBalance

if TYPE_CHECKING:
    import uuid
    from collections.abc import Callable
    from datetime import date, datetime

    from payments.models import Payment, Refund
    from payments.services.lodgement_service import LodgementReconciler
    from payments.services.refund_validator import RefundValidator
    from payments.stores import PaymentStore, RefundLedger
    from payments.types import LodgementSummary, PaymentFilters, RefundRequest


class PaymentService(BaseService):
    """
    Facade over the payment ledger.

    Collaborators are passed in explicitly. The service keeps no state
    between calls, so one instance serves the whole process.

    Args:
        payments: Payment record store
        refunds: Refund ledger
        validator: Refund rules
        reconciler: Lodgement aggregation
        clock: Callable returning the current aware datetime
    """

    def __init__(
        self,
        payments: PaymentStore,
        refunds: RefundLedger,
        validator: RefundValidator,
        reconciler: LodgementReconciler,
        clock: Callable[[], datetime] = timezone.now,
    ):
        self.payments = payments
        self.refunds = refunds
        self.validator = validator
        self.reconciler = reconciler
        self.clock = clock

    # ==========================================================================
    # Payments
    # ==========================================================================

    def get_payments_by_organisation(
        self,
        organisation_id: uuid.UUID,
        filters: PaymentFilters | None = None,
    ) -> list[Payment]:
        """List an organisation's payments, newest settlement first."""
        return self.payments.get_by_organisation(organisation_id, filters)

    def get_payment_by_id(self, payment_id: uuid.UUID) -> Payment | None:
        return self.payments.get_by_id(payment_id)

    # ==========================================================================
    # Refunds
    # ==========================================================================

    def request_refund(self, request: RefundRequest) -> Refund:
        """
        Record a pending refund against a paid payment.

        Args:
            request: Payment, organisation, amount and requesting admin

        Returns:
            The persisted pending Refund

        Raises:
            PaymentNotFoundError: Payment does not exist
            CrossTenantRefundError: Payment belongs to another organisation
            PaymentNotRefundableError: Payment is not paid
            InvalidRefundAmountError: Amount is non-positive or above the payment
            RefundExceedsRemainingError: Amount is above what is left to refund
            LedgerStoreError: The database failed; nothing was written
        """
        logger = self.get_logger()
        log_context = {
            "payment_id": str(request.payment_id),
            "organisation_id": str(request.organisation_id),
            "refund_amount": str(request.refund_amount),
            "requested_by": request.requested_by,
        }

        try:
            with self.atomic():
                payment = self.payments.get_for_update(request.payment_id)
                if payment is None:
                    raise PaymentNotFoundError(
                        "Payment not found",
                        details={"payment_id": str(request.payment_id)},
                    )

                self.validator.validate_request(payment, request)
                outstanding = self.refunds.sum_outstanding(payment.id)
                remaining = self.validator.check_remaining(
                    payment, request.refund_amount, outstanding
                )
                refund = self.refunds.create(
                    self.validator.build_refund(payment, request, self.clock())
                )
        except PaymentError as e:
            if e.status_code < 500:
                logger.warning(
                    f"Refund rejected: {e.message}",
                    extra={**log_context, "error_code": e.error_code},
                )
            raise

        logger.info(
            f"Refund {refund.id} requested for payment {payment.id}",
            extra={
                **log_context,
                "refund_id": str(refund.id),
                "remaining_before": str(remaining),
            },
        )
        return refund

    def get_refunds_for_payment(self, payment_id: uuid.UUID) -> list[Refund]:
        """Refund history of a payment, newest first."""
        return self.refunds.list_for_payment(payment_id)

    def get_refund_balance(self, payment_id: uuid.UUID) -> RefundBalance:
        """
        Refund position of a payment.

        Raises:
            PaymentNotFoundError: Payment does not exist
        """
        payment = self.payments.get_by_id(payment_id)
        if payment is None:
            raise PaymentNotFoundError(
                "Payment not found",
                details={"payment_id": str(payment_id)},
            )
        return RefundBalance(
            payment_amount=payment.amount,
            outstanding=self.refunds.sum_outstanding(payment.id),
            currency=payment.currency,
        )

    # ==========================================================================
    # Lodgements
    # ==========================================================================

    def get_lodgements_by_organisation(
        self,
        organisation_id: uuid.UUID,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> list[LodgementSummary]:
        """Daily lodgement lines per payment method and currency."""
        return self.reconciler.summarise(organisation_id, start_date, end_date)
