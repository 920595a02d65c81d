"""
Refund validation rules.

RefundValidator holds every rule a refund request must pass, in a fixed
order where the first failure wins:

    1. Payment exists                       (PaymentService, under row lock)
    2. Payment belongs to the organisation  check_tenant
    3. Payment is paid                      check_status
    4. Amount is a positive number of cents check_amount
    5. Amount does not exceed the payment   check_amount
    6. Outstanding refunds are summed       (PaymentService, same transaction)
    7. Amount does not exceed the remainder check_remaining
    8. The pending refund is built          build_refund

The validator never touches a store. It works on values the service has
already loaded, which keeps the rules testable without a database.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import TYPE_CHECKING

from payments.choices import RefundStatus
from payments.exceptions import (
    CrossTenantRefundError,
    InvalidRefundAmountError,
    PaymentNotRefundableError,
    RefundExceedsRemainingError,
)
from payments.models import Refund

if TYPE_CHECKING:
    from datetime import datetime

    from payments.models import Payment
    from payments.types import RefundRequest


logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


class RefundValidator:
    """Stateless refund rules. Safe to share between threads."""

    def validate_request(self, payment: Payment, request: RefundRequest) -> None:
        """Run the checks that need only the payment (steps 2 to 5)."""
        self.check_tenant(payment, request)
        self.check_status(payment)
        self.check_amount(payment, request.refund_amount)

    def check_tenant(self, payment: Payment, request: RefundRequest) -> None:
        if payment.organisation_id == request.organisation_id:
            return
        logger.warning(
            "Cross-tenant refund attempt blocked",
            extra={
                "payment_id": str(payment.id),
                "payment_organisation_id": str(payment.organisation_id),
                "requested_organisation_id": str(request.organisation_id),
                "requested_by": request.requested_by,
            },
        )
        raise CrossTenantRefundError(
            "Payment does not belong to this organisation",
            details={"payment_id": str(payment.id)},
        )

    def check_status(self, payment: Payment) -> None:
        if payment.is_refundable:
            return
        raise PaymentNotRefundableError(
            f"Cannot refund a payment with status '{payment.payment_status}'",
            details={
                "payment_id": str(payment.id),
                "current_status": payment.payment_status,
            },
        )

    def check_amount(self, payment: Payment, refund_amount: Decimal) -> None:
        """
        Reject amounts that are not a positive number of cents within the payment.

        Raises:
            InvalidRefundAmountError: If the amount is not finite, not
                positive, above the payment amount, or has fractions of a cent
        """
        if not refund_amount.is_finite():
            raise InvalidRefundAmountError(
                "Refund amount must be a finite number",
                details={"refund_amount": str(refund_amount)},
            )
        if refund_amount <= 0:
            raise InvalidRefundAmountError(
                "Refund amount must be greater than 0",
                details={"refund_amount": str(refund_amount)},
            )
        if refund_amount > payment.amount:
            raise InvalidRefundAmountError(
                "Refund amount cannot exceed payment amount",
                details={
                    "refund_amount": str(refund_amount),
                    "payment_amount": str(payment.amount),
                },
            )
        # Bounded by payment.amount above, so quantize cannot overflow
        if refund_amount != refund_amount.quantize(CENT):
            raise InvalidRefundAmountError(
                "Refund amount cannot have more than two decimal places",
                details={"refund_amount": str(refund_amount)},
            )

    def check_remaining(
        self,
        payment: Payment,
        refund_amount: Decimal,
        outstanding: Decimal,
    ) -> Decimal:
        """
        Reject amounts above the refundable remainder.

        Args:
            payment: Payment being refunded
            refund_amount: Requested amount
            outstanding: Sum of pending and completed refunds

        Returns:
            The remainder before this refund

        Raises:
            RefundExceedsRemainingError: If refund_amount > remainder
        """
        remaining = payment.amount - outstanding
        if refund_amount > remaining:
            raise RefundExceedsRemainingError(
                remaining=remaining,
                currency=payment.currency,
                details={
                    "payment_id": str(payment.id),
                    "refund_amount": str(refund_amount),
                },
            )
        return remaining

    def build_refund(
        self,
        payment: Payment,
        request: RefundRequest,
        requested_at: datetime,
    ) -> Refund:
        """Build the unsaved pending refund for an accepted request."""
        return Refund(
            payment=payment,
            organisation_id=payment.organisation_id,
            refund_amount=request.refund_amount.quantize(CENT),
            refund_reason=request.refund_reason,
            refund_status=RefundStatus.PENDING,
            requested_by=request.requested_by,
            requested_at=requested_at,
        )
