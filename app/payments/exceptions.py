"""
Payment-specific exceptions for ledger operations.

Each exception pairs PaymentError (so callers can catch every ledger
failure at once) with the core error kind that fixes its HTTP status.

Exception Hierarchy:
    PaymentError (base for payment domain)
    ├── PaymentNotFoundError - Payment lookup failed (NotFoundError, 404)
    ├── CrossTenantRefundError - Payment owned by another organisation (PermissionDeniedError, 403)
    ├── PaymentNotRefundableError - Payment not in paid status (InvalidStateError, 400)
    ├── InvalidRefundAmountError - Non-positive or oversized amount (ValidationError, 400)
    │   └── RefundExceedsRemainingError - Amount above the refundable balance
    ├── PaymentFilterError - Malformed list filters (ValidationError, 400)
    └── LedgerStoreError - Database failure (StoreError, 500)

Usage:
    from payments.exceptions import PaymentError, RefundExceedsRemainingError

    try:
        refund = service.request_refund(request)
    except RefundExceedsRemainingError as e:
        logger.info(f"Only {e.remaining} {e.currency} left to refund")
    except PaymentError as e:
        return Response(e.to_dict(), status=e.status_code)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.exceptions import (
    BaseApplicationError,
    InvalidStateError,
    NotFoundError,
    PermissionDeniedError,
    StoreError,
    ValidationError,
)

if TYPE_CHECKING:
    from decimal import Decimal
    from typing import Any


# =============================================================================
# Payment Domain Exceptions
# =============================================================================


class PaymentError(BaseApplicationError):
    """
    Base exception for all payment ledger operations.

    Note:
        Does not set status_code; the core kind mixed into each subclass
        decides it.
    """

    default_error_code: str = "PAYMENT_ERROR"


class PaymentNotFoundError(PaymentError, NotFoundError):
    """
    Raised when a payment cannot be found.

    Example:
        payment = self.payments.get_for_update(payment_id)
        if payment is None:
            raise PaymentNotFoundError(
                "Payment not found",
                details={"payment_id": str(payment_id)},
            )
    """

    default_error_code: str = "PAYMENT_NOT_FOUND"


class CrossTenantRefundError(PaymentError, PermissionDeniedError):
    """
    Raised when a refund names a payment owned by another organisation.

    Always treated as a potential tenant-isolation violation and logged
    at WARNING before it is raised.
    """

    default_error_code: str = "CROSS_TENANT_REFUND"


class PaymentNotRefundableError(PaymentError, InvalidStateError):
    """Raised when refunding a payment that is not in paid status."""

    default_error_code: str = "PAYMENT_NOT_PAID"


class InvalidRefundAmountError(PaymentError, ValidationError):
    """
    Raised when the refund amount is non-positive or exceeds the payment.

    Example:
        if refund_amount <= 0:
            raise InvalidRefundAmountError(
                "Refund amount must be greater than 0",
                details={"refund_amount": str(refund_amount)},
            )
    """

    default_error_code: str = "INVALID_REFUND_AMOUNT"


class RefundExceedsRemainingError(InvalidRefundAmountError):
    """
    Raised when the refund amount exceeds what is left to refund.

    Attributes:
        remaining: Payment amount minus pending and completed refunds
        currency: Currency of the payment
    """

    default_error_code: str = "REFUND_EXCEEDS_REMAINING"

    def __init__(
        self,
        remaining: Decimal,
        currency: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.remaining = remaining
        self.currency = currency
        message = (
            f"Refund amount exceeds remaining refundable amount "
            f"({remaining:.2f} {currency})"
        )
        merged = {"remaining": f"{remaining:.2f}", "currency": currency}
        merged.update(details or {})
        super().__init__(message, error_code=error_code, details=merged)


class PaymentFilterError(PaymentError, ValidationError):
    """Raised when payment list filters cannot be parsed."""

    default_error_code: str = "INVALID_PAYMENT_FILTER"


class LedgerStoreError(PaymentError, StoreError):
    """
    Raised when a payment or refund query fails at the database.

    Always chained to the driver exception (``raise ... from exc``).
    """

    default_error_code: str = "LEDGER_STORE_ERROR"
