"""
Base exception classes for application-wide error handling.

This module provides a standardized exception hierarchy that enables:
- Consistent error responses across the application
- Machine-readable error codes for client handling
- A single HTTP status per error kind

Exception Hierarchy:
    BaseApplicationError (base)
    ├── ValidationError - Input validation failures (400)
    ├── InvalidStateError - Operation not allowed in the current state (400)
    ├── NotFoundError - Resource not found (404)
    ├── PermissionDeniedError - Authorization and tenancy failures (403)
    └── StoreError - Database unreachable or query failed (500)

Usage:
    from core.exceptions import ValidationError, NotFoundError

    # Raise with message only
    raise ValidationError("Invalid amount")

    # Raise with error code and details
    raise NotFoundError(
        "Payment not found",
        error_code="PAYMENT_NOT_FOUND",
        details={"payment_id": str(payment_id)},
    )

    # Convert to dict for API response
    try:
        ...
    except BaseApplicationError as e:
        return Response(e.to_dict(), status=e.status_code)

Note:
    These exceptions are for domain/business logic errors.
    DRF handles API-layer exceptions (serialization, authentication, etc.).
    core.exception_handler renders these for DRF views.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Any


class BaseApplicationError(Exception):
    """
    Base exception for all application-specific errors.

    Provides a consistent interface for error handling across the application.
    All custom exceptions should inherit from this class.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable code for client-side handling
        details: Additional error context (field errors, metadata, etc.)
        status_code: HTTP status used when the error reaches an API client

    Example:
        try:
            payment = service.get_payment_by_id(payment_id)
        except NotFoundError as e:
            logger.warning(f"Payment not found: {e.error_code}")
            return Response(e.to_dict(), status=e.status_code)
    """

    default_error_code: str = "APPLICATION_ERROR"
    status_code: int = 400

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        """
        Initialize the exception.

        Args:
            message: Human-readable error description
            error_code: Machine-readable error code (defaults to class default)
            details: Additional error context
        """
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for API response.

        Returns:
            Dict with error, error_code, and details keys

        Example:
            {
                "error": "Payment not found",
                "error_code": "PAYMENT_NOT_FOUND",
                "details": {"payment_id": "..."}
            }
        """
        result: dict[str, Any] = {
            "error": self.message,
            "error_code": self.error_code,
        }
        if self.details:
            result["details"] = self.details
        return result

    def __str__(self) -> str:
        """Return string representation with error code."""
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code!r}, "
            f"details={self.details!r})"
        )


class ValidationError(BaseApplicationError):
    """
    Raised when input validation fails.

    Use for:
    - Invalid amounts or identifiers
    - Business rule violations on caller-supplied values
    - Malformed filter criteria

    Example:
        raise ValidationError(
            "Refund amount must be greater than 0",
            error_code="INVALID_REFUND_AMOUNT",
            details={"refund_amount": "0.00"},
        )

    Note:
        For DRF serializer validation, use DRF's built-in validation.
        Use this for service-layer validation logic.
    """

    default_error_code: str = "VALIDATION_ERROR"


class InvalidStateError(BaseApplicationError):
    """
    Raised when an operation is not allowed in the resource's current state.

    The request itself is well formed; the target is simply not in a state
    that accepts it (e.g. refunding a payment that was never paid).

    Example:
        if payment.payment_status != PaymentStatus.PAID:
            raise InvalidStateError(
                f"Cannot refund a payment in {payment.payment_status} status",
                details={"current_status": payment.payment_status},
            )
    """

    default_error_code: str = "INVALID_STATE"


class NotFoundError(BaseApplicationError):
    """
    Raised when a requested resource is not found.

    Example:
        payment = Payment.objects.filter(id=payment_id).first()
        if not payment:
            raise NotFoundError(
                f"Payment {payment_id} not found",
                error_code="PAYMENT_NOT_FOUND",
                details={"payment_id": str(payment_id)}
            )

    Note:
        Consider returning None or empty results for list queries.
        Use NotFoundError for single-resource lookups where existence is expected.
    """

    default_error_code: str = "NOT_FOUND"
    status_code: int = 404


class PermissionDeniedError(BaseApplicationError):
    """
    Raised when the caller may not act on a resource.

    Use for:
    - Cross-tenant access (resource owned by another organisation)
    - Role-based access control violations

    Note:
        For authentication failures (missing/invalid token), use DRF's
        AuthenticationFailed. Use this for authorization failures.
    """

    default_error_code: str = "PERMISSION_DENIED"
    status_code: int = 403


class StoreError(BaseApplicationError):
    """
    Raised when the underlying data store is unreachable or a query fails.

    Wraps database driver errors so callers see one error kind. The
    original exception is always chained (``raise ... from exc``).

    Note:
        Never retried here; retry policy belongs to the caller.
    """

    default_error_code: str = "STORE_ERROR"
    status_code: int = 500
