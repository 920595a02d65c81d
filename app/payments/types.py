"""
Data types for payment ledger operations.

Dataclasses used for type-safe data transfer between the API layer, the
service and the stores.

Types:
    PaymentFilters: Optional criteria for listing an organisation's payments
    RefundRequest: An admin's request to refund part of a payment
    LodgementSummary: One bank-lodgement line (day, method, currency)
    RefundBalance: Refund position of a single payment

Usage:
    from payments.types import PaymentFilters, RefundRequest

    filters = PaymentFilters(payment_status=["paid"], search_term="smith")
    payments = service.get_payments_by_organisation(org_id, filters)

    refund = service.request_refund(
        RefundRequest(
            payment_id=payment.id,
            organisation_id=org_id,
            refund_amount=Decimal("25.00"),
            requested_by="admin-42",
        )
    )
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any

from payments.exceptions import InvalidRefundAmountError


@dataclass
class PaymentFilters:
    """
    Criteria for listing payments.

    Every field is optional. Criteria combine with AND; the values inside a
    list combine with OR. Empty lists and blank strings mean "no filter".

    Attributes:
        payment_status: Statuses to include
        payment_method: Method tags to include
        payment_type: Type tags to include
        start_date: Earliest settlement day (inclusive)
        end_date: Latest settlement day (inclusive)
        search_term: Substring matched against payer name, email and
            provider transaction reference
    """

    payment_status: list[str] = field(default_factory=list)
    payment_method: list[str] = field(default_factory=list)
    payment_type: list[str] = field(default_factory=list)
    start_date: date | None = None
    end_date: date | None = None
    search_term: str | None = None

    def as_filter_data(self) -> dict[str, Any]:
        """
        Render as FilterSet data, leaving out unset criteria.

        Returns:
            Dict suitable for ``PaymentFilterSet(data=...)``
        """
        data: dict[str, Any] = {}
        for name in ("payment_status", "payment_method", "payment_type"):
            values = [v for v in getattr(self, name) if v]
            if values:
                data[name] = values
        if self.start_date is not None:
            data["start_date"] = self.start_date.isoformat()
        if self.end_date is not None:
            data["end_date"] = self.end_date.isoformat()
        if self.search_term and self.search_term.strip():
            data["search_term"] = self.search_term.strip()
        return data


@dataclass
class RefundRequest:
    """
    An admin's request to refund part or all of a payment.

    Attributes:
        payment_id: Payment to refund
        organisation_id: Organisation the admin acts for
        refund_amount: Amount to refund
        requested_by: Identifier of the admin
        refund_reason: Optional free-text reason

    Note:
        The amount is coerced to Decimal here; values that do not parse
        as a number raise InvalidRefundAmountError. Range, precision and
        NaN checks belong to RefundValidator so that they run in a fixed
        order.
    """

    payment_id: uuid.UUID
    organisation_id: uuid.UUID
    refund_amount: Decimal
    requested_by: str
    refund_reason: str | None = None

    def __post_init__(self):
        if not isinstance(self.refund_amount, Decimal):
            try:
                self.refund_amount = Decimal(str(self.refund_amount))
            except InvalidOperation as exc:
                raise InvalidRefundAmountError(
                    "Refund amount must be a number",
                    details={"refund_amount": str(self.refund_amount)},
                ) from exc
        self.requested_by = str(self.requested_by)


@dataclass(frozen=True)
class LodgementSummary:
    """
    Paid payments settled on one day with one method and currency.

    Attributes:
        date: Calendar day of settlement
        payment_method: Method tag
        currency: ISO 4217 currency code
        total_amount: Sum of payment amounts
        transaction_count: Number of payments
    """

    date: date
    payment_method: str
    currency: str
    total_amount: Decimal
    transaction_count: int


@dataclass(frozen=True)
class RefundBalance:
    """Refund position of a payment."""

    payment_amount: Decimal
    outstanding: Decimal
    currency: str

    @property
    def remaining(self) -> Decimal:
        return self.payment_amount - self.outstanding
