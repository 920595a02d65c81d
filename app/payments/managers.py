"""
QuerySets for payment and refund records.

Chainable query building blocks shared by the stores, the filter set and
the lodgement reconciler. No business rules live here.

Usage:
    from payments.models import Payment, Refund

    Payment.objects.for_organisation(org_id).paid().settled_between(start, end)
    Payment.objects.for_organisation(org_id).with_payer_details()

    Refund.objects.filter(payment_id=payment_id).outstanding_total()
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

from django.db import models
from django.db.models import F, Sum, Value
from django.db.models.functions import Coalesce, Concat, Trim

from payments.choices import OUTSTANDING_REFUND_STATUSES, PaymentStatus

if TYPE_CHECKING:
    import uuid
    from datetime import date


class PaymentQuerySet(models.QuerySet):
    """
    QuerySet with tenant scoping and settlement-date helpers.

    Methods:
        for_organisation(): Restrict to one organisation
        paid(): Only payments in PAID status
        settled_between(): Inclusive calendar-day bounds on settlement_date
        with_payer_details(): Annotate payer_name and payer_email
        newest_settled_first(): Settlement date desc (nulls last), then created_at desc
    """

    def for_organisation(self, organisation_id: uuid.UUID) -> PaymentQuerySet:
        return self.filter(organisation_id=organisation_id)

    def paid(self) -> PaymentQuerySet:
        return self.filter(payment_status=PaymentStatus.PAID)

    def settled_between(
        self,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> PaymentQuerySet:
        """
        Filter by the calendar day of settlement_date, both bounds inclusive.

        Either bound may be omitted. Unsettled payments never match a bound.
        """
        qs = self
        if start_date is not None:
            qs = qs.filter(settlement_date__date__gte=start_date)
        if end_date is not None:
            qs = qs.filter(settlement_date__date__lte=end_date)
        return qs

    def with_payer_details(self) -> PaymentQuerySet:
        """Annotate each row with payer_name ("first last") and payer_email."""
        return self.select_related("payer").annotate(
            payer_name=Trim(
                Concat(
                    Coalesce(F("payer__first_name"), Value("")),
                    Value(" "),
                    Coalesce(F("payer__last_name"), Value("")),
                    output_field=models.CharField(),
                )
            ),
            payer_email=F("payer__email"),
        )

    def newest_settled_first(self) -> PaymentQuerySet:
        return self.order_by(
            F("settlement_date").desc(nulls_last=True),
            "-created_at",
        )


class RefundQuerySet(models.QuerySet):
    """
    QuerySet for refund balance calculations.

    Methods:
        outstanding(): Refunds that consume the refundable balance
        outstanding_total(): Decimal sum of outstanding refund amounts
    """

    def outstanding(self) -> RefundQuerySet:
        return self.filter(refund_status__in=OUTSTANDING_REFUND_STATUSES)

    def outstanding_total(self) -> Decimal:
        """
        Sum refund_amount over outstanding refunds.

        Returns:
            Decimal total, Decimal("0.00") when there are none
        """
        total = self.outstanding().aggregate(total=Sum("refund_amount"))["total"]
        if total is None:
            return Decimal("0.00")
        return total.quantize(Decimal("0.01"))
