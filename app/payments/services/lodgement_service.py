"""
Lodgement reconciliation.

Groups an organisation's paid, settled payments into the lines an
administrator matches against bank lodgements: one line per settlement
day, payment method and currency.

Usage:
    from payments.services.lodgement_service import LodgementReconciler

    lines = LodgementReconciler().summarise(org_id, date(2025, 1, 1), date(2025, 1, 31))
    for line in lines:
        print(line.date, line.payment_method, line.total_amount, line.currency)
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import TYPE_CHECKING

from django.db import DatabaseError
from django.db.models import Count, Sum
from django.db.models.functions import TruncDate

from payments.exceptions import LedgerStoreError
from payments.models import Payment
from payments.types import LodgementSummary

if TYPE_CHECKING:
    import uuid
    from datetime import date


logger = logging.getLogger(__name__)


class LodgementReconciler:
    """
    Aggregates paid payments into lodgement summaries.

    Ordering: date descending, then payment method, then currency.
    Payments without a settlement date are never lodged.
    """

    def summarise(
        self,
        organisation_id: uuid.UUID,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> list[LodgementSummary]:
        """
        Summarise paid payments settled in [start_date, end_date].

        Args:
            organisation_id: Tenant to summarise
            start_date: First settlement day (inclusive), optional
            end_date: Last settlement day (inclusive), optional

        Returns:
            List of LodgementSummary; empty when nothing was settled

        Raises:
            LedgerStoreError: If the query fails
        """
        try:
            rows = (
                Payment.objects.for_organisation(organisation_id)
                .paid()
                .filter(settlement_date__isnull=False)
                .settled_between(start_date, end_date)
                .annotate(date=TruncDate("settlement_date"))
                .values("date", "payment_method", "currency")
                .annotate(
                    total_amount=Sum("amount"),
                    transaction_count=Count("id"),
                )
                .order_by("-date", "payment_method", "currency")
            )
            return [
                LodgementSummary(
                    date=row["date"],
                    payment_method=row["payment_method"],
                    currency=row["currency"],
                    total_amount=row["total_amount"].quantize(Decimal("0.01")),
                    transaction_count=row["transaction_count"],
                )
                for row in rows
            ]
        except DatabaseError as exc:
            logger.exception(
                "Failed to summarise lodgements",
                extra={"organisation_id": str(organisation_id)},
            )
            raise LedgerStoreError(
                "Failed to summarise lodgements",
                details={"organisation_id": str(organisation_id)},
            ) from exc
