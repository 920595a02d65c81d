"""
Filter set for listing an organisation's payments.

Builds the payment list query from optional criteria. Criteria combine
with AND, values inside a multi-valued criterion combine with OR. The
base queryset is always scoped to one organisation, so no combination of
criteria can reach another tenant's rows.

Usage:
    from payments.filters import PaymentFilterSet

    queryset = PaymentFilterSet.for_organisation(
        org_id,
        {"payment_status": ["paid"], "start_date": "2025-01-01"},
    )
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import django_filters as filters
from django import forms
from django.db.models import Q

from payments.choices import PaymentStatus
from payments.exceptions import PaymentFilterError
from payments.models import Payment

if TYPE_CHECKING:
    import uuid

    from payments.managers import PaymentQuerySet


logger = logging.getLogger(__name__)


class TagChoiceField(forms.MultipleChoiceField):
    """Multiple-value field that accepts any tag."""

    def valid_value(self, value):
        return True


class TagFilter(filters.MultipleChoiceFilter):
    """OR-match against an open set of tags (payment methods, types)."""

    field_class = TagChoiceField


class PaymentFilterSet(filters.FilterSet):
    payment_status = filters.MultipleChoiceFilter(
        choices=PaymentStatus.choices,
        distinct=False,
    )
    payment_method = TagFilter(distinct=False)
    payment_type = TagFilter(distinct=False)
    start_date = filters.DateFilter(
        field_name="settlement_date", lookup_expr="date__gte"
    )
    end_date = filters.DateFilter(
        field_name="settlement_date", lookup_expr="date__lte"
    )
    search_term = filters.CharFilter(method="filter_search_term")

    class Meta:
        model = Payment
        fields = [
            "payment_status",
            "payment_method",
            "payment_type",
            "start_date",
            "end_date",
            "search_term",
        ]

    def filter_search_term(self, queryset, name, value):
        """Case-insensitive substring match on payer and provider reference."""
        term = value.strip()
        if not term:
            return queryset
        return queryset.filter(
            Q(payer_name__icontains=term)
            | Q(payer__first_name__icontains=term)
            | Q(payer__last_name__icontains=term)
            | Q(payer__email__icontains=term)
            | Q(provider_transaction_id__icontains=term)
        )

    @classmethod
    def for_organisation(
        cls,
        organisation_id: uuid.UUID,
        data: dict[str, Any] | None = None,
    ) -> PaymentQuerySet:
        """
        Build the filtered, ordered payment queryset for one organisation.

        Args:
            organisation_id: Tenant whose payments are listed
            data: Filter criteria (see PaymentFilters.as_filter_data)

        Returns:
            Lazy queryset annotated with payer details, ordered by
            settlement date (newest first, unsettled last) then created_at

        Raises:
            PaymentFilterError: If any criterion fails validation
        """
        queryset = Payment.objects.for_organisation(
            organisation_id
        ).with_payer_details()
        filterset = cls(data=data or {}, queryset=queryset)
        if not filterset.is_valid():
            errors = {
                field: list(messages) for field, messages in filterset.errors.items()
            }
            logger.info(
                "Rejected payment filters",
                extra={"organisation_id": str(organisation_id), "errors": errors},
            )
            raise PaymentFilterError("Invalid payment filters", details=errors)
        return filterset.qs.newest_settled_first()
