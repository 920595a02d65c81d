"""
Payment admin configuration.

Registers Payment and Refund with the Django admin. Amounts are read-only
once recorded, and refunds cannot be added here: every refund goes through
PaymentService.request_refund so the refundable balance is always checked.
"""

from django.contrib import admin

from payments.models import Payment, Refund

__all__ = [
    "PaymentAdmin",
    "RefundAdmin",
]


class RefundInline(admin.TabularInline):
    model = Refund
    extra = 0
    can_delete = False
    fields = ["id", "refund_amount", "refund_status", "requested_by", "requested_at"]
    readonly_fields = fields
    show_change_link = True

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    """
    Admin configuration for Payment.

    Payments recorded upstream can be inspected and annotated, but their
    amount, currency and tenant cannot change after creation.
    """

    list_display = [
        "id",
        "organisation_id",
        "payer",
        "payment_type",
        "amount",
        "currency",
        "payment_method",
        "payment_status",
        "settlement_date",
    ]
    list_filter = ["payment_status", "payment_method", "currency", "payment_type"]
    search_fields = [
        "id",
        "organisation_id",
        "provider_transaction_id",
        "payer__email",
        "payer__first_name",
        "payer__last_name",
    ]
    readonly_fields = ["id", "created_at", "updated_at"]
    raw_id_fields = ["payer"]
    date_hierarchy = "created_at"
    ordering = ["-created_at"]
    inlines = [RefundInline]

    fieldsets = (
        (
            None,
            {
                "fields": ("id", "organisation_id", "payer", "payment_status"),
            },
        ),
        (
            "Amount",
            {
                "fields": ("amount", "currency", "payment_method"),
            },
        ),
        (
            "Context",
            {
                "fields": ("payment_type", "context_id"),
            },
        ),
        (
            "Provider",
            {
                "fields": (
                    "payment_provider",
                    "provider_transaction_id",
                    "settlement_date",
                ),
            },
        ),
        (
            "Metadata",
            {
                "fields": ("metadata", "created_at", "updated_at"),
                "classes": ("collapse",),
            },
        ),
    )

    def get_readonly_fields(self, request, obj=None):
        readonly = list(super().get_readonly_fields(request, obj))
        if obj is not None:
            readonly += ["organisation_id", "amount", "currency"]
        return readonly

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(Refund)
class RefundAdmin(admin.ModelAdmin):
    """
    Admin configuration for Refund.

    Provides visibility into refund history. Only the provider fields
    written by the settlement flow are editable.
    """

    list_display = [
        "id",
        "payment",
        "organisation_id",
        "refund_amount",
        "refund_status",
        "requested_by",
        "requested_at",
    ]
    list_filter = ["refund_status", "refund_provider", "requested_at"]
    search_fields = [
        "id",
        "payment__id",
        "provider_refund_id",
        "requested_by",
        "refund_reason",
    ]
    readonly_fields = [
        "id",
        "payment",
        "organisation_id",
        "refund_amount",
        "refund_status",
        "requested_by",
        "requested_at",
        "created_at",
        "updated_at",
    ]
    date_hierarchy = "requested_at"
    ordering = ["-requested_at"]

    fieldsets = (
        (
            None,
            {
                "fields": ("id", "payment", "organisation_id", "refund_status"),
            },
        ),
        (
            "Refund Details",
            {
                "fields": ("refund_amount", "refund_reason", "requested_by", "requested_at"),
            },
        ),
        (
            "Provider",
            {
                "fields": ("refund_provider", "provider_refund_id", "refund_date"),
            },
        ),
        (
            "Metadata",
            {
                "fields": ("metadata", "created_at", "updated_at"),
                "classes": ("collapse",),
            },
        ),
    )

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
