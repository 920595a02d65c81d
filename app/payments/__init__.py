"""
Payments app: the payment and refund ledger.

This app handles:
- Payment records per organisation, with filtered listing
- Refund requests, validated so refunds never exceed the payment
- Lodgement summaries of paid payments per day, method and currency

Usage:
    from django.apps import apps

    service = apps.get_app_config("payments").payment_service

    payments = service.get_payments_by_organisation(org_id, PaymentFilters(payment_status=["paid"]))
    refund = service.request_refund(RefundRequest(...))
    lodgements = service.get_lodgements_by_organisation(org_id, start, end)
"""
