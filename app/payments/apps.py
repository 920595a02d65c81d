"""
Payments app configuration.

This app provides the payment and refund ledger:
- Payment records and their refunds
- Refund validation under a row lock
- Daily lodgement reconciliation
"""

from django.apps import AppConfig


class PaymentsConfig(AppConfig):
    """
    Configuration for the payments application.

    Builds the process-wide PaymentService once the app registry is ready.
    Views read it from ``apps.get_app_config("payments").payment_service``.
    """

    default_auto_field = "django.db.models.BigAutoField"
    name = "payments"
    verbose_name = "Payments"

    def ready(self):
        from payments.services import (
            LodgementReconciler,
            PaymentService,
            RefundValidator,
        )
        from payments.stores import PaymentStore, RefundLedger

        self.payment_service = PaymentService(
            payments=PaymentStore(),
            refunds=RefundLedger(),
            validator=RefundValidator(),
            reconciler=LodgementReconciler(),
        )
