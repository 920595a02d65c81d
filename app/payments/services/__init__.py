"""
Payment ledger services.

This module provides:
- PaymentService: Facade used by views and scripts
- RefundValidator: Refund rules, free of database access
- LodgementReconciler: Daily lodgement aggregation

Usage:
    from payments.services import (
        LodgementReconciler,
        PaymentService,
        RefundValidator,
    )
    from payments.stores import PaymentStore, RefundLedger

    service = PaymentService(
        payments=PaymentStore(),
        refunds=RefundLedger(),
        validator=RefundValidator(),
        reconciler=LodgementReconciler(),
    )
"""

from payments.services.lodgement_service import LodgementReconciler
from payments.services.payment_service import PaymentService
from payments.services.refund_validator import RefundValidator

__all__ = [
    "LodgementReconciler",
    "PaymentService",
    "RefundValidator",
]
