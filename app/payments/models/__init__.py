"""
Payment domain models.

This module contains the ledger's persisted models:
- Payment: Money collected by an organisation
- Refund: Money returned against a payment
"""

from payments.models.payment import Payment
from payments.models.refund import Refund

__all__ = [
    "Payment",
    "Refund",
]
