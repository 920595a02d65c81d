"""
Base service layer patterns for business logic encapsulation.

This module provides BaseService, the common parent of service classes.

Service Layer Philosophy:
    Services encapsulate business logic separate from views and models.
    Views handle HTTP concerns, models handle data, services handle logic.

Error Handling:
    Services raise exceptions from core.exceptions (or app-specific
    subclasses) for every failure. Callers decide how to present them;
    DRF views rely on core.exception_handler.

Usage:
    from core.services import BaseService

    class PaymentService(BaseService):
        def __init__(self, payments: PaymentStore):
            self.payments = payments

        def get_payment_by_id(self, payment_id):
            return self.payments.get_by_id(payment_id)

    # Construct once, pass by reference
    service = PaymentService(payments=PaymentStore())

Related:
    - core.exceptions: Error hierarchy raised by services
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING

from django.db import transaction

if TYPE_CHECKING:
    from collections.abc import Generator


class BaseService:
    """
    Base class for service layer classes.

    Provides common utilities for services:
    - Logging setup per service
    - Database transaction management

    Design Notes:
        - Services receive their collaborators in __init__
        - Services hold no mutable state between calls
        - Raise exceptions for failures, never return error sentinels
    """

    @classmethod
    def get_logger(cls) -> logging.Logger:
        """
        Get logger for this service.

        Returns a logger named after the service class for
        easy filtering in logs.

        Example:
            class PaymentService(BaseService):
                def request_refund(self, request):
                    self.get_logger().info("Refund requested")
        """
        return logging.getLogger(f"{cls.__module__}.{cls.__name__}")

    @classmethod
    @contextmanager
    def atomic(cls) -> Generator[None, None, None]:
        """
        Execute operations in a database transaction.

        All database operations within this context manager are
        wrapped in a transaction. If any operation fails, all
        changes are rolled back.

        Example:
            with self.atomic():
                payment = self.payments.get_for_update(payment_id)
                self.refunds.create(refund)
                # If create fails, the row lock is released with the rollback

        Note:
            This is a thin wrapper around Django's transaction.atomic().
            Use it to make transaction boundaries explicit in service code.
        """
        with transaction.atomic():
            yield
