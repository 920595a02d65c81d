"""
Model mixins providing reusable functionality for Django models.

This module contains abstract mixin classes that can be combined with
BaseModel to add specific functionality. These are generic infrastructure
classes with no domain-specific logic.

Available Mixins:
    UUIDPrimaryKeyMixin: Use UUID as primary key
    MetadataMixin: Opaque JSON metadata storage

Usage:
    from core.models import BaseModel
    from core.model_mixins import MetadataMixin, UUIDPrimaryKeyMixin

    class Payment(UUIDPrimaryKeyMixin, MetadataMixin, BaseModel):
        amount = models.DecimalField(max_digits=12, decimal_places=2)

Note:
    - Always list mixins before BaseModel in inheritance
    - Mixins are abstract and don't create database tables
"""

from __future__ import annotations

import uuid

from django.db import models


class UUIDPrimaryKeyMixin(models.Model):
    """
    Use UUID as primary key instead of auto-increment integer.

    Benefits:
        - Non-guessable IDs
        - Safe for distributed systems (no ID collisions)
        - Can be generated client-side before database insert
        - URLs don't reveal record count or order

    Fields:
        id: UUIDField as primary key (auto-generated)

    Usage:
        payment = Payment.objects.create(...)
        print(payment.id)  # UUID like: 550e8400-e29b-41d4-a716-446655440000
    """

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
        help_text="Unique identifier for this record",
    )

    class Meta:
        abstract = True


class MetadataMixin(models.Model):
    """
    Opaque JSON metadata storage.

    Provides a JSONField for arbitrary key-value data written by upstream
    systems (payment providers, import jobs). Domain code stores and returns
    it unchanged and never branches on its contents.

    Fields:
        metadata: JSONField, defaults to an empty dict
    """

    metadata = models.JSONField(
        default=dict,
        blank=True,
        help_text="Opaque key-value metadata, never interpreted by the ledger",
    )

    class Meta:
        abstract = True
