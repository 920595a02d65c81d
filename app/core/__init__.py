"""
Core Application - Infrastructure & Base Classes

Generic building blocks shared by the domain apps. Nothing here knows
about payments or refunds.

Models (import from core.models):
    - BaseModel: Abstract model with timestamps (created_at, updated_at)

Model Mixins (import from core.model_mixins):
    - UUIDPrimaryKeyMixin: UUID as primary key
    - MetadataMixin: Opaque JSON metadata storage

Services (import from core.services):
    - BaseService: Base class for service layer

Exceptions (import from core.exceptions):
    - BaseApplicationError: Base exception with error codes
    - ValidationError: Input validation failures
    - InvalidStateError: Operation not allowed in the current state
    - NotFoundError: Resource not found
    - PermissionDeniedError: Authorization and tenancy failures
    - StoreError: Database failures

API (import from their modules):
    - core.exception_handler.application_exception_handler: DRF handler
    - core.views.health_check: Load balancer probe

Note:
    Django models and model mixins are NOT imported here to avoid
    AppRegistryNotReady errors. Import them directly from their modules.
"""

# Services (no Django model dependencies)
from .services import BaseService

# Exceptions (no Django dependencies)
from .exceptions import (
    BaseApplicationError,
    InvalidStateError,
    NotFoundError,
    PermissionDeniedError,
    StoreError,
    ValidationError,
)

__all__ = [
    # Services
    "BaseService",
    # Exceptions
    "BaseApplicationError",
    "ValidationError",
    "InvalidStateError",
    "NotFoundError",
    "PermissionDeniedError",
    "StoreError",
]
