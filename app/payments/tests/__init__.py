"""
Tests for payments app.

This package contains test modules for:
- test_models.py: Payment and Refund model constraints
- test_types.py: PaymentFilters and RefundRequest value objects
- test_serializers.py: Request and query parsing
- test_refund_validator.py: Refund rules without the database
- test_payment_service.py: Refund flow, invariant and error handling
- test_stores.py: Store error wrapping
- test_filters.py: Payment list filters
- test_lodgement_service.py: Lodgement aggregation
- test_views.py: API endpoint tests

Usage:
    pytest app/payments/tests/
    pytest app/payments/tests/test_payment_service.py
"""
