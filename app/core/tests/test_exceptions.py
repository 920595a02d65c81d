"""
Tests for the core exception hierarchy.

These tests verify that:
- Error codes default per class and can be overridden
- to_dict() produces the API error body
- Each error kind carries its HTTP status
"""

import pytest

from core.exceptions import (
    BaseApplicationError,
    InvalidStateError,
    NotFoundError,
    PermissionDeniedError,
    StoreError,
    ValidationError,
)


class TestBaseApplicationError:
    def test_default_error_code(self):
        error = BaseApplicationError("Something failed")

        assert error.error_code == "APPLICATION_ERROR"
        assert error.details == {}
        assert error.message == "Something failed"

    def test_custom_error_code_and_details(self):
        error = NotFoundError(
            "Payment not found",
            error_code="PAYMENT_NOT_FOUND",
            details={"payment_id": "abc"},
        )

        assert error.to_dict() == {
            "error": "Payment not found",
            "error_code": "PAYMENT_NOT_FOUND",
            "details": {"payment_id": "abc"},
        }

    def test_to_dict_omits_empty_details(self):
        """details key is only present when there are details."""
        assert "details" not in ValidationError("Bad input").to_dict()

    def test_str_includes_error_code(self):
        assert str(ValidationError("Bad input")) == "[VALIDATION_ERROR] Bad input"

    def test_repr(self):
        error = StoreError("Down")

        assert repr(error) == (
            "StoreError(message='Down', error_code='STORE_ERROR', details={})"
        )


@pytest.mark.parametrize(
    "error_class,status_code",
    [
        (ValidationError, 400),
        (InvalidStateError, 400),
        (NotFoundError, 404),
        (PermissionDeniedError, 403),
        (StoreError, 500),
    ],
)
def test_status_code_per_kind(error_class, status_code):
    """Each error kind maps to one HTTP status."""
    assert error_class("x").status_code == status_code


def test_all_kinds_are_application_errors():
    for error_class in (
        ValidationError,
        InvalidStateError,
        NotFoundError,
        PermissionDeniedError,
        StoreError,
    ):
        assert issubclass(error_class, BaseApplicationError)
