"""
Tests for the DRF application exception handler.

These tests verify that:
- BaseApplicationError subclasses render as the error body with their status
- Server-side errors are logged at ERROR, client errors at INFO
- Other exceptions fall through to DRF's default handling
"""

import logging

from rest_framework import exceptions as drf_exceptions
from rest_framework import status

from core.exception_handler import application_exception_handler
from core.exceptions import NotFoundError, StoreError, ValidationError


class DummyView:
    pass


def context():
    return {"view": DummyView(), "request": None}


class TestApplicationExceptionHandler:
    def test_renders_application_error(self):
        error = NotFoundError(
            "Payment not found",
            error_code="PAYMENT_NOT_FOUND",
            details={"payment_id": "123"},
        )

        response = application_exception_handler(error, context())

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data == {
            "error": "Payment not found",
            "error_code": "PAYMENT_NOT_FOUND",
            "details": {"payment_id": "123"},
        }

    def test_client_error_logged_at_info(self, caplog):
        with caplog.at_level(logging.INFO, logger="core.exception_handler"):
            application_exception_handler(ValidationError("Bad"), context())

        record = caplog.records[-1]
        assert record.levelno == logging.INFO
        assert "ValidationError raised in DummyView" in record.getMessage()

    def test_store_error_logged_at_error(self, caplog):
        with caplog.at_level(logging.INFO, logger="core.exception_handler"):
            response = application_exception_handler(StoreError("Down"), context())

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert caplog.records[-1].levelno == logging.ERROR

    def test_drf_exceptions_use_default_handler(self):
        response = application_exception_handler(
            drf_exceptions.NotAuthenticated(), context()
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_unknown_exceptions_are_not_handled(self):
        """Non-API exceptions return None so DRF re-raises them."""
        assert application_exception_handler(RuntimeError("boom"), context()) is None
