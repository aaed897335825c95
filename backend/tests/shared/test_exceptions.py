"""Tests for shared/exceptions.py."""

import pytest

from shared.exceptions import (
    GavelError,
    NotFoundError,
    ValidationError,
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    ExternalServiceError,
)


class TestGavelError:
    def test_gavel_error_message(self):
        """GavelError should store message."""
        error = GavelError("Test error")
        assert error.message == "Test error"
        assert str(error) == "Test error"

    def test_gavel_error_default_code(self):
        """GavelError should default code to class name."""
        error = GavelError("Test error")
        assert error.code == "GavelError"

    def test_gavel_error_custom_code(self):
        """GavelError should accept custom code."""
        error = GavelError("Test error", code="CUSTOM_ERROR")
        assert error.code == "CUSTOM_ERROR"

    def test_gavel_error_default_details(self):
        """GavelError should default details to empty dict."""
        assert GavelError("Test error").details == {}

    def test_gavel_error_to_dict(self):
        """GavelError should convert to dict."""
        error = GavelError("Test error", code="TEST_ERROR", details={"key": "value"})
        result = error.to_dict()

        assert result == {
            "error": "TEST_ERROR",
            "message": "Test error",
            "details": {"key": "value"},
        }


class TestErrorTaxonomy:
    @pytest.mark.parametrize(
        "error_class",
        [NotFoundError, ValidationError, AuthenticationError, AuthorizationError, ConflictError],
    )
    def test_subclasses_gavel_error(self, error_class):
        """Every category should be catchable as GavelError."""
        error = error_class("boom")
        assert isinstance(error, GavelError)
        assert error.code == error_class.__name__

    def test_conflict_is_not_validation(self):
        """Conflicts and validation failures are distinct categories."""
        assert not issubclass(ConflictError, ValidationError)
        assert not issubclass(ValidationError, ConflictError)


class TestExternalServiceError:
    def test_stores_service(self):
        """ExternalServiceError should record the failing service."""
        error = ExternalServiceError("Supabase down", service="supabase")
        assert error.service == "supabase"
        assert error.details["service"] == "supabase"

    def test_merges_details(self):
        """Service should be added alongside caller details."""
        error = ExternalServiceError("Timeout", service="supabase", details={"timeout": 30})
        assert error.details == {"timeout": 30, "service": "supabase"}
