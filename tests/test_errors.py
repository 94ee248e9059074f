"""Unit tests for the error hierarchy and HTTP error mapping."""
from unittest.mock import MagicMock

import pytest

from sheets_synapsis.utils.errors import (
    AuthenticationError,
    AuthorizationDeniedError,
    CallbackTimeoutError,
    CallbackValidationError,
    NotFoundError,
    PermissionDeniedError,
    RateLimitError,
    SheetsError,
    TokenRefreshError,
    ValidationError,
    format_error,
    handle_http_error,
)


def _error_with_status(status):
    error = MagicMock()
    error.resp.status = status
    return error


class TestHandleHttpError:
    """Tests for googleapiclient HttpError mapping."""

    @pytest.mark.parametrize("status,expected", [
        (401, AuthenticationError),
        (403, PermissionDeniedError),
        (404, NotFoundError),
        (429, RateLimitError),
        (400, ValidationError),
    ])
    def test_status_mapping(self, status, expected):
        assert isinstance(handle_http_error(_error_with_status(status), "s1"), expected)

    def test_server_error_is_generic(self):
        error = handle_http_error(_error_with_status(500))
        assert type(error) is SheetsError

    def test_not_found_names_sheet(self):
        error = handle_http_error(_error_with_status(404), "abc")
        assert error.message == "Spreadsheet with ID 'abc' not found"

    def test_error_without_response(self):
        error = handle_http_error(ValueError("weird"))
        assert "weird" in error.message


class TestErrorHierarchy:
    """Tests for auth-flow error relationships."""

    def test_auth_flow_errors_are_authentication_errors(self):
        assert issubclass(TokenRefreshError, AuthenticationError)
        assert issubclass(CallbackTimeoutError, AuthenticationError)
        assert issubclass(AuthorizationDeniedError, AuthenticationError)

    def test_callback_validation_is_validation_error(self):
        error = CallbackValidationError("CSRF validation failed: state mismatch", field="state")
        assert isinstance(error, ValidationError)
        assert error.field == "state"

    def test_sheet_id_in_message(self):
        assert str(SheetsError("Denied", "abc")) == "Denied (sheet: abc)"


class TestFormatError:
    """Tests for the tool-facing error string."""

    def test_sheets_error(self):
        assert format_error("Clear range", RateLimitError("Slow down", "s1")) == (
            "Clear range failed: Slow down"
        )

    def test_plain_exception(self):
        assert format_error("Clear range", RuntimeError("x")) == "Clear range failed: x"
