"""Custom exceptions for the Sheets Synapsis MCP server.

This module provides structured error handling with specific exception types
for different failure scenarios. All exceptions inherit from SheetsError.
"""
from typing import Optional, Any


class SheetsError(Exception):
    """Base exception for all sheets-synapsis errors.

    Attributes:
        message: Human-readable error description.
        sheet_id: Optional spreadsheet ID related to the error.
    """

    def __init__(self, message: str, sheet_id: Optional[str] = None) -> None:
        self.message = message
        self.sheet_id = sheet_id
        super().__init__(self.format_message())

    def format_message(self) -> str:
        """Format the error message, optionally including sheet ID."""
        if self.sheet_id:
            return f"{self.message} (sheet: {self.sheet_id})"
        return self.message


class AuthenticationError(SheetsError):
    """Raised when no usable credentials exist or an auth flow failed."""
    pass


class ValidationError(SheetsError):
    """Raised when a request or callback is malformed."""

    def __init__(
        self, message: str, field: Optional[str] = None, sheet_id: Optional[str] = None
    ) -> None:
        self.field = field
        super().__init__(message, sheet_id)


class NotFoundError(SheetsError):
    """Raised when a spreadsheet or stored token doesn't exist."""

    def __init__(self, resource: str, resource_id: Optional[str] = None) -> None:
        self.resource = resource
        if resource_id:
            message = f"{resource} with ID '{resource_id}' not found"
        else:
            message = f"{resource} not found"
        super().__init__(message)


class PermissionDeniedError(SheetsError):
    """Raised when access to a spreadsheet is denied."""
    pass


class RateLimitError(SheetsError):
    """Raised when API rate limit or quota is exceeded."""
    pass


class ConfigurationError(SheetsError):
    """Raised when required configuration is missing or invalid."""
    pass


class TokenExchangeError(AuthenticationError):
    """Raised when the provider rejects an authorization code exchange.

    Attributes:
        status_code: HTTP status returned by the token endpoint, if any.
    """

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class TokenRefreshError(AuthenticationError):
    """Raised when a refresh token can't be used to mint a new access token."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class TokenStoreError(SheetsError):
    """Raised when the token file can't be written."""
    pass


class CallbackServerError(AuthenticationError):
    """Raised when the local OAuth callback listener can't run."""
    pass


class CallbackTimeoutError(CallbackServerError):
    """Raised when no OAuth callback arrives within the configured timeout."""
    pass


class CallbackValidationError(ValidationError):
    """Raised when an OAuth callback is missing its code or fails the state check."""
    pass


class AuthorizationDeniedError(AuthenticationError):
    """Raised when the user or provider denies the authorization request.

    Attributes:
        reason: The ``error`` value returned on the redirect.
    """

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"authorization denied: {reason}")


def handle_http_error(error: Any, sheet_id: Optional[str] = None) -> SheetsError:
    """Convert googleapiclient HttpError to a specific exception.

    Args:
        error: The HttpError from googleapiclient.
        sheet_id: Optional spreadsheet ID for context.

    Returns:
        An appropriate SheetsError subclass.
    """
    try:
        status = error.resp.status
    except AttributeError:
        return SheetsError(f"API error: {str(error)}", sheet_id)

    if status == 401:
        return AuthenticationError("Invalid or expired credentials", sheet_id)
    elif status == 403:
        return PermissionDeniedError(
            "Access denied. Check sharing settings or request access.", sheet_id
        )
    elif status == 404:
        return NotFoundError("Spreadsheet", sheet_id)
    elif status == 429:
        return RateLimitError(
            "API quota exceeded. Please wait a moment and try again.", sheet_id
        )
    elif 400 <= status < 500:
        return ValidationError("Invalid request to Google API", sheet_id=sheet_id)
    else:
        return SheetsError(
            "An unexpected error occurred while communicating with Google APIs",
            sheet_id,
        )


# Standard error message format helper
def format_error(action: str, error: Exception) -> str:
    """Format an error message consistently.

    Args:
        action: The action that failed (e.g., "Find sheets", "Append values").
        error: The exception that occurred.

    Returns:
        Formatted error string.
    """
    if isinstance(error, SheetsError):
        return f"{action} failed: {error.message}"
    return f"{action} failed: {str(error)}"
