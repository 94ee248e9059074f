"""Base client with authenticated Google API service access."""
import asyncio
import logging
from typing import Any, Optional

from googleapiclient.errors import HttpError

from ..auth.google_auth import GoogleAuthManager
from ..utils.errors import ValidationError, handle_http_error

logger = logging.getLogger(__name__)


class SheetsClientBase:
    """Base class with Google API services."""

    def __init__(self, auth_manager: GoogleAuthManager) -> None:
        """Initialize the client around an auth manager.

        No network or browser activity happens until the first API call.
        """
        self.auth = auth_manager

    async def sheets_service(self) -> Any:
        """Sheets v4 service, authenticating first if needed."""
        return await self.auth.get_sheets_service()

    async def drive_service(self) -> Any:
        """Drive v3 service, authenticating first if needed."""
        return await self.auth.get_drive_service()

    async def _execute(
        self, request: Any, action: str, sheet_id: Optional[str] = None
    ) -> dict[str, Any]:
        """Run a prepared API request off the event loop.

        Args:
            request: A googleapiclient HttpRequest.
            action: Description used in logs.
            sheet_id: Spreadsheet ID for error context.

        Returns:
            The decoded JSON response.

        Raises:
            SheetsError: A subclass matching the HTTP failure.
        """
        try:
            return await asyncio.to_thread(request.execute)
        except HttpError as e:
            logger.error(f"Failed to {action}: HTTP {e.resp.status}")
            raise handle_http_error(e, sheet_id) from e

    @staticmethod
    def _require_id(sheet_id: str) -> str:
        if not sheet_id or not sheet_id.strip():
            raise ValidationError("Sheet ID is required", field="sheet_id")
        return sheet_id.strip()
