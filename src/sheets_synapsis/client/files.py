"""Drive file operations mixin for SheetsClient."""
import logging
from typing import Any, Optional

from ..utils.constants import (
    DEFAULT_ORDER_BY,
    DEFAULT_SEARCH_LIMIT,
    SHEET_LIST_FIELDS,
    SPREADSHEET_MIME_TYPE,
)

logger = logging.getLogger(__name__)


def escape_drive_query(value: str) -> str:
    """Escape a literal for use inside a single-quoted Drive query string."""
    return value.replace('\\', '\\\\').replace("'", "\\'")


class DriveFilesMixin:
    """Mixin providing Drive-level spreadsheet file operations."""

    async def find_sheets(
        self,
        query: Optional[str] = None,
        max_results: int = DEFAULT_SEARCH_LIMIT,
        order_by: str = DEFAULT_ORDER_BY,
    ) -> list[dict[str, Any]]:
        """Search Drive for spreadsheets.

        Args:
            query: Optional substring the spreadsheet name must contain.
            max_results: Page size.
            order_by: One of name, createdTime, modifiedTime.

        Returns:
            List of spreadsheet metadata dicts.
        """
        q = f"mimeType='{SPREADSHEET_MIME_TYPE}' and trashed=false"
        if query:
            q += f" and name contains '{escape_drive_query(query)}'"

        service = await self.drive_service()
        response = await self._execute(
            service.files().list(
                q=q,
                pageSize=max_results,
                orderBy=order_by,
                fields=SHEET_LIST_FIELDS,
            ),
            "find sheets",
        )

        sheets = []
        for file in response.get('files', []):
            owners = file.get('owners') or []
            sheets.append({
                'id': file.get('id'),
                'name': file.get('name'),
                'url': file.get('webViewLink'),
                'createdTime': file.get('createdTime'),
                'modifiedTime': file.get('modifiedTime'),
                'owner': owners[0].get('displayName') if owners else None,
            })

        logger.info(f"Found {len(sheets)} sheets")
        return sheets

    async def delete_sheet(self, sheet_id: str) -> None:
        """Move a spreadsheet to the Drive trash.

        This is reversible from the Drive UI; permanent deletion is not offered.
        """
        sheet_id = self._require_id(sheet_id)
        service = await self.drive_service()
        await self._execute(
            service.files().update(fileId=sheet_id, body={'trashed': True}),
            "trash sheet",
            sheet_id,
        )
        logger.info(f"Trashed sheet {sheet_id}")
