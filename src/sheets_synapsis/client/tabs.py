"""Tab (worksheet) operations mixin for SheetsClient."""
import logging
from typing import Any, Optional

logger = logging.getLogger(__name__)


class TabsMixin:
    """Mixin providing tab-level batchUpdate operations."""

    async def _batch_requests(
        self, sheet_id: str, requests: list[dict[str, Any]], action: str
    ) -> dict[str, Any]:
        sheet_id = self._require_id(sheet_id)
        service = await self.sheets_service()
        return await self._execute(
            service.spreadsheets().batchUpdate(
                spreadsheetId=sheet_id, body={'requests': requests}
            ),
            action,
            sheet_id,
        )

    async def add_sheet_tab(
        self,
        sheet_id: str,
        title: str,
        row_count: Optional[int] = None,
        column_count: Optional[int] = None,
    ) -> dict[str, Any]:
        """Add a new tab to an existing spreadsheet.

        Args:
            sheet_id: The spreadsheet ID.
            title: Name for the new tab.
            row_count: Optional grid height.
            column_count: Optional grid width.

        Returns:
            Dict with the new tab's numeric sheetId and title.
        """
        properties: dict[str, Any] = {'title': title}
        grid = {}
        if row_count:
            grid['rowCount'] = row_count
        if column_count:
            grid['columnCount'] = column_count
        if grid:
            properties['gridProperties'] = grid

        result = await self._batch_requests(
            sheet_id, [{'addSheet': {'properties': properties}}], "add sheet tab"
        )
        replies = result.get('replies') or [{}]
        added = replies[0].get('addSheet', {}).get('properties', {})

        logger.info(f"Added sheet tab '{title}' to {sheet_id}")
        return {
            'sheetId': added.get('sheetId', 0),
            'title': added.get('title', title),
        }

    async def delete_sheet_tab(self, sheet_id: str, tab_id: int) -> None:
        """Delete a tab by its numeric ID."""
        await self._batch_requests(
            sheet_id, [{'deleteSheet': {'sheetId': tab_id}}], "delete sheet tab"
        )
        logger.info(f"Deleted sheet tab {tab_id} from {sheet_id}")

    async def rename_sheet_tab(self, sheet_id: str, tab_id: int, new_title: str) -> None:
        """Rename a tab by its numeric ID."""
        await self._batch_requests(
            sheet_id,
            [{
                'updateSheetProperties': {
                    'properties': {'sheetId': tab_id, 'title': new_title},
                    'fields': 'title',
                }
            }],
            "rename sheet tab",
        )
        logger.info(f"Renamed sheet tab {tab_id} in {sheet_id}")
