"""Spreadsheet value and metadata operations mixin for SheetsClient."""
import logging
from datetime import datetime, timezone
from typing import Any, Optional

from ..utils.constants import (
    DEFAULT_COLUMN_COUNT,
    DEFAULT_MAJOR_DIMENSION,
    DEFAULT_ROW_COUNT,
    DEFAULT_SHEET_RANGE,
    DEFAULT_TAB_TITLE,
    DEFAULT_VALUE_INPUT_OPTION,
)

logger = logging.getLogger(__name__)


class SpreadsheetsMixin:
    """Mixin providing spreadsheet-level operations."""

    async def get_sheet_data(
        self, sheet_id: str, range_name: Optional[str] = None
    ) -> dict[str, Any]:
        """Read values from a range of a spreadsheet.

        Args:
            sheet_id: The spreadsheet ID.
            range_name: A1 notation range. Defaults to A1:Z1000.

        Returns:
            Dict with sheetId, sheetName (first tab), range and values.
        """
        sheet_id = self._require_id(sheet_id)
        effective_range = range_name or DEFAULT_SHEET_RANGE
        service = await self.sheets_service()

        response = await self._execute(
            service.spreadsheets().values().get(
                spreadsheetId=sheet_id, range=effective_range
            ),
            "get sheet data",
            sheet_id,
        )
        info = await self._execute(
            service.spreadsheets().get(
                spreadsheetId=sheet_id, fields="sheets.properties.title"
            ),
            "get sheet data",
            sheet_id,
        )

        sheets = info.get('sheets') or [{}]
        sheet_name = sheets[0].get('properties', {}).get('title') or DEFAULT_TAB_TITLE
        values = response.get('values', [])

        logger.info(f"Retrieved sheet data for {sheet_id} ({len(values)} rows)")
        return {
            'sheetId': sheet_id,
            'sheetName': sheet_name,
            'range': effective_range,
            'values': values,
        }

    async def create_sheet(
        self, title: str, sheets: Optional[list[dict[str, Any]]] = None
    ) -> dict[str, Any]:
        """Create a spreadsheet.

        Args:
            title: Spreadsheet title.
            sheets: Tabs as dicts with name, rowCount, columnCount.
                    Defaults to a single 1000x26 "Sheet1".

        Returns:
            Metadata for the new spreadsheet.
        """
        tabs = sheets or [{'name': DEFAULT_TAB_TITLE}]
        body = {
            'properties': {'title': title},
            'sheets': [
                {
                    'properties': {
                        'title': tab['name'],
                        'gridProperties': {
                            'rowCount': tab.get('rowCount') or DEFAULT_ROW_COUNT,
                            'columnCount': tab.get('columnCount') or DEFAULT_COLUMN_COUNT,
                        },
                    }
                }
                for tab in tabs
            ],
        }
        service = await self.sheets_service()
        response = await self._execute(
            service.spreadsheets().create(body=body), "create sheet"
        )

        now = datetime.now(timezone.utc).isoformat()
        metadata = {
            'id': response.get('spreadsheetId'),
            'name': response.get('properties', {}).get('title', title),
            'url': response.get('spreadsheetUrl'),
            'createdTime': now,
            'modifiedTime': now,
        }
        logger.info(f"Created new sheet {metadata['id']}")
        return metadata

    async def update_sheet(
        self,
        sheet_id: str,
        range_name: str,
        values: list[list[Any]],
        major_dimension: str = DEFAULT_MAJOR_DIMENSION,
        value_input_option: str = DEFAULT_VALUE_INPUT_OPTION,
    ) -> dict[str, Any]:
        """Overwrite values in a range.

        Returns:
            The API's update summary (updatedCells, updatedRange, ...).
        """
        sheet_id = self._require_id(sheet_id)
        service = await self.sheets_service()
        result = await self._execute(
            service.spreadsheets().values().update(
                spreadsheetId=sheet_id,
                range=range_name,
                valueInputOption=value_input_option,
                body={'values': values, 'majorDimension': major_dimension},
            ),
            "update sheet",
            sheet_id,
        )
        logger.info(f"Updated {result.get('updatedCells', 0)} cells in {sheet_id}")
        return result

    async def append_values(
        self,
        sheet_id: str,
        range_name: str,
        values: list[list[Any]],
        value_input_option: str = DEFAULT_VALUE_INPUT_OPTION,
    ) -> dict[str, Any]:
        """Append rows after the last row of a table range."""
        sheet_id = self._require_id(sheet_id)
        service = await self.sheets_service()
        result = await self._execute(
            service.spreadsheets().values().append(
                spreadsheetId=sheet_id,
                range=range_name,
                valueInputOption=value_input_option,
                body={'values': values},
            ),
            "append values",
            sheet_id,
        )
        logger.info(f"Appended {len(values)} rows to {sheet_id}")
        return result

    async def clear_range(self, sheet_id: str, range_name: str) -> dict[str, Any]:
        """Clear cell contents in a range, keeping formatting and structure."""
        sheet_id = self._require_id(sheet_id)
        service = await self.sheets_service()
        result = await self._execute(
            service.spreadsheets().values().clear(
                spreadsheetId=sheet_id, range=range_name, body={}
            ),
            "clear range",
            sheet_id,
        )
        logger.info(f"Cleared range {range_name} in {sheet_id}")
        return result

    async def batch_get(
        self, sheet_id: str, ranges: list[str]
    ) -> dict[str, list[list[Any]]]:
        """Read several ranges in one call.

        Returns:
            Mapping of the resolved A1 range to its values.
        """
        sheet_id = self._require_id(sheet_id)
        service = await self.sheets_service()
        response = await self._execute(
            service.spreadsheets().values().batchGet(
                spreadsheetId=sheet_id, ranges=ranges
            ),
            "batch get",
            sheet_id,
        )
        result = {
            value_range['range']: value_range.get('values', [])
            for value_range in response.get('valueRanges', [])
            if value_range.get('range')
        }
        logger.info(f"Batch get completed for {sheet_id} ({len(ranges)} ranges)")
        return result

    async def batch_update(
        self,
        sheet_id: str,
        data: list[dict[str, Any]],
        value_input_option: str = DEFAULT_VALUE_INPUT_OPTION,
    ) -> dict[str, Any]:
        """Write several ranges in one call.

        Args:
            data: Items with ``range`` and ``values``.
        """
        sheet_id = self._require_id(sheet_id)
        service = await self.sheets_service()
        body = {
            'valueInputOption': value_input_option,
            'data': [{'range': d['range'], 'values': d['values']} for d in data],
        }
        result = await self._execute(
            service.spreadsheets().values().batchUpdate(
                spreadsheetId=sheet_id, body=body
            ),
            "batch update",
            sheet_id,
        )
        logger.info(f"Batch update completed for {sheet_id} ({len(data)} ranges)")
        return result

    async def get_spreadsheet_info(self, sheet_id: str) -> dict[str, Any]:
        """Get spreadsheet properties, tabs and named ranges."""
        sheet_id = self._require_id(sheet_id)
        service = await self.sheets_service()
        response = await self._execute(
            service.spreadsheets().get(spreadsheetId=sheet_id),
            "get spreadsheet info",
            sheet_id,
        )

        properties = response.get('properties', {})
        info = {
            'spreadsheetId': response.get('spreadsheetId'),
            'title': properties.get('title'),
            'locale': properties.get('locale'),
            'timeZone': properties.get('timeZone'),
            'url': response.get('spreadsheetUrl'),
            'sheets': [
                {
                    'sheetId': s.get('properties', {}).get('sheetId'),
                    'title': s.get('properties', {}).get('title'),
                    'index': s.get('properties', {}).get('index'),
                    'rowCount': s.get('properties', {}).get('gridProperties', {}).get('rowCount'),
                    'columnCount': s.get('properties', {}).get('gridProperties', {}).get('columnCount'),
                }
                for s in response.get('sheets', [])
            ],
            'namedRanges': [
                {'name': nr.get('name'), 'range': nr.get('range')}
                for nr in response.get('namedRanges', [])
            ],
        }
        logger.info(f"Retrieved spreadsheet info for {sheet_id}")
        return info
