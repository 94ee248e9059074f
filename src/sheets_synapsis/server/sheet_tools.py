"""Spreadsheet-related MCP tools."""
import logging
from typing import Annotated, Optional

from pydantic import Field

from .main import mcp, get_client, format_result
from .schemas import (
    MajorDimension,
    OrderBy,
    RangeValues,
    Rows,
    TabSpec,
    ValueInputOption,
    non_empty,
)
from ..utils.constants import DEFAULT_SEARCH_LIMIT, MAX_SEARCH_LIMIT
from ..utils.errors import SheetsError, format_error

logger = logging.getLogger(__name__)


def _unexpected(action: str, e: Exception) -> str:
    logger.error(f"{action} failed unexpectedly: {e}", exc_info=True)
    return f"{action} failed: Unexpected error ({type(e).__name__}: {e})"


@mcp.tool()
async def find_sheets(
    query: Optional[str] = None,
    max_results: Annotated[int, Field(ge=1, le=MAX_SEARCH_LIMIT)] = DEFAULT_SEARCH_LIMIT,
    order_by: OrderBy = "modifiedTime",
) -> str:
    """
    Search for Google Sheets in Google Drive.
    Args:
        query: Text the spreadsheet name must contain.
        max_results: Maximum results (1-100).
        order_by: Sort field: name, createdTime or modifiedTime.
    """
    try:
        sheets = await get_client().find_sheets(non_empty(query), max_results, order_by)
        return format_result(sheets)
    except SheetsError as e:
        return format_error("Find sheets", e)
    except Exception as e:
        return _unexpected("Find sheets", e)


@mcp.tool()
async def get_sheet_data(sheet_id: str, range_name: Optional[str] = None) -> str:
    """
    Retrieve data from a Google Sheet.
    Args:
        sheet_id: The ID of the Google Sheet.
        range_name: The range to read (e.g. "A1:C10"). Defaults to A1:Z1000.
    """
    try:
        data = await get_client().get_sheet_data(sheet_id, non_empty(range_name))
        return format_result(data)
    except SheetsError as e:
        return format_error("Get sheet data", e)
    except Exception as e:
        return _unexpected("Get sheet data", e)


@mcp.tool()
async def create_sheet(title: str, sheets: Optional[list[TabSpec]] = None) -> str:
    """
    Create a new Google Sheet.
    Args:
        title: The title of the new spreadsheet.
        sheets: Tabs to create. Defaults to one 1000x26 tab named "Sheet1".
    """
    try:
        tabs = [tab.to_request() for tab in sheets] if sheets else None
        metadata = await get_client().create_sheet(title, tabs)
        return format_result(metadata)
    except SheetsError as e:
        return format_error("Create sheet", e)
    except Exception as e:
        return _unexpected("Create sheet", e)


@mcp.tool()
async def update_sheet(
    sheet_id: str,
    range_name: str,
    values: Rows,
    major_dimension: MajorDimension = "ROWS",
    value_input_option: ValueInputOption = "RAW",
) -> str:
    """
    Update data in a Google Sheet, overwriting the target range.
    Args:
        sheet_id: The ID of the Google Sheet.
        range_name: The range to update (e.g. "Sheet1!A1:C10").
        values: Array of rows, e.g. [["A", "B"], [1, 2]].
        major_dimension: ROWS or COLUMNS.
        value_input_option: RAW stores values as-is, USER_ENTERED parses formulas.
    """
    try:
        result = await get_client().update_sheet(
            sheet_id, range_name, values, major_dimension, value_input_option
        )
        return format_result({
            "success": True,
            "message": "Sheet updated successfully",
            "updatedCells": result.get("updatedCells", 0),
        })
    except SheetsError as e:
        return format_error("Update sheet", e)
    except Exception as e:
        return _unexpected("Update sheet", e)


@mcp.tool()
async def delete_sheet(sheet_id: str) -> str:
    """
    Move a Google Sheet to trash (recoverable from Google Drive).
    Args:
        sheet_id: The ID of the Google Sheet to trash.
    """
    try:
        await get_client().delete_sheet(sheet_id)
        return format_result({"success": True, "message": "Sheet moved to trash"})
    except SheetsError as e:
        return format_error("Delete sheet", e)
    except Exception as e:
        return _unexpected("Delete sheet", e)


@mcp.tool()
async def append_values(
    sheet_id: str,
    range_name: str,
    values: Rows,
    value_input_option: ValueInputOption = "RAW",
) -> str:
    """
    Append rows to a Google Sheet without needing to know the last row.
    Args:
        sheet_id: The ID of the Google Sheet.
        range_name: Target table range (e.g. "Sheet1!A:A").
        values: Array of rows to append.
        value_input_option: RAW or USER_ENTERED.
    """
    try:
        await get_client().append_values(sheet_id, range_name, values, value_input_option)
        return format_result({"success": True, "message": "Values appended successfully"})
    except SheetsError as e:
        return format_error("Append values", e)
    except Exception as e:
        return _unexpected("Append values", e)


@mcp.tool()
async def clear_range(sheet_id: str, range_name: str) -> str:
    """
    Clear cell contents in a range without deleting the sheet structure.
    Args:
        sheet_id: The ID of the Google Sheet.
        range_name: Range to clear (e.g. "A1:C10").
    """
    try:
        await get_client().clear_range(sheet_id, range_name)
        return format_result({"success": True, "message": "Range cleared successfully"})
    except SheetsError as e:
        return format_error("Clear range", e)
    except Exception as e:
        return _unexpected("Clear range", e)


@mcp.tool()
async def batch_get(sheet_id: str, ranges: Annotated[list[str], Field(min_length=1)]) -> str:
    """
    Read multiple ranges from a Google Sheet in a single API call.
    Args:
        sheet_id: The ID of the Google Sheet.
        ranges: Ranges to read, e.g. ["Sheet1!A1:B2", "Sheet2!C:C"].
    """
    try:
        data = await get_client().batch_get(sheet_id, ranges)
        return format_result(data)
    except SheetsError as e:
        return format_error("Batch get", e)
    except Exception as e:
        return _unexpected("Batch get", e)


@mcp.tool()
async def batch_update(
    sheet_id: str,
    data: Annotated[list[RangeValues], Field(min_length=1)],
    value_input_option: ValueInputOption = "RAW",
) -> str:
    """
    Write to multiple ranges in a Google Sheet in a single API call.
    Args:
        sheet_id: The ID of the Google Sheet.
        data: Range/values pairs.
        value_input_option: RAW or USER_ENTERED.
    """
    try:
        await get_client().batch_update(
            sheet_id, [item.model_dump() for item in data], value_input_option
        )
        return format_result({"success": True, "message": "Batch update completed"})
    except SheetsError as e:
        return format_error("Batch update", e)
    except Exception as e:
        return _unexpected("Batch update", e)


@mcp.tool()
async def get_spreadsheet_info(sheet_id: str) -> str:
    """
    Get full spreadsheet metadata: tabs, properties, named ranges.
    Args:
        sheet_id: The ID of the Google Sheet.
    """
    try:
        info = await get_client().get_spreadsheet_info(sheet_id)
        return format_result(info)
    except SheetsError as e:
        return format_error("Get spreadsheet info", e)
    except Exception as e:
        return _unexpected("Get spreadsheet info", e)
