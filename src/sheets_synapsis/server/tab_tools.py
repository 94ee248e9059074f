"""Tab (worksheet) management MCP tools."""
import logging
from typing import Annotated, Optional

from pydantic import Field

from .main import mcp, get_client, format_result
from ..utils.errors import SheetsError, format_error

logger = logging.getLogger(__name__)


@mcp.tool()
async def add_sheet_tab(
    sheet_id: str,
    title: str,
    row_count: Optional[Annotated[int, Field(ge=1)]] = None,
    column_count: Optional[Annotated[int, Field(ge=1)]] = None,
) -> str:
    """
    Add a new tab to an existing Google Sheet.
    Args:
        sheet_id: The ID of the Google Sheet.
        title: Name for the new tab.
        row_count: Optional number of rows.
        column_count: Optional number of columns.
    """
    try:
        added = await get_client().add_sheet_tab(sheet_id, title, row_count, column_count)
        return format_result({
            "success": True,
            "sheetId": added["sheetId"],
            "title": added["title"],
        })
    except SheetsError as e:
        return format_error("Add sheet tab", e)
    except Exception as e:
        logger.error(f"Add sheet tab failed unexpectedly: {e}", exc_info=True)
        return f"Add sheet tab failed: Unexpected error ({type(e).__name__}: {e})"


@mcp.tool()
async def delete_sheet_tab(sheet_id: str, tab_id: int) -> str:
    """
    Delete a tab from a Google Sheet.
    Args:
        sheet_id: The ID of the Google Sheet.
        tab_id: Numeric tab ID (see get_spreadsheet_info).
    """
    try:
        await get_client().delete_sheet_tab(sheet_id, tab_id)
        return format_result({"success": True, "message": f"Tab {tab_id} deleted"})
    except SheetsError as e:
        return format_error("Delete sheet tab", e)
    except Exception as e:
        logger.error(f"Delete sheet tab failed unexpectedly: {e}", exc_info=True)
        return f"Delete sheet tab failed: Unexpected error ({type(e).__name__}: {e})"


@mcp.tool()
async def rename_sheet_tab(sheet_id: str, tab_id: int, new_title: str) -> str:
    """
    Rename a tab in a Google Sheet.
    Args:
        sheet_id: The ID of the Google Sheet.
        tab_id: Numeric tab ID (see get_spreadsheet_info).
        new_title: The new tab name.
    """
    try:
        await get_client().rename_sheet_tab(sheet_id, tab_id, new_title)
        return format_result({
            "success": True,
            "message": f"Tab {tab_id} renamed to '{new_title}'",
        })
    except SheetsError as e:
        return format_error("Rename sheet tab", e)
    except Exception as e:
        logger.error(f"Rename sheet tab failed unexpectedly: {e}", exc_info=True)
        return f"Rename sheet tab failed: Unexpected error ({type(e).__name__}: {e})"
