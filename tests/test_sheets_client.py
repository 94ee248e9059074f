"""Unit tests for SheetsClient operations with mocked Google services."""
from unittest.mock import AsyncMock, MagicMock

import pytest
from googleapiclient.errors import HttpError

from sheets_synapsis.client import SheetsClient
from sheets_synapsis.client.files import escape_drive_query
from sheets_synapsis.utils.errors import (
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)


def _http_error(status):
    resp = MagicMock()
    resp.status = status
    resp.reason = "error"
    return HttpError(resp, b'{"error": {"message": "boom"}}')


class TestSheetsClient:
    """Tests for the spreadsheet and tab operations."""

    def setup_method(self):
        self.sheets = MagicMock()
        self.drive = MagicMock()
        self.auth = MagicMock()
        self.auth.get_sheets_service = AsyncMock(return_value=self.sheets)
        self.auth.get_drive_service = AsyncMock(return_value=self.drive)
        self.client = SheetsClient(self.auth)

        self.values = self.sheets.spreadsheets.return_value.values.return_value
        self.spreadsheets = self.sheets.spreadsheets.return_value

    @pytest.mark.asyncio
    async def test_get_sheet_data_defaults_range(self):
        self.values.get.return_value.execute.return_value = {"values": [["a", "b"], [1, 2]]}
        self.spreadsheets.get.return_value.execute.return_value = {
            "sheets": [{"properties": {"title": "Data"}}]
        }

        result = await self.client.get_sheet_data("sheet-1")

        self.values.get.assert_called_once_with(spreadsheetId="sheet-1", range="A1:Z1000")
        assert result == {
            "sheetId": "sheet-1",
            "sheetName": "Data",
            "range": "A1:Z1000",
            "values": [["a", "b"], [1, 2]],
        }

    @pytest.mark.asyncio
    async def test_get_sheet_data_empty_range(self):
        self.values.get.return_value.execute.return_value = {}
        self.spreadsheets.get.return_value.execute.return_value = {}

        result = await self.client.get_sheet_data("sheet-1", "B2:C3")

        assert result["values"] == []
        assert result["sheetName"] == "Sheet1"
        assert result["range"] == "B2:C3"

    @pytest.mark.asyncio
    async def test_blank_sheet_id_is_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            await self.client.get_sheet_data("  ")
        assert exc_info.value.field == "sheet_id"
        self.auth.get_sheets_service.assert_not_called()

    @pytest.mark.asyncio
    async def test_http_errors_are_mapped(self):
        self.values.get.return_value.execute.side_effect = _http_error(404)

        with pytest.raises(NotFoundError) as exc_info:
            await self.client.get_sheet_data("missing")
        assert "missing" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_permission_denied(self):
        self.values.clear.return_value.execute.side_effect = _http_error(403)

        with pytest.raises(PermissionDeniedError):
            await self.client.clear_range("sheet-1", "A1:B2")

    @pytest.mark.asyncio
    async def test_create_sheet_default_tab(self):
        self.spreadsheets.create.return_value.execute.return_value = {
            "spreadsheetId": "new-id",
            "properties": {"title": "Budget"},
            "spreadsheetUrl": "https://docs.google.com/spreadsheets/d/new-id",
        }

        metadata = await self.client.create_sheet("Budget")

        body = self.spreadsheets.create.call_args.kwargs["body"]
        assert body["properties"] == {"title": "Budget"}
        assert body["sheets"] == [{
            "properties": {
                "title": "Sheet1",
                "gridProperties": {"rowCount": 1000, "columnCount": 26},
            }
        }]
        assert metadata["id"] == "new-id"
        assert metadata["url"].endswith("new-id")
        assert metadata["createdTime"] == metadata["modifiedTime"]

    @pytest.mark.asyncio
    async def test_create_sheet_custom_tabs(self):
        self.spreadsheets.create.return_value.execute.return_value = {"spreadsheetId": "x"}

        await self.client.create_sheet(
            "Report", [{"name": "Summary", "rowCount": 10, "columnCount": 3}, {"name": "Data"}]
        )

        tabs = self.spreadsheets.create.call_args.kwargs["body"]["sheets"]
        assert [t["properties"]["title"] for t in tabs] == ["Summary", "Data"]
        assert tabs[0]["properties"]["gridProperties"] == {"rowCount": 10, "columnCount": 3}
        assert tabs[1]["properties"]["gridProperties"] == {"rowCount": 1000, "columnCount": 26}

    @pytest.mark.asyncio
    async def test_update_sheet(self):
        self.values.update.return_value.execute.return_value = {"updatedCells": 4}

        result = await self.client.update_sheet(
            "sheet-1", "A1:B2", [[1, 2], [3, 4]], "COLUMNS", "USER_ENTERED"
        )

        self.values.update.assert_called_once_with(
            spreadsheetId="sheet-1",
            range="A1:B2",
            valueInputOption="USER_ENTERED",
            body={"values": [[1, 2], [3, 4]], "majorDimension": "COLUMNS"},
        )
        assert result["updatedCells"] == 4

    @pytest.mark.asyncio
    async def test_append_values(self):
        self.values.append.return_value.execute.return_value = {}

        await self.client.append_values("sheet-1", "Sheet1!A:A", [["x"]])

        self.values.append.assert_called_once_with(
            spreadsheetId="sheet-1",
            range="Sheet1!A:A",
            valueInputOption="RAW",
            body={"values": [["x"]]},
        )

    @pytest.mark.asyncio
    async def test_batch_get_maps_ranges(self):
        self.values.batchGet.return_value.execute.return_value = {
            "valueRanges": [
                {"range": "Sheet1!A1:B2", "values": [[1, 2]]},
                {"range": "Sheet2!C1:C1"},
            ]
        }

        result = await self.client.batch_get("sheet-1", ["Sheet1!A1:B2", "Sheet2!C1"])

        assert result == {"Sheet1!A1:B2": [[1, 2]], "Sheet2!C1:C1": []}

    @pytest.mark.asyncio
    async def test_batch_update(self):
        self.values.batchUpdate.return_value.execute.return_value = {}

        await self.client.batch_update(
            "sheet-1", [{"range": "A1", "values": [[1]]}, {"range": "B1", "values": [[2]]}]
        )

        body = self.values.batchUpdate.call_args.kwargs["body"]
        assert body["valueInputOption"] == "RAW"
        assert [d["range"] for d in body["data"]] == ["A1", "B1"]

    @pytest.mark.asyncio
    async def test_get_spreadsheet_info(self):
        self.spreadsheets.get.return_value.execute.return_value = {
            "spreadsheetId": "sheet-1",
            "properties": {"title": "Budget", "locale": "en_US", "timeZone": "UTC"},
            "sheets": [{
                "properties": {
                    "sheetId": 0,
                    "title": "Sheet1",
                    "index": 0,
                    "gridProperties": {"rowCount": 1000, "columnCount": 26},
                }
            }],
            "namedRanges": [{"name": "totals", "range": {"sheetId": 0}}],
        }

        info = await self.client.get_spreadsheet_info("sheet-1")

        assert info["title"] == "Budget"
        assert info["sheets"] == [{
            "sheetId": 0, "title": "Sheet1", "index": 0, "rowCount": 1000, "columnCount": 26,
        }]
        assert info["namedRanges"][0]["name"] == "totals"

    @pytest.mark.asyncio
    async def test_add_sheet_tab(self):
        self.spreadsheets.batchUpdate.return_value.execute.return_value = {
            "replies": [{"addSheet": {"properties": {"sheetId": 123, "title": "New"}}}]
        }

        result = await self.client.add_sheet_tab("sheet-1", "New", row_count=50)

        body = self.spreadsheets.batchUpdate.call_args.kwargs["body"]
        assert body == {"requests": [{
            "addSheet": {"properties": {"title": "New", "gridProperties": {"rowCount": 50}}}
        }]}
        assert result == {"sheetId": 123, "title": "New"}

    @pytest.mark.asyncio
    async def test_rename_sheet_tab(self):
        self.spreadsheets.batchUpdate.return_value.execute.return_value = {}

        await self.client.rename_sheet_tab("sheet-1", 7, "Renamed")

        request = self.spreadsheets.batchUpdate.call_args.kwargs["body"]["requests"][0]
        assert request == {
            "updateSheetProperties": {
                "properties": {"sheetId": 7, "title": "Renamed"},
                "fields": "title",
            }
        }

    @pytest.mark.asyncio
    async def test_delete_sheet_tab(self):
        self.spreadsheets.batchUpdate.return_value.execute.return_value = {}

        await self.client.delete_sheet_tab("sheet-1", 7)

        request = self.spreadsheets.batchUpdate.call_args.kwargs["body"]["requests"][0]
        assert request == {"deleteSheet": {"sheetId": 7}}


class TestDriveFiles:
    """Tests for Drive-level search and trash."""

    def setup_method(self):
        self.drive = MagicMock()
        self.auth = MagicMock()
        self.auth.get_drive_service = AsyncMock(return_value=self.drive)
        self.client = SheetsClient(self.auth)
        self.files = self.drive.files.return_value

    @pytest.mark.asyncio
    async def test_find_sheets_query(self):
        self.files.list.return_value.execute.return_value = {
            "files": [{
                "id": "f1",
                "name": "Budget",
                "webViewLink": "https://docs.google.com/spreadsheets/d/f1",
                "createdTime": "2024-01-01T00:00:00Z",
                "modifiedTime": "2024-01-02T00:00:00Z",
                "owners": [{"displayName": "Ada"}],
            }]
        }

        sheets = await self.client.find_sheets("Bud", max_results=5, order_by="name")

        kwargs = self.files.list.call_args.kwargs
        assert kwargs["q"] == (
            "mimeType='application/vnd.google-apps.spreadsheet' and trashed=false"
            " and name contains 'Bud'"
        )
        assert kwargs["pageSize"] == 5
        assert kwargs["orderBy"] == "name"
        assert sheets == [{
            "id": "f1",
            "name": "Budget",
            "url": "https://docs.google.com/spreadsheets/d/f1",
            "createdTime": "2024-01-01T00:00:00Z",
            "modifiedTime": "2024-01-02T00:00:00Z",
            "owner": "Ada",
        }]

    @pytest.mark.asyncio
    async def test_find_sheets_without_owner(self):
        self.files.list.return_value.execute.return_value = {"files": [{"id": "f1"}]}

        sheets = await self.client.find_sheets()

        assert "name contains" not in self.files.list.call_args.kwargs["q"]
        assert sheets[0]["owner"] is None

    def test_escape_drive_query(self):
        assert escape_drive_query("Bob's \\ sheet") == "Bob\\'s \\\\ sheet"

    @pytest.mark.asyncio
    async def test_delete_sheet_moves_to_trash(self):
        self.files.update.return_value.execute.return_value = {}

        await self.client.delete_sheet("f1")

        self.files.update.assert_called_once_with(fileId="f1", body={"trashed": True})
        self.files.delete.assert_not_called()
