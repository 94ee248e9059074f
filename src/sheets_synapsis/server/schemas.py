"""Argument types shared by the spreadsheet tools."""

from typing import Literal, Optional, Union

from pydantic import BaseModel, Field

from ..utils.constants import DEFAULT_COLUMN_COUNT, DEFAULT_ROW_COUNT

CellValue = Union[str, int, float, bool, None]
Rows = list[list[CellValue]]

ValueInputOption = Literal["RAW", "USER_ENTERED"]
MajorDimension = Literal["ROWS", "COLUMNS"]
OrderBy = Literal["name", "createdTime", "modifiedTime"]


class TabSpec(BaseModel):
    """A tab to create along with a new spreadsheet."""

    name: str = Field(min_length=1, description="Tab title")
    row_count: int = Field(DEFAULT_ROW_COUNT, ge=1, description="Number of rows")
    column_count: int = Field(DEFAULT_COLUMN_COUNT, ge=1, description="Number of columns")

    def to_request(self) -> dict:
        return {
            "name": self.name,
            "rowCount": self.row_count,
            "columnCount": self.column_count,
        }


class RangeValues(BaseModel):
    """Values destined for one A1 range in a batch update."""

    range: str = Field(min_length=1, description="A1 notation range, e.g. Sheet1!A1:B2")
    values: Rows = Field(description="Rows of cell values")


def non_empty(value: Optional[str]) -> Optional[str]:
    """Normalize blank optional strings to None."""
    if value is None or not value.strip():
        return None
    return value
