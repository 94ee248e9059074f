"""Google Sheets Client - modular implementation.

This module provides a facade that combines all client mixins into
a single SheetsClient class.
"""
from .base import SheetsClientBase
from .sheets import SpreadsheetsMixin
from .tabs import TabsMixin
from .files import DriveFilesMixin


class SheetsClient(
    SheetsClientBase,
    SpreadsheetsMixin,
    TabsMixin,
    DriveFilesMixin,
):
    """Full-featured Google Sheets client.

    Combines all mixins to provide spreadsheet, tab and Drive file
    operations through a unified interface.
    """
    pass


__all__ = ['SheetsClient']
