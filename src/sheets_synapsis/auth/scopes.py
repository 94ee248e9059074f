"""
Google OAuth Scopes for Sheets Synapsis.

This module defines the OAuth scopes required for Google Sheets access.
"""

from typing import List

# Google Sheets scopes
SHEETS_WRITE_SCOPE = "https://www.googleapis.com/auth/spreadsheets"

# Google Drive scopes
# drive.file limits Drive access to files this app created or was handed
DRIVE_FILE_SCOPE = "https://www.googleapis.com/auth/drive.file"

SCOPES = [
    SHEETS_WRITE_SCOPE,  # Full Sheets access
    DRIVE_FILE_SCOPE,  # Find and trash app-visible spreadsheets
]


def get_scopes() -> List[str]:
    """
    Get the list of OAuth scopes required for Sheets Synapsis.

    Returns:
        List of unique OAuth scopes, in request order.
    """
    return list(dict.fromkeys(SCOPES))
