"""Centralized constants for the Google Sheets MCP server."""

# MIME Types - Google Apps
SPREADSHEET_MIME_TYPE = 'application/vnd.google-apps.spreadsheet'

# Google OAuth endpoints
GOOGLE_AUTH_URI = 'https://accounts.google.com/o/oauth2/v2/auth'
GOOGLE_TOKEN_URI = 'https://oauth2.googleapis.com/token'

# OAuth callback listener
DEFAULT_CALLBACK_PORT = 3000
DEFAULT_CALLBACK_HOST = '127.0.0.1'
DEFAULT_CALLBACK_PATH = '/oauth/callback'
TOKEN_FILE_NAME = 'oauth-tokens.json'

# Default Values
DEFAULT_SHEET_RANGE = "A1:Z1000"
DEFAULT_SEARCH_LIMIT = 10
MAX_SEARCH_LIMIT = 100
DEFAULT_ORDER_BY = 'modifiedTime'
DEFAULT_TAB_TITLE = 'Sheet1'
DEFAULT_ROW_COUNT = 1000
DEFAULT_COLUMN_COUNT = 26
DEFAULT_VALUE_INPUT_OPTION = 'RAW'
DEFAULT_MAJOR_DIMENSION = 'ROWS'

# Drive fields returned for spreadsheet metadata
SHEET_LIST_FIELDS = 'files(id,name,webViewLink,createdTime,modifiedTime,owners)'
