"""MCP Server initialization and shared state."""

import json
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional

from fastmcp import FastMCP

from ..auth.google_auth import GoogleAuthManager
from ..auth.oauth_config import get_oauth_config
from ..client import SheetsClient

logger = logging.getLogger(__name__)

# Global auth manager and client, initialized lazily
_auth_manager: Optional[GoogleAuthManager] = None
_client: Optional[SheetsClient] = None


def get_auth_manager() -> GoogleAuthManager:
    """Get or create the global GoogleAuthManager instance.

    Stored tokens are loaded on first access; no browser is opened until
    a tool actually needs Google.
    """
    global _auth_manager
    if _auth_manager is None:
        _auth_manager = GoogleAuthManager(get_oauth_config())
    return _auth_manager


def get_client() -> SheetsClient:
    """Get or create the global SheetsClient instance."""
    global _client
    if _client is None:
        _client = SheetsClient(get_auth_manager())
    return _client


async def shutdown() -> None:
    """Release the OAuth callback port and HTTP resources."""
    global _auth_manager, _client
    if _auth_manager is not None:
        await _auth_manager.aclose()
        logger.info("Auth manager closed")
    _auth_manager = None
    _client = None


@asynccontextmanager
async def lifespan(server: FastMCP) -> AsyncIterator[None]:
    try:
        yield
    finally:
        await shutdown()


def format_result(data: Any) -> str:
    """Render a tool result as pretty-printed JSON."""
    return json.dumps(data, indent=2, default=str)


# Initialize MCP Server
mcp = FastMCP(get_oauth_config().server_name, lifespan=lifespan)


@mcp.resource("sheet://{sheet_id}", mime_type="application/json")
async def read_sheet_resource(sheet_id: str) -> str:
    """Read a Google Sheet's default range as a JSON resource."""
    data = await get_client().get_sheet_data(sheet_id)
    return format_result(data)
