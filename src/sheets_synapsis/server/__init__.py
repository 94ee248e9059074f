"""Google Sheets MCP Server - modular implementation."""

from .main import mcp, get_client, get_auth_manager

from . import sheet_tools
from . import tab_tools
from . import auth_tools
from . import prompts

__all__ = ["mcp", "get_client", "get_auth_manager", "main"]


def main():
    """Entry point for the Sheets Synapsis MCP server."""
    mcp.run(show_banner=False)
