"""Authentication MCP tools for Sheets Synapsis."""

import logging

from .main import mcp, get_auth_manager, format_result
from ..utils.errors import SheetsError, format_error

logger = logging.getLogger(__name__)


@mcp.tool()
async def start_google_auth(force: bool = False) -> str:
    """
    Manually initiate Google OAuth authentication.

    NOTE: This tool should typically NOT be called directly. Every Sheets tool
    authenticates on demand, opening the consent page in a browser when needed.
    Only use this tool if:
    1. You want to proactively authenticate before using other tools
    2. You need to re-authenticate with a different Google account (force=True)
    3. The automatic authentication flow failed and you need to retry

    Args:
        force: Discard held tokens and run the full browser consent flow.

    Returns:
        Authentication status, or an error message.
    """
    manager = get_auth_manager()
    try:
        if force:
            await manager.reauthenticate()
        else:
            await manager.ensure_authenticated()
        return format_result({
            "success": True,
            "message": "Authenticated with Google",
            "status": manager.get_status(),
        })
    except SheetsError as e:
        return format_error("Authentication", e)
    except Exception as e:
        logger.error(f"Failed to authenticate with Google: {e}", exc_info=True)
        return f"Authentication failed: Unexpected error ({type(e).__name__}: {e})"


@mcp.tool()
def get_auth_status() -> str:
    """
    Report whether Google credentials are held, without starting a flow.

    Returns:
        JSON with token state and the (secret-free) OAuth configuration.
    """
    manager = get_auth_manager()
    return format_result({
        "status": manager.get_status(),
        "config": manager.config.get_environment_summary(),
    })
