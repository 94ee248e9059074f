"""Command-line entry points."""
import asyncio
import logging
import sys

from .core.config import configure_logging, load_environment

logger = logging.getLogger(__name__)


def main():
    """Run the MCP server over stdio."""
    config = load_environment()
    configure_logging(config.log_level)
    logger.info(f"Starting {config.server_name}")

    from .server import main as run_server
    run_server()


async def _authenticate() -> None:
    from .auth.google_auth import GoogleAuthManager

    manager = GoogleAuthManager()
    try:
        await manager.ensure_authenticated()
    finally:
        await manager.aclose()
    print(f"Token saved to {manager.config.token_path}", file=sys.stderr)


def auth_main():
    """Authenticate once and persist tokens, without starting the server."""
    config = load_environment()
    configure_logging(config.log_level)

    print("Starting Google authentication...", file=sys.stderr)
    try:
        asyncio.run(_authenticate())
    except Exception as e:
        print(f"Authentication failed: {e}", file=sys.stderr)
        sys.exit(1)
    print("Authentication successful! You can now start the MCP server.", file=sys.stderr)
