"""
Shared configuration for Sheets Synapsis.

This module loads the environment (including a local .env file) and
configures process-wide logging.
"""

import logging
import sys
from typing import Optional

from dotenv import load_dotenv

from ..auth.oauth_config import OAuthConfig, reload_oauth_config

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"


def load_environment() -> OAuthConfig:
    """
    Load .env into the environment and rebuild the OAuth configuration.

    Existing environment variables take precedence over .env values.

    Returns:
        The freshly loaded configuration.
    """
    load_dotenv()
    return reload_oauth_config()


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure root logging to stderr.

    stdout is reserved for the MCP stdio transport.

    Args:
        level: Level name such as "DEBUG" or "INFO". Defaults to INFO.
    """
    logging.basicConfig(
        level=getattr(logging, (level or "INFO").upper(), logging.INFO),
        format=LOG_FORMAT,
        stream=sys.stderr,
        force=True,
    )
    # uvicorn is only used for the transient OAuth callback listener
    logging.getLogger("uvicorn").setLevel(logging.WARNING)
    logging.getLogger("googleapiclient.discovery_cache").setLevel(logging.ERROR)
