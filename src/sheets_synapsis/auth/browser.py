"""Best-effort launcher for the OAuth consent URL."""

import asyncio
import logging
import sys
import webbrowser
from typing import Callable, Optional, TextIO

logger = logging.getLogger(__name__)


class BrowserLauncher:
    """
    Opens the authorization URL in the default browser.

    Falls back to printing the URL on stderr (stdout carries the MCP
    protocol). Never raises.
    """

    def __init__(
        self,
        opener: Callable[[str], bool] = webbrowser.open,
        stream: Optional[TextIO] = None,
    ) -> None:
        self._opener = opener
        self._stream = stream

    def open(self, url: str) -> bool:
        """
        Try to open url in a browser.

        Returns:
            True if a browser accepted the URL, False if the console fallback was used.
        """
        try:
            if self._opener(url):
                logger.info("OAuth URL opened in system default browser")
                return True
            logger.warning("No usable browser found, using console fallback")
        except Exception as e:
            logger.warning(f"Failed to open system browser: {e}. Using console fallback")

        self._print_url(url)
        return False

    async def open_async(self, url: str) -> bool:
        """Run ``open`` in a worker thread; browser spawning can block."""
        return await asyncio.to_thread(self.open, url)

    def _print_url(self, url: str) -> None:
        stream = self._stream or sys.stderr
        try:
            stream.write(
                "\nGoogle OAuth Authentication Required\n"
                "Please open this URL in your browser to authorize the application:\n"
                f"\n{url}\n\n"
                "Waiting for authorization...\n"
            )
            stream.flush()
        except (OSError, ValueError) as e:
            logger.error(f"Could not print OAuth URL: {e}. Open manually: {url}")
