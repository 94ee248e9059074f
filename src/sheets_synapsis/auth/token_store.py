"""
Token Store for Sheets Synapsis.

Persists the OAuth token set as a single JSON file with owner-only
permissions. Writes are atomic: a temp file in the same directory is
fsynced and renamed over the target.
"""

import json
import logging
import os
import tempfile
from typing import Optional

from .models import TokenSet
from ..utils.errors import TokenStoreError

logger = logging.getLogger(__name__)

DIR_MODE = 0o700
FILE_MODE = 0o600


class TokenStore:
    """Owner-only JSON file holding one TokenSet."""

    def __init__(self, path: str) -> None:
        """
        Initialize the token store.

        Args:
            path: Location of the token file. The parent directory is
                  created on first save.
        """
        self._path = os.path.abspath(os.path.expanduser(path))

    @property
    def path(self) -> str:
        return self._path

    def exists(self) -> bool:
        return os.path.isfile(self._path)

    def load(self) -> Optional[TokenSet]:
        """
        Load the stored token set.

        Returns:
            The TokenSet, or None if the file is missing, unreadable or malformed.
        """
        if not os.path.exists(self._path):
            logger.debug(f"No token file at {self._path}")
            return None

        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
            tokens = TokenSet.from_dict(data)
        except (OSError, ValueError) as e:
            # json.JSONDecodeError is a ValueError
            logger.warning(f"Ignoring unusable token file {self._path}: {e}")
            return None

        logger.info("Loaded stored OAuth tokens")
        return tokens

    def save(self, tokens: TokenSet) -> None:
        """
        Atomically write the token set.

        Raises:
            TokenStoreError: If the file could not be written. The previous
                             file, if any, is left untouched.
        """
        parent_dir = os.path.dirname(self._path)
        tmp_path = None
        try:
            self._ensure_dir(parent_dir)

            fd, tmp_path = tempfile.mkstemp(
                dir=parent_dir, prefix=".tmp_", suffix=".json"
            )
            os.chmod(tmp_path, FILE_MODE)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(tokens.to_dict(), f, indent=2)
                f.flush()
                os.fsync(f.fileno())

            os.replace(tmp_path, self._path)
            tmp_path = None
        except OSError as e:
            logger.error(f"Failed to save OAuth tokens to {self._path}: {e}")
            raise TokenStoreError(f"Could not write token file: {e}") from e
        finally:
            if tmp_path and os.path.exists(tmp_path):
                os.unlink(tmp_path)

        logger.info("OAuth tokens saved to disk")

    @staticmethod
    def _ensure_dir(directory: str) -> None:
        """Create the token directory if absent and restrict it to the owner."""
        if not os.path.isdir(directory):
            os.makedirs(directory, mode=DIR_MODE, exist_ok=True)
            logger.info(f"Created token directory: {directory}")
        # makedirs applies the umask to mode; existing directories may be wider
        os.chmod(directory, DIR_MODE)
