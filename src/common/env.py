"""Environment configuration interface for joplin-disk-usage.

This module provides a clean interface for accessing environment variables,
centralizing all environment variable access in one place.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
load_dotenv()


class Environment:
    """Interface for accessing environment configuration."""

    @staticmethod
    def joplin_api_url() -> str:
        """Get the base URL of the Joplin Data API.

        Returns:
            API base URL without trailing slash, defaults to http://localhost:41184
        """
        return os.getenv("JOPLIN_API_URL", "http://localhost:41184").rstrip("/")

    @staticmethod
    def joplin_token() -> str | None:
        """Get the Joplin Data API token.

        Returns:
            Token from Joplin's Web Clipper options, or None if unset
        """
        return os.getenv("JOPLIN_TOKEN") or None

    @staticmethod
    def joplin_notebook() -> str | None:
        """Get the notebook new documents are created in.

        Returns:
            Notebook id or exact notebook title, or None if unset
        """
        return os.getenv("JOPLIN_NOTEBOOK") or None

    @staticmethod
    def joplin_timeout() -> float:
        """Get the per-request timeout.

        Returns:
            Timeout in seconds, defaults to 30
        """
        return float(os.getenv("JOPLIN_TIMEOUT", "30"))

    @staticmethod
    def joplin_workers() -> int:
        """Get the number of concurrent linkage lookups.

        Returns:
            Worker count, defaults to 1 (strictly sequential)
        """
        return int(os.getenv("JOPLIN_WORKERS", "1"))

    @staticmethod
    def state_dir() -> Path:
        """Get the directory holding the pending placeholder ledger.

        Returns:
            State directory, defaults to ~/.joplin-disk-usage
        """
        return Path(os.getenv("DISK_USAGE_STATE_DIR", "~/.joplin-disk-usage")).expanduser()


# Singleton instance for convenient access
env = Environment()
