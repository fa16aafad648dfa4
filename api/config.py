"""
Configuration management for the MealDB Recipe Finder.

This module centralizes environment variable loading from .env file at project root.
It should be imported early (api/main.py and api/server.py do so) to ensure .env is
loaded before any other code accesses environment variables.

In production, .env will usually not exist; load_dotenv() is safe to call and will no-op.
Environment variables from the hosting platform will be used instead.

Environment Variables:
- MEALDB_BASE_URL: Optional, defaults to "https://www.themealdb.com/api/json/v1/1"
- MEALDB_TIMEOUT_SECONDS: Optional, per-request timeout (default: 10)
- HOST: Optional, bind address (default: "0.0.0.0")
- PORT: Optional, first port to try (default: 8081)
- PORT_RETRY_LIMIT: Optional, how many consecutive ports to try (default: 10)
- STATIC_DIR: Optional, directory holding index.html (default: <project root>/static)
- LOG_LEVEL: Optional, logging level name (default: "INFO")
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

from recipes.connectors.mealdb_connector import DEFAULT_BASE_URL, DEFAULT_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)

# api/config.py -> api/ -> project root
PROJECT_ROOT = Path(__file__).resolve().parent.parent

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8081
DEFAULT_PORT_RETRY_LIMIT = 10


def load_env_file() -> None:
    """
    Load environment variables from .env file at project root.

    Safe to call multiple times. Existing environment variables take precedence
    over values in .env (override=False).
    """
    load_dotenv(PROJECT_ROOT / ".env", override=False)


# Load .env file on module import
load_env_file()


def _get_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Invalid integer for %s=%r, using default %d", name, raw, default)
        return default


class MealDBConfig:
    """Configuration for the TheMealDB connector."""

    @staticmethod
    def get_base_url() -> str:
        """
        Get TheMealDB base URL.

        Returns:
            Base URL with trailing slash removed
        """
        return os.getenv("MEALDB_BASE_URL", DEFAULT_BASE_URL).rstrip("/")

    @staticmethod
    def get_timeout() -> float:
        """
        Get the per-request timeout in seconds.

        Returns:
            Timeout as a positive float (default: 10.0). Invalid or non-positive
            values fall back to the default.
        """
        raw = os.getenv("MEALDB_TIMEOUT_SECONDS")
        if raw is None or raw.strip() == "":
            return DEFAULT_TIMEOUT_SECONDS
        try:
            value = float(raw)
        except ValueError:
            logger.warning("Invalid MEALDB_TIMEOUT_SECONDS=%r, using default %.1f", raw, DEFAULT_TIMEOUT_SECONDS)
            return DEFAULT_TIMEOUT_SECONDS
        if value <= 0:
            logger.warning("Non-positive MEALDB_TIMEOUT_SECONDS=%r, using default %.1f", raw, DEFAULT_TIMEOUT_SECONDS)
            return DEFAULT_TIMEOUT_SECONDS
        return value


class ServerConfig:
    """Configuration for the web server process."""

    @staticmethod
    def get_host() -> str:
        return os.getenv("HOST", DEFAULT_HOST)

    @staticmethod
    def get_port() -> int:
        """
        Get the first port to try binding.

        Returns:
            Port number (default: 8081)
        """
        return _get_int("PORT", DEFAULT_PORT)

    @staticmethod
    def get_port_retry_limit() -> int:
        """
        Get how many consecutive ports to try when the port is in use.

        Returns:
            Number of attempts, at least 1 (default: 10)
        """
        return max(1, _get_int("PORT_RETRY_LIMIT", DEFAULT_PORT_RETRY_LIMIT))

    @staticmethod
    def get_static_dir() -> Path:
        """
        Get the directory the static page is served from.

        Returns:
            Path to the static directory (default: <project root>/static)
        """
        raw = os.getenv("STATIC_DIR")
        return Path(raw) if raw else PROJECT_ROOT / "static"

    @staticmethod
    def get_log_level() -> str:
        """
        Get the logging level name.

        Returns:
            Upper-case level name (default: "INFO"). Unknown names fall back to the default.
        """
        level = os.getenv("LOG_LEVEL", "INFO").strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            logger.warning("Invalid LOG_LEVEL=%r, using default INFO", level)
            return "INFO"
        return level
