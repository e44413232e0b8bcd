"""Centralized service configuration.

Loads environment variables (and a local ``.env``) once at import time and
exposes them as module constants.
"""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

_DEFAULT_CORS_ORIGINS = "http://localhost:3000,http://127.0.0.1:3000,http://localhost:3001"

HOST: str = os.getenv("HOST", "127.0.0.1")
PORT: int = int(os.getenv("PORT", "8000"))
DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
CORS_ORIGINS: list[str] = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", _DEFAULT_CORS_ORIGINS).split(",")
    if origin.strip()
]


def configure_logging() -> None:
    """Configure root logging from ``LOG_LEVEL``."""
    level = getattr(logging, LOG_LEVEL, None)
    if not isinstance(level, int):
        logger.warning("Unknown LOG_LEVEL %r, falling back to INFO", LOG_LEVEL)
        level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def log_config_status() -> None:
    """Print the effective configuration to stdout for startup visibility."""
    print(f"   Host:        {HOST}:{PORT}")
    print(f"   Debug:       {'on' if DEBUG else 'off'}")
    print(f"   Log level:   {LOG_LEVEL}")
    print(f"   CORS:        {', '.join(CORS_ORIGINS) or 'none'}")
