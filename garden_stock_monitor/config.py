"""Configuration loader.

Reads environment variables and `.env` to configure the service.
"""

from __future__ import annotations

import logging
import os
from typing import Dict, Optional
from pathlib import Path

from dotenv import load_dotenv

# Load variables from a .env file if present (project root).
load_dotenv(dotenv_path=Path(__file__).resolve().parents[1] / ".env")

logger = logging.getLogger(__name__)


def _get_env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.environ.get(name, default)


def _parse_int(value: Optional[str], default: int) -> int:
    try:
        return int(value) if value is not None else default
    except ValueError:
        return default


def _parse_float(value: Optional[str], default: Optional[float]) -> Optional[float]:
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        return default


# ---- Upstream stock page -----------------------------------------------------

STOCK_URL: str = _get_env("STOCK_URL", "https://growagarden.gg/stocks?_rsc=14g5d") or ""

# Key of the JSON object embedded in the RSC stream.
STOCK_DATA_KEY: str = _get_env("STOCK_DATA_KEY", "stockDataSSR") or "stockDataSSR"

# Headers of a browser-originated RSC refetch of the stocks page.
STOCK_HEADERS: Dict[str, str] = {
    "accept": "*/*",
    "accept-language": "en-US,en;q=0.9",
    "next-router-state-tree": (
        "%5B%22%22%2C%7B%22children%22%3A%5B%22stocks%22%2C%7B%22children%22%3A%5B%22__PAGE__%22"
        "%2C%7B%7D%2C%22%2Fstocks%22%2C%22refresh%22%5D%7D%5D%7D%2Cnull%2C%22refetch%22%5D"
    ),
    "priority": "u=1, i",
    "referer": "https://growagarden.gg/stocks",
    "rsc": "1",
    "sec-fetch-dest": "empty",
    "sec-fetch-mode": "cors",
    "sec-fetch-site": "same-origin",
    "user-agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/134.0.0.0 Safari/537.36 OPR/119.0.0.0"
    ),
}

# No timeout unless explicitly configured (requests waits indefinitely).
FETCH_TIMEOUT_SECONDS: Optional[float] = _parse_float(_get_env("FETCH_TIMEOUT_SECONDS"), None)

# Interval in minutes between scheduled stock checks.
CHECK_INTERVAL_MINUTES: int = _parse_int(_get_env("CHECK_INTERVAL_MINUTES", "10"), 10)

# ---- Persistence -------------------------------------------------------------

# Path to the JSON file holding the last fetched payload.
STOCK_FILE: str = _get_env("STOCK_FILE", "stockData.json") or "stockData.json"

# ---- HTTP server -------------------------------------------------------------

HOST: str = _get_env("HOST", "0.0.0.0") or "0.0.0.0"
PORT: int = _parse_int(_get_env("PORT", "3000"), 3000)
# Static files, relative to the working directory unless absolute.
PUBLIC_DIR: str = _get_env("PUBLIC_DIR", "public") or "public"

# Logging level: DEBUG, INFO, WARNING, ERROR.
LOG_LEVEL: str = _get_env("LOG_LEVEL", "INFO") or "INFO"

# ---- Email notifications -----------------------------------------------------

SENDGRID_API_URL: str = _get_env("SENDGRID_API_URL", "https://api.sendgrid.com/v3/mail/send") or ""

# Bound on each provider request, in seconds.
EMAIL_TIMEOUT_SECONDS: float = _parse_float(_get_env("EMAIL_TIMEOUT_SECONDS"), 20.0) or 20.0

# Either a plain key, or an "iv:ciphertext" hex pair plus the 32-byte secret.
SENDGRID_API_KEY: Optional[str] = _get_env("SENDGRID_API_KEY")
SENDGRID_API_KEY_ENCRYPTED: Optional[str] = _get_env("SENDGRID_API_KEY_ENCRYPTED")
ENCRYPTION_KEY: Optional[str] = _get_env("ENCRYPTION_KEY")

# Destination address; also used as the (verified) sender unless EMAIL_FROM is set.
YOUR_EMAIL: str = _get_env("YOUR_EMAIL", "your-email@example.com") or "your-email@example.com"
EMAIL_FROM: str = _get_env("EMAIL_FROM") or YOUR_EMAIL


# ---- Validation --------------------------------------------------------------

def validate() -> None:
    """Validate required configuration parameters."""
    if not STOCK_URL:
        raise RuntimeError("STOCK_URL must be set. See .env.example for details.")
    if CHECK_INTERVAL_MINUTES <= 0:
        raise RuntimeError("CHECK_INTERVAL_MINUTES must be a positive integer.")
    if not (SENDGRID_API_KEY or SENDGRID_API_KEY_ENCRYPTED):
        logger.warning(
            "No SendGrid API key configured; email notifications are disabled."
        )


__all__ = [
    # Upstream
    "STOCK_URL",
    "STOCK_DATA_KEY",
    "STOCK_HEADERS",
    "FETCH_TIMEOUT_SECONDS",
    "CHECK_INTERVAL_MINUTES",
    # Persistence
    "STOCK_FILE",
    # HTTP
    "HOST",
    "PORT",
    "PUBLIC_DIR",
    "LOG_LEVEL",
    # Email
    "SENDGRID_API_URL",
    "EMAIL_TIMEOUT_SECONDS",
    "SENDGRID_API_KEY",
    "SENDGRID_API_KEY_ENCRYPTED",
    "ENCRYPTION_KEY",
    "YOUR_EMAIL",
    "EMAIL_FROM",
    # Helpers
    "validate",
]
