"""
Centralised configuration constants and environment helpers.
"""

import logging
import os
import sys

from dotenv import load_dotenv

load_dotenv()

# ── Upstream mapping platform ────────────────────────────────────────
ARCGIS_PORTAL_URL = os.getenv("ARCGIS_PORTAL_URL", "https://www.arcgis.com").rstrip("/")
PLATFORM_TIMEOUT_SECONDS = float(os.getenv("PLATFORM_TIMEOUT_SECONDS", "10"))
ITEMS_PATH = "/sharing/rest/content/items"

# ── Map access flags ─────────────────────────────────────────────────
ACCESS_PUBLIC = "public"
ACCESS_PRIVATE = "private"
SUPPORTED_ACCESS_VALUES = {ACCESS_PUBLIC, ACCESS_PRIVATE}

# ── API server ───────────────────────────────────────────────────────
SECRET_KEY = os.getenv("JWT_SECRET_KEY", "dev-secret-key-change-in-production")
TOKEN_EXPIRY_HOURS = 24

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def get_env(name: str) -> str:
    """Return an environment variable or exit with an error message."""
    value = os.getenv(name)
    if not value:
        print(f"ERROR: env var {name} is not set", file=sys.stderr)
        sys.exit(1)
    return value


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Route library diagnostics to stderr at the configured level."""
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
