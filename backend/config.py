"""
Runtime settings, read from the environment.

Values may be defined in a .env file in the backend root, for example:

FETCH_TIMEOUT_SECONDS=12
RELAY_URL=https://api.allorigins.win/get
LOG_LEVEL=DEBUG

The app loads environment variables automatically using python-dotenv.
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(dotenv_path=Path(__file__).resolve().parent / ".env")

FETCH_TIMEOUT_SECONDS = float(os.getenv("FETCH_TIMEOUT_SECONDS", "12"))
RELAY_URL = os.getenv("RELAY_URL", "").strip()
USER_AGENT = os.getenv("USER_AGENT", "").strip() or (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/122.0.0.0 Safari/537.36"
)
CORS_ORIGINS = [
    origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()
] or ["*"]
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Set up root logging once for the API and the CLI."""
    logging.basicConfig(level=(level or LOG_LEVEL).upper(), format=LOG_FORMAT)
