import logging
import os
from typing import Optional

from dotenv import load_dotenv

from .logic.constants import DEFAULT_DEBOUNCE_MS

load_dotenv()


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}")


def _bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


DEBOUNCE_MS = _int_env("PROGRAM_DISCOVERY_DEBOUNCE_MS", DEFAULT_DEBOUNCE_MS)
if DEBOUNCE_MS < 0:
    raise RuntimeError("PROGRAM_DISCOVERY_DEBOUNCE_MS must not be negative")

VALIDATE_CATALOG = _bool_env("PROGRAM_DISCOVERY_VALIDATE_CATALOG", False)

# Country whose rules apply when the applicant's country has none (e.g. "International")
SCHOLARSHIP_FALLBACK_COUNTRY: Optional[str] = os.getenv("PROGRAM_DISCOVERY_SCHOLARSHIP_FALLBACK_COUNTRY") or None

LOG_LEVEL = os.getenv("PROGRAM_DISCOVERY_LOG_LEVEL", "INFO").upper()


def configure_logging(level: Optional[str] = None) -> None:
    logging.basicConfig(
        level=getattr(logging, level or LOG_LEVEL, logging.INFO),
        format="%(levelname)s - %(name)s - %(message)s",
    )
