import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv

_ENV_PATH = Path(__file__).resolve().parents[1] / ".env"
_DOTENV_LOADED = False
_LOGGING_CONFIGURED = False

DEFAULT_MINUTES_PER_DAY = 480
DEFAULT_TRAVEL_DAY_CREDIT = 1.0


def ensure_env_loaded() -> None:
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    load_dotenv(dotenv_path=_ENV_PATH, override=False)
    _DOTENV_LOADED = True


def _to_int(value: Optional[str], default: int) -> int:
    if value is None or not value.strip():
        return default
    try:
        parsed = int(value.strip())
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _to_float(value: Optional[str], default: float) -> float:
    if value is None or not value.strip():
        return default
    try:
        parsed = float(value.strip())
    except ValueError:
        return default
    return parsed if parsed >= 0 else default


def get_engine_settings() -> Dict[str, Any]:
    ensure_env_loaded()
    return {
        "log_level": (os.getenv("DTR_LOG_LEVEL") or "INFO").strip().upper() or "INFO",
        "minutes_per_day": _to_int(os.getenv("DTR_MINUTES_PER_DAY"), DEFAULT_MINUTES_PER_DAY),
        "travel_day_credit": _to_float(os.getenv("DTR_TRAVEL_DAY_CREDIT"), DEFAULT_TRAVEL_DAY_CREDIT),
    }


def configure_logging() -> None:
    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return
    level = getattr(logging, get_engine_settings()["log_level"], logging.INFO)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    _LOGGING_CONFIGURED = True
