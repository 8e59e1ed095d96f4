import os
from typing import Optional

from dotenv import load_dotenv

from models.settings import NLDSettings

# Load environment variables from .env
load_dotenv()

_MISSING = object()


def get_env_var(name: str, default=_MISSING) -> str:
    """Get environment variable or raise a clear error if missing."""
    value = os.getenv(name)
    if value is None or value == "":
        if default is _MISSING:
            raise RuntimeError(
                f"❌ Missing required environment variable: {name}\n"
                f"👉 Did you copy .env.example to .env and fill in your keys?"
            )
        return default
    return value


# Optional vars (with defaults)
DEBUG = os.getenv("DEBUG", "false").lower() == "true"
PORT = int(os.getenv("PORT", "8000"))


def load_settings() -> NLDSettings:
    """Build a settings snapshot from the environment."""
    return NLDSettings(
        date_format=get_env_var("NLDATES_DATE_FORMAT", "YYYY-MM-DD"),
        time_format=get_env_var("NLDATES_TIME_FORMAT", "HH:mm"),
        # Separator may legitimately be a single space
        separator=os.getenv("NLDATES_SEPARATOR", " "),
        week_start=get_env_var("NLDATES_WEEK_START", "locale-default"),
    )


# -----------------------------
# Active settings (swapped atomically, never mutated)
# -----------------------------
_settings: Optional[NLDSettings] = None


def get_settings() -> NLDSettings:
    global _settings
    current = _settings
    if current is None:
        current = load_settings()
        _settings = current
    return current


def update_settings(**changes) -> NLDSettings:
    """Replace the active snapshot with a validated copy carrying `changes`."""
    global _settings
    updated = NLDSettings(**{**get_settings().model_dump(), **changes})
    _settings = updated
    return updated


def reset_settings() -> None:
    global _settings
    _settings = None
