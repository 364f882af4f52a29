"""Project-level configuration and path helpers."""

import math
from pathlib import Path
from typing import Union

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
LOGS_DIR = PROJECT_ROOT / "04_logs"
DEFAULT_LOG_PATH = LOGS_DIR / "app.log"
DEFAULT_PUBLIC_DIR = PROJECT_ROOT / "public"

# Seconds a long-poll request is held open before answering with no changes
DEFAULT_POLL_TIMEOUT = 90.0

# Seconds uvicorn waits for open requests (held long polls included) on shutdown
DEFAULT_SHUTDOWN_TIMEOUT = 5.0


PathLike = Union[str, Path]


def resolve_public_dir(env_value: PathLike | None = None) -> Path:
    """Resolve PUBLIC_DIR to an absolute path."""
    if not env_value:
        return DEFAULT_PUBLIC_DIR

    candidate = Path(env_value)
    return candidate if candidate.is_absolute() else PROJECT_ROOT / candidate


def _resolve_seconds(name: str, env_value: str | float | None, default: float) -> float:
    if env_value is None or env_value == "":
        return default

    seconds = float(env_value)
    if not math.isfinite(seconds) or seconds <= 0:
        raise ValueError(f"{name} must be a positive number, got {env_value!r}")
    return seconds


def resolve_poll_timeout(env_value: str | float | None = None) -> float:
    """Resolve POLL_TIMEOUT (seconds) to a positive float."""
    return _resolve_seconds("POLL_TIMEOUT", env_value, DEFAULT_POLL_TIMEOUT)


def resolve_shutdown_timeout(env_value: str | float | None = None) -> float:
    """Resolve SHUTDOWN_TIMEOUT (seconds) to a positive float."""
    return _resolve_seconds("SHUTDOWN_TIMEOUT", env_value, DEFAULT_SHUTDOWN_TIMEOUT)
