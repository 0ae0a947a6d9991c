from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

# ------------------------------------------------------------
# Paths
# ------------------------------------------------------------

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent

DEFAULT_CHANNEL_ID = "UC7IcJI8PUf5Z3zKxnZvTBog"
DEFAULT_OUTPUT_FILE = "videos.txt"

# ------------------------------------------------------------
# Errors / helpers
# ------------------------------------------------------------


class ConfigError(RuntimeError):
    pass


def _require(name: str) -> str:
    v = os.environ.get(name)
    if not v or not v.strip():
        raise ConfigError(f"Missing required environment variable: {name}")
    return v.strip()


def _as_bool(v: str) -> bool:
    return v.strip().lower() in {"1", "true", "yes", "on"}


def _as_int(v: str, default: int) -> int:
    try:
        return int(v)
    except Exception:
        return default


def logs_dir() -> Path:
    """Resolve the log root. Read on every call so tests can repoint it."""
    return (
        Path(os.environ.get("CATALOGARR_LOGS_DIR", PROJECT_ROOT / "logs"))
        .expanduser()
        .resolve()
    )


# ------------------------------------------------------------
# Logging environment (SAFE ANYWHERE)
# ------------------------------------------------------------


@dataclass(frozen=True)
class LoggingEnvironment:
    log_level: str
    log_retention: int
    verbose: bool
    quiet: bool


def get_logging_env() -> LoggingEnvironment:
    return LoggingEnvironment(
        log_level=os.environ.get("LOG_LEVEL", "INFO"),
        log_retention=_as_int(os.environ.get("LOG_RETENTION", "30"), 30),
        verbose=_as_bool(os.environ.get("CATALOGARR_VERBOSE", "0")),
        quiet=_as_bool(os.environ.get("CATALOGARR_QUIET", "0")),
    )


# ------------------------------------------------------------
# Full runtime environment (SYNC ONLY)
# ------------------------------------------------------------


class Environment:
    def __init__(self):
        self._logging = get_logging_env()

        # ---- REQUIRED API ----
        self.youtube_api_key = _require("YOUTUBE_API_KEY")

        # ---- SYNC TARGET ----
        self.channel_id = (
            os.environ.get("CATALOGARR_CHANNEL_ID", "").strip() or DEFAULT_CHANNEL_ID
        )
        self.output_file = Path(
            os.environ.get("CATALOGARR_OUTPUT_FILE", "").strip() or DEFAULT_OUTPUT_FILE
        ).expanduser()

        self.command = os.environ.get("CATALOGARR_COMMAND", "sync")

    def as_dict(self) -> dict:
        return {
            "Logging": {
                "log_level": self.log_level,
                "log_retention": self.log_retention,
                "verbose": self.verbose,
                "quiet": self.quiet,
            },
            "Sync": {
                "command": self.command,
                "channel_id": self.channel_id,
                "output_file": str(self.output_file),
            },
            "API": {
                "youtube_api_key": "set" if self.youtube_api_key else "missing",
            },
        }

    # ---- logging passthrough ----
    @property
    def log_level(self) -> str:
        return self._logging.log_level

    @property
    def log_retention(self) -> int:
        return self._logging.log_retention

    @property
    def verbose(self) -> bool:
        return self._logging.verbose

    @property
    def quiet(self) -> bool:
        return self._logging.quiet


_ENV: Optional[Environment] = None


def reset_env_caches() -> None:
    """Invalidate cached views of environment variables."""
    global _ENV
    _ENV = None


def get_env() -> Environment:
    global _ENV
    if _ENV is None:
        _ENV = Environment()
    return _ENV
