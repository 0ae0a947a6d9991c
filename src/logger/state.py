from __future__ import annotations

from pathlib import Path
from typing import Optional

INITIALIZED: bool = False
LOG_FILE_PATH: Optional[Path] = None


def reset() -> None:
    """Forget the current run's logging setup (used between test cases)."""
    global INITIALIZED, LOG_FILE_PATH
    INITIALIZED = False
    LOG_FILE_PATH = None
