from __future__ import annotations

import logging
from pathlib import Path


def enforce_retention(log_dir: Path, keep: int) -> None:
    """Keep only the `keep` newest run logs in `log_dir`."""
    if keep <= 0:
        return

    logs = sorted(
        log_dir.glob("*.log"),
        key=lambda p: p.stat().st_mtime,
        reverse=True,
    )

    for old in logs[keep:]:
        try:
            old.unlink()
        except OSError as e:
            logging.getLogger(__name__).debug(f"Could not prune {old}: {e}")
