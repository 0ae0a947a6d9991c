"""bootstrap.py

Process bootstrap for Catalogarr.

This module is intentionally tiny and side-effectful.

Rules:
1) Only bootstrap is allowed to *mutate* os.environ for shared run context.
2) Call bootstrap_base_env() once at the true entrypoint.
3) Call bootstrap_run_context() after argparse parsing, before init_logging().

Everything else should treat environment variables as the source of truth.
"""

from __future__ import annotations

import os
from datetime import datetime
from pathlib import Path

from dotenv import load_dotenv

from env import PROJECT_ROOT, reset_env_caches


_BOOTSTRAPPED = False


def bootstrap_base_env(project_root: Path = PROJECT_ROOT) -> None:
    """
    Load optional dotenv files. Existing environment variables always win.

    Order: config/.env, then .env at the project root.
    """
    global _BOOTSTRAPPED
    if _BOOTSTRAPPED:
        return

    for dotenv_path in (project_root / "config" / ".env", project_root / ".env"):
        if dotenv_path.exists():
            load_dotenv(dotenv_path, override=False)

    os.environ.setdefault(
        "CATALOGARR_RUN_ID",
        datetime.now().strftime("%Y-%m-%d_%H-%M-%S"),
    )

    reset_env_caches()
    _BOOTSTRAPPED = True


def bootstrap_run_context(
    *,
    command: str,
    channel_id: str | None = None,
    output_file: str | None = None,
    verbose: bool | None = None,
    quiet: bool | None = None,
) -> None:
    """Stamp CLI overrides into the environment used by logging + sync."""

    os.environ["CATALOGARR_COMMAND"] = command

    if channel_id:
        os.environ["CATALOGARR_CHANNEL_ID"] = channel_id
    if output_file:
        os.environ["CATALOGARR_OUTPUT_FILE"] = output_file

    if verbose is not None:
        os.environ["CATALOGARR_VERBOSE"] = "1" if verbose else "0"
    if quiet is not None:
        os.environ["CATALOGARR_QUIET"] = "1" if quiet else "0"

    # Context changes must invalidate cached env views.
    reset_env_caches()
