#!/usr/bin/env python3
"""
catalogarr.py

Entry point: sync the configured channel into the local catalog file.

Exit codes:
  0  catalog written
  1  remote or I/O failure (catalog untouched)
  2  configuration error
"""

from __future__ import annotations

import argparse
from typing import List, Optional

from bootstrap import bootstrap_base_env, bootstrap_run_context


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="catalogarr",
        description="Incrementally sync a YouTube channel's uploads into a local CSV catalog.",
    )
    p.add_argument(
        "--channel-id",
        help="Channel to sync (default: CATALOGARR_CHANNEL_ID or built-in channel)",
    )
    p.add_argument(
        "--output",
        help="Catalog file path (default: CATALOGARR_OUTPUT_FILE or videos.txt)",
    )

    verbosity = p.add_mutually_exclusive_group()
    verbosity.add_argument("--verbose", action="store_true", help="Debug logging")
    verbosity.add_argument("--quiet", action="store_true", help="No console output")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    bootstrap_base_env()

    args = build_parser().parse_args(argv)

    bootstrap_run_context(
        command="sync",
        channel_id=args.channel_id,
        output_file=args.output,
        verbose=True if args.verbose else None,
        quiet=True if args.quiet else None,
    )

    # Initialize logging AFTER run-context env stamping
    from logger import init_logging, get_logger

    init_logging()
    log = get_logger("catalogarr")

    from env import ConfigError, get_env

    try:
        env = get_env()
    except ConfigError as e:
        log.error(f"Configuration error: {e}")
        return 2

    log.info(f"Catalogarr starting (channel {env.channel_id} -> {env.output_file})")
    for section, values in env.as_dict().items():
        log.debug(f"{section}: {values}")

    from catalog.reconcile import run_sync
    from providers.youtube.provider import YouTubeCatalogProvider

    try:
        provider = YouTubeCatalogProvider.from_api_key(env.youtube_api_key)
        run_sync(provider, env.channel_id, env.output_file)
    except Exception as e:
        log.error(f"Error: {e}")
        log.debug("Sync failed", exc_info=True)
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
