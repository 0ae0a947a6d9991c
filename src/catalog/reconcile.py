"""
reconcile.py

One catalog sync, end to end:

    load -> fetch new -> refresh existing -> merge/sort/normalize -> save

Strictly sequential. The catalog is only written after every remote call
has succeeded, so a failed run leaves the file exactly as it was.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Sequence, Tuple

import isodate

from catalog.fetcher import fetch_new_videos
from catalog.models import VideoRecord
from catalog.refresher import refresh_existing
from catalog.store import load_records, save_records
from catalog.text import normalize_title
from logger import get_logger
from providers.base import CatalogProvider, QuotaUsage

logger = get_logger(__name__)


@dataclass
class SyncResult:
    path: Path
    existing: int = 0
    new: int = 0
    total: int = 0
    usage: QuotaUsage = field(default_factory=QuotaUsage)


# ----------------------------
# Merge / sort
# ----------------------------


def _sort_key(record: VideoRecord) -> Tuple[bool, float]:
    """
    (parseable, epoch seconds); unparseable timestamps sort last.

    A bare date counts as midnight UTC of that day.
    """
    try:
        dt = isodate.parse_datetime(record.published_at)
    except (ValueError, TypeError):
        try:
            day = isodate.parse_date(record.published_at)
        except (ValueError, TypeError):
            return (False, 0.0)
        dt = datetime(day.year, day.month, day.day)

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return (True, dt.timestamp())


def merge_and_sort(
    existing: Sequence[VideoRecord], new: Sequence[VideoRecord]
) -> List[VideoRecord]:
    """
    Union of `existing` and `new`, newest first, titles normalized.

    The sort is stable: equal timestamps keep their input order. An id
    present in both inputs keeps the existing record, so publish dates
    never change once stored.
    """
    merged: List[VideoRecord] = []
    seen: set[str] = set()

    for record in list(existing) + list(new):
        if record.id in seen:
            logger.warning(f"Duplicate id {record.id} in merge input; keeping first")
            continue
        seen.add(record.id)
        merged.append(record)

    merged.sort(key=_sort_key, reverse=True)

    return [replace(r, title=normalize_title(r.title)) for r in merged]


# ----------------------------
# Full run
# ----------------------------


def run_sync(provider: CatalogProvider, channel_id: str, path: Path) -> SyncResult:
    """
    Bring the catalog at `path` up to date with `channel_id`.

    Raises:
        Exception: Any remote or read failure; the catalog is not written
    """
    path = Path(path)

    logger.info("Reading existing videos...")
    existing = load_records(path)
    existing_ids = {r.id for r in existing}
    logger.info(f"Found {len(existing)} existing videos")

    logger.info("Checking for new videos...")
    new_videos = fetch_new_videos(provider, channel_id, existing_ids)
    logger.info(f"Found {len(new_videos)} new videos")

    logger.info("Updating metadata for existing videos...")
    refreshed = refresh_existing(provider, existing)

    all_videos = merge_and_sort(refreshed, new_videos)
    save_records(path, all_videos)

    result = SyncResult(
        path=path,
        existing=len(existing),
        new=len(new_videos),
        total=len(all_videos),
        usage=provider.usage,
    )

    logger.info(f"Saved {result.total} videos to {path}")
    logger.info(f"Added {result.new} new videos")
    logger.info(f"Updated metadata for {result.existing} existing videos")
    logger.info(
        f"API units used: {result.usage.units} "
        f"({result.usage.search_calls} search.list, {result.usage.videos_calls} videos.list)"
    )
    return result
