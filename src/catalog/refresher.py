"""
refresher.py

Refresh volatile fields (duration, views, likes) of already-known records.
"""

from __future__ import annotations

from dataclasses import replace
from typing import List, Sequence

from catalog.batching import MAX_BATCH_SIZE, chunked, merge_by_key
from catalog.models import VideoDetails, VideoRecord
from logger import get_logger
from providers.base import CatalogProvider

logger = get_logger(__name__)


def apply_refresh(record: VideoRecord, details: VideoDetails) -> VideoRecord:
    """Overwrite only the fields the provider actually sent."""
    changes = {}
    if details.duration:
        changes["duration"] = details.duration
    if details.view_count is not None:
        changes["view_count"] = details.view_count
    if details.like_count is not None:
        changes["like_count"] = details.like_count

    return replace(record, **changes) if changes else record


def refresh_existing(
    provider: CatalogProvider, records: Sequence[VideoRecord]
) -> List[VideoRecord]:
    """
    Re-fetch statistics for `records` in batches of 50.

    Ids the provider does not return keep their previous values. Output
    has the same length, ids and order as the input.

    Raises:
        Exception: Whatever the provider raised, after logging it
    """
    total = len(records)
    refreshed: List[VideoRecord] = []

    try:
        for n, batch in enumerate(chunked(records, MAX_BATCH_SIZE)):
            details = provider.get_details([r.id for r in batch])

            missing = len(batch) - len({d.id for d in details} & {r.id for r in batch})
            if missing:
                logger.debug(f"{missing} ids not returned by provider; keeping stored stats")

            refreshed.extend(
                merge_by_key(
                    batch,
                    details,
                    base_key=lambda r: r.id,
                    update_key=lambda d: d.id,
                    apply=apply_refresh,
                )
            )

            start = n * MAX_BATCH_SIZE
            logger.info(
                f"Updated metadata for videos {start + 1} to {start + len(batch)} of {total}"
            )

    except Exception as e:
        logger.error(f"Error updating existing videos: {e}")
        raise

    return refreshed
