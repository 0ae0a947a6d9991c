"""
fetcher.py

Incremental discovery of uploads not yet in the local catalog.

Flow:
1) Walk every listing page (newest first) and keep unseen ids
2) Hydrate those provisional records with duration + statistics,
   one videos.list call per 50 ids

Any remote failure aborts the whole fetch; nothing partial is returned.
"""

from __future__ import annotations

from dataclasses import replace
from typing import AbstractSet, Iterator, List, Optional

from catalog.batching import MAX_BATCH_SIZE, chunked, merge_by_key
from catalog.models import ListingPage, VideoDetails, VideoRecord
from logger import get_logger
from providers.base import CatalogProvider

logger = get_logger(__name__)


def iter_listing_pages(
    provider: CatalogProvider, channel_id: str
) -> Iterator[ListingPage]:
    """
    Lazily yield listing pages until one arrives without a continuation token.

    The absent token is the only stop condition; the generator is
    single-use.
    """
    page_token: Optional[str] = None

    while True:
        page = provider.list_videos(channel_id, page_token)
        yield page

        page_token = page.next_page_token
        if not page_token:
            return


def hydrate(record: VideoRecord, details: VideoDetails) -> VideoRecord:
    """First fill of a provisional record; absent counts become 0."""
    return replace(
        record,
        duration=details.duration or "",
        view_count=details.view_count or 0,
        like_count=details.like_count or 0,
    )


def collect_unseen(
    provider: CatalogProvider, channel_id: str, known_ids: AbstractSet[str]
) -> List[VideoRecord]:
    """Provisional records for every listed id not in `known_ids`."""
    found: List[VideoRecord] = []
    seen = set(known_ids)
    checked = 0

    for page in iter_listing_pages(provider, channel_id):
        checked += len(page.items)
        for item in page.items:
            if item.id in seen:
                continue
            seen.add(item.id)
            found.append(item.to_record())

        logger.info(
            f"Checked {checked} videos, found {len(found)} new ones so far..."
        )

    return found


def fetch_new_videos(
    provider: CatalogProvider, channel_id: str, known_ids: AbstractSet[str]
) -> List[VideoRecord]:
    """
    Discover and hydrate uploads of `channel_id` missing from `known_ids`.

    Returns:
        New records in listing order (newest first), fully hydrated

    Raises:
        Exception: Whatever the provider raised, after logging it
    """
    try:
        new_videos = collect_unseen(provider, channel_id, known_ids)
        if not new_videos:
            return []

        total = len(new_videos)
        hydrated: List[VideoRecord] = []
        for n, batch in enumerate(chunked(new_videos, MAX_BATCH_SIZE)):
            details = provider.get_details([r.id for r in batch])
            hydrated.extend(
                merge_by_key(
                    batch,
                    details,
                    base_key=lambda r: r.id,
                    update_key=lambda d: d.id,
                    apply=hydrate,
                )
            )

            start = n * MAX_BATCH_SIZE
            logger.info(
                f"Got full details for videos {start + 1} to {start + len(batch)} of {total}"
            )

        return hydrated

    except Exception as e:
        logger.error(f"Error fetching new videos for channel {channel_id}: {e}")
        raise
