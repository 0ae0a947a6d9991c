from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from catalog.batching import MAX_BATCH_SIZE
from catalog.models import ListingItem, ListingPage, VideoDetails, coerce_count
from logger import get_logger
from providers.base import CatalogProvider, QuotaUsage
from providers.youtube.api_manager import execute_request
from providers.youtube.client import build_youtube_client

logger = get_logger(__name__)

PAGE_SIZE = 50


def _listing_item(raw: Dict[str, Any]) -> Optional[ListingItem]:
    rid = raw.get("id") or {}
    video_id = rid.get("videoId") if isinstance(rid, dict) else None
    if not isinstance(video_id, str) or not video_id:
        return None

    snippet = raw.get("snippet") or {}
    return ListingItem(
        id=video_id,
        title=str(snippet.get("title") or ""),
        published_at=str(snippet.get("publishedAt") or ""),
    )


def _video_details(raw: Dict[str, Any]) -> Optional[VideoDetails]:
    video_id = raw.get("id")
    if not isinstance(video_id, str) or not video_id:
        return None

    content = raw.get("contentDetails")
    stats = raw.get("statistics")

    duration = None
    if isinstance(content, dict):
        duration = str(content.get("duration") or "")

    view_count = like_count = None
    if isinstance(stats, dict):
        view_count = coerce_count(stats.get("viewCount"))
        like_count = coerce_count(stats.get("likeCount"))

    return VideoDetails(
        id=video_id,
        duration=duration,
        view_count=view_count,
        like_count=like_count,
    )


class YouTubeCatalogProvider(CatalogProvider):
    """CatalogProvider backed by search.list + videos.list."""

    def __init__(self, youtube: Any):
        self.youtube = youtube
        self.usage = QuotaUsage()

    @classmethod
    def from_api_key(cls, api_key: str) -> "YouTubeCatalogProvider":
        return cls(build_youtube_client(api_key))

    def list_videos(
        self, channel_id: str, page_token: Optional[str] = None
    ) -> ListingPage:
        def _op() -> Any:
            return (
                self.youtube.search()
                .list(
                    part="id,snippet",
                    channelId=channel_id,
                    maxResults=PAGE_SIZE,
                    order="date",
                    type="video",
                    pageToken=page_token,
                )
                .execute()
            )

        self.usage.search_calls += 1
        resp = execute_request(_op, "search.list")

        items = [i for i in map(_listing_item, resp.get("items") or []) if i]
        return ListingPage(items=items, next_page_token=resp.get("nextPageToken") or None)

    def get_details(self, video_ids: Sequence[str]) -> List[VideoDetails]:
        ids = list(video_ids)
        if len(ids) > MAX_BATCH_SIZE:
            raise ValueError(
                f"videos.list accepts at most {MAX_BATCH_SIZE} ids, got {len(ids)}"
            )
        if not ids:
            return []

        def _op() -> Any:
            return (
                self.youtube.videos()
                .list(
                    part="contentDetails,statistics",
                    id=",".join(ids),
                    maxResults=MAX_BATCH_SIZE,
                )
                .execute()
            )

        self.usage.videos_calls += 1
        resp = execute_request(_op, "videos.list")

        return [d for d in map(_video_details, resp.get("items") or []) if d]
