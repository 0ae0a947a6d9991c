"""
models.py

Plain data carried between the codec, the provider and the sync stages.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class VideoRecord:
    """One row of the local catalog."""

    id: str
    title: str
    published_at: str
    duration: str = ""
    view_count: Optional[int] = None
    like_count: Optional[int] = None


@dataclass(frozen=True)
class ListingItem:
    """Identity fields returned by the channel listing."""

    id: str
    title: str
    published_at: str

    def to_record(self) -> VideoRecord:
        # Provisional until hydrated by a detail call.
        return VideoRecord(id=self.id, title=self.title, published_at=self.published_at)


@dataclass(frozen=True)
class ListingPage:
    items: List[ListingItem] = field(default_factory=list)
    next_page_token: Optional[str] = None


@dataclass(frozen=True)
class VideoDetails:
    """
    Detail response for one id.

    None means the provider sent no value for that field, which is
    different from a zero count.
    """

    id: str
    duration: Optional[str] = None
    view_count: Optional[int] = None
    like_count: Optional[int] = None


def coerce_count(value: object) -> int:
    """Statistics arrive as strings; anything missing or non-numeric is 0."""
    try:
        n = int(str(value).strip())
    except (TypeError, ValueError):
        return 0
    return n if n >= 0 else 0
