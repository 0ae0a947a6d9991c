from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Sequence

from catalog.models import ListingPage, VideoDetails

# YouTube Data API v3 unit costs
SEARCH_LIST_COST = 100
VIDEOS_LIST_COST = 1


@dataclass
class QuotaUsage:
    """Running tally of remote calls made during one sync."""

    search_calls: int = 0
    videos_calls: int = 0

    @property
    def units(self) -> int:
        return self.search_calls * SEARCH_LIST_COST + self.videos_calls * VIDEOS_LIST_COST


class CatalogProvider(ABC):
    """
    Abstract interface for a remote video catalog.

    Implementations make exactly one remote call per method invocation.
    """

    usage: QuotaUsage

    @abstractmethod
    def list_videos(
        self, channel_id: str, page_token: Optional[str] = None
    ) -> ListingPage:
        """One page of the channel's uploads, newest first."""
        raise NotImplementedError

    @abstractmethod
    def get_details(self, video_ids: Sequence[str]) -> List[VideoDetails]:
        """Duration and statistics for up to 50 ids."""
        raise NotImplementedError
