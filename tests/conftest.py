import logging
from typing import Dict, List, Optional, Sequence

import pytest

from catalog.models import ListingItem, ListingPage, VideoDetails
from providers.base import CatalogProvider, QuotaUsage


@pytest.fixture(autouse=True)
def clean_env_and_logging(tmp_path, monkeypatch):
    """
    Ensure tests don't leak env, cached Environment, or logger handlers.
    """
    keys = [
        "CATALOGARR_LOGS_DIR",
        "CATALOGARR_COMMAND",
        "CATALOGARR_RUN_ID",
        "CATALOGARR_VERBOSE",
        "CATALOGARR_QUIET",
        "CATALOGARR_CHANNEL_ID",
        "CATALOGARR_OUTPUT_FILE",
        "YOUTUBE_API_KEY",
        "LOG_LEVEL",
        "LOG_RETENTION",
    ]
    for k in keys:
        monkeypatch.delenv(k, raising=False)

    monkeypatch.setenv("CATALOGARR_LOGS_DIR", str(tmp_path / "logs"))

    import env
    import logger.state

    env.reset_env_caches()
    logger.state.reset()

    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)

    yield

    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()


class FakeProvider(CatalogProvider):
    """
    In-memory CatalogProvider.

    pages: listing pages, served in order; the last one carries no token
    details: id -> VideoDetails served by get_details
    """

    def __init__(
        self,
        pages: Optional[List[List[ListingItem]]] = None,
        details: Optional[Dict[str, VideoDetails]] = None,
        fail_list_on_page: Optional[int] = None,
        fail_details_on_call: Optional[int] = None,
    ):
        self.pages = pages if pages is not None else [[]]
        self.details = dict(details or {})
        self.fail_list_on_page = fail_list_on_page
        self.fail_details_on_call = fail_details_on_call
        self.usage = QuotaUsage()
        self.list_calls: List[Optional[str]] = []
        self.detail_calls: List[List[str]] = []

    def list_videos(self, channel_id: str, page_token: Optional[str] = None) -> ListingPage:
        index = 0 if page_token is None else int(page_token)
        self.list_calls.append(page_token)
        self.usage.search_calls += 1

        if self.fail_list_on_page == index:
            raise RuntimeError("listing failed")

        next_token = str(index + 1) if index + 1 < len(self.pages) else None
        return ListingPage(items=list(self.pages[index]), next_page_token=next_token)

    def get_details(self, video_ids: Sequence[str]) -> List[VideoDetails]:
        ids = list(video_ids)
        assert 0 < len(ids) <= 50
        self.detail_calls.append(ids)
        self.usage.videos_calls += 1

        if self.fail_details_on_call == len(self.detail_calls):
            raise RuntimeError("details failed")

        return [self.details[i] for i in ids if i in self.details]


@pytest.fixture
def make_provider():
    return FakeProvider


def item(video_id: str, published_at: str, title: str = "") -> ListingItem:
    return ListingItem(id=video_id, title=title or f"Video {video_id}", published_at=published_at)


@pytest.fixture
def make_item():
    return item
