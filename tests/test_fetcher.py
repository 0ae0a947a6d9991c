import pytest

from catalog.fetcher import fetch_new_videos, iter_listing_pages
from catalog.models import VideoDetails, VideoRecord


def test_pages_walked_until_no_token(make_provider, make_item):
    provider = make_provider(
        pages=[[make_item("a", "2021-01-03T00:00:00Z")], [make_item("b", "2021-01-02T00:00:00Z")], []]
    )

    pages = list(iter_listing_pages(provider, "UC1"))

    assert len(pages) == 3
    assert provider.list_calls == [None, "1", "2"]
    assert pages[-1].next_page_token is None


def test_page_iterator_is_lazy(make_provider, make_item):
    provider = make_provider(pages=[[make_item("a", "2021-01-01T00:00:00Z")], []])

    it = iter_listing_pages(provider, "UC1")
    assert provider.list_calls == []

    next(it)
    assert provider.list_calls == [None]


def test_empty_channel_skips_detail_calls(make_provider):
    provider = make_provider(pages=[[]])

    assert fetch_new_videos(provider, "UC1", set()) == []
    assert provider.detail_calls == []
    assert provider.usage.search_calls == 1


def test_only_unseen_ids_are_hydrated(make_provider, make_item):
    provider = make_provider(
        pages=[[make_item("b", "2021-01-02T00:00:00Z", "B"), make_item("a", "2020-01-01T00:00:00Z")]],
        details={"b": VideoDetails("b", "PT2M", 10, 2)},
    )

    new = fetch_new_videos(provider, "UC1", {"a"})

    assert new == [VideoRecord("b", "B", "2021-01-02T00:00:00Z", "PT2M", 10, 2)]
    assert provider.detail_calls == [["b"]]


def test_all_known_means_no_detail_call(make_provider, make_item):
    provider = make_provider(pages=[[make_item("a", "2020-01-01T00:00:00Z")]])

    assert fetch_new_videos(provider, "UC1", {"a"}) == []
    assert provider.detail_calls == []


def test_hydration_batches_at_most_fifty(make_provider, make_item):
    ids = [f"v{i:03d}" for i in range(120)]
    pages = [
        [make_item(i, "2021-01-01T00:00:00Z") for i in ids[:50]],
        [make_item(i, "2021-01-01T00:00:00Z") for i in ids[50:100]],
        [make_item(i, "2021-01-01T00:00:00Z") for i in ids[100:]],
    ]
    provider = make_provider(pages=pages, details={i: VideoDetails(i, "PT1M", 1, 1) for i in ids})

    new = fetch_new_videos(provider, "UC1", set())

    assert [r.id for r in new] == ids
    assert [len(c) for c in provider.detail_calls] == [50, 50, 20]
    assert provider.usage.search_calls == 3
    assert provider.usage.videos_calls == 3


def test_missing_counts_coerced_to_zero(make_provider, make_item):
    provider = make_provider(
        pages=[[make_item("x", "2021-01-01T00:00:00Z")]],
        details={"x": VideoDetails("x", "PT5S", None, None)},
    )

    [rec] = fetch_new_videos(provider, "UC1", set())

    assert rec.duration == "PT5S"
    assert rec.view_count == 0
    assert rec.like_count == 0


def test_item_repeated_across_pages_added_once(make_provider, make_item):
    dup = make_item("d", "2021-01-01T00:00:00Z")
    provider = make_provider(pages=[[dup], [dup]], details={"d": VideoDetails("d", "PT1M", 3, 0)})

    new = fetch_new_videos(provider, "UC1", set())

    assert [r.id for r in new] == ["d"]


def test_listing_failure_propagates(make_provider, make_item):
    provider = make_provider(
        pages=[[make_item("a", "2021-01-01T00:00:00Z")], []],
        fail_list_on_page=1,
    )

    with pytest.raises(RuntimeError, match="listing failed"):
        fetch_new_videos(provider, "UC1", set())
    assert provider.detail_calls == []


def test_hydration_failure_propagates(make_provider, make_item):
    ids = [f"v{i}" for i in range(60)]
    provider = make_provider(
        pages=[[make_item(i, "2021-01-01T00:00:00Z") for i in ids]],
        fail_details_on_call=2,
    )

    with pytest.raises(RuntimeError, match="details failed"):
        fetch_new_videos(provider, "UC1", set())
