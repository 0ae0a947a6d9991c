import pytest

from catalog.models import VideoDetails, VideoRecord
from catalog.refresher import refresh_existing


def _rec(vid, views=5, likes=1, duration="PT1M"):
    return VideoRecord(vid, f"T {vid}", "2020-01-01T00:00:00Z", duration, views, likes)


def test_counts_overwritten_for_returned_ids(make_provider):
    provider = make_provider(details={"a": VideoDetails("a", None, 7, 1)})

    [rec] = refresh_existing(provider, [_rec("a")])

    assert rec.view_count == 7
    assert rec.like_count == 1
    assert rec.duration == "PT1M"


def test_duration_refreshed_when_returned(make_provider):
    provider = make_provider(details={"a": VideoDetails("a", "PT3M", 9, 2)})

    [rec] = refresh_existing(provider, [_rec("a")])

    assert rec.duration == "PT3M"


def test_missing_ids_keep_prior_stats(make_provider):
    provider = make_provider(details={"b": VideoDetails("b", "PT2M", 100, 10)})
    records = [_rec("a", views=5, likes=1), _rec("b")]

    out = refresh_existing(provider, records)

    assert out[0] == records[0]
    assert out[1].view_count == 100


def test_shape_and_order_preserved(make_provider):
    records = [_rec(f"id{i}") for i in range(75)]
    provider = make_provider(details={f"id{i}": VideoDetails(f"id{i}", None, i, 0) for i in range(0, 75, 2)})

    out = refresh_existing(provider, records)

    assert [r.id for r in out] == [r.id for r in records]
    assert [len(c) for c in provider.detail_calls] == [50, 25]


def test_empty_dataset_makes_no_calls(make_provider):
    provider = make_provider()

    assert refresh_existing(provider, []) == []
    assert provider.detail_calls == []


def test_batch_failure_aborts_refresh(make_provider):
    records = [_rec(f"id{i}") for i in range(51)]
    provider = make_provider(fail_details_on_call=2)

    with pytest.raises(RuntimeError):
        refresh_existing(provider, records)
