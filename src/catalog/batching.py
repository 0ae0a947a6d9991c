"""
batching.py

Pure helpers shared by hydration and refresh:
- chunked(): split ids into request-sized groups
- merge_by_key(): fold response items back onto their records
"""

from __future__ import annotations

from typing import Callable, Dict, Hashable, Iterable, Iterator, List, Sequence, TypeVar

T = TypeVar("T")
U = TypeVar("U")

# videos.list accepts at most 50 ids per call
MAX_BATCH_SIZE = 50


def chunked(items: Sequence[T], size: int = MAX_BATCH_SIZE) -> Iterator[List[T]]:
    """
    Yield contiguous groups of at most `size` items, in order.

    An empty input yields nothing.

    Raises:
        ValueError: If size is not positive
    """
    if size <= 0:
        raise ValueError(f"Batch size must be positive, got {size}")

    for i in range(0, len(items), size):
        yield list(items[i : i + size])


def merge_by_key(
    base: Sequence[T],
    updates: Iterable[U],
    base_key: Callable[[T], Hashable],
    update_key: Callable[[U], Hashable],
    apply: Callable[[T, U], T],
) -> List[T]:
    """
    Return `base` with `apply(item, update)` substituted wherever an update
    shares the item's key.

    Items without a matching update come back unchanged, so a partial
    response never drops or blanks a record. Order and length of `base`
    are preserved. If several updates share a key the last one wins.
    """
    by_key: Dict[Hashable, U] = {}
    for u in updates:
        by_key[update_key(u)] = u

    out: List[T] = []
    for item in base:
        u = by_key.get(base_key(item))
        out.append(item if u is None else apply(item, u))
    return out
