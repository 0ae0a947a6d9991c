"""
Catalogarr catalog core.

Everything needed to reconcile a local channel catalog with the remote
listing: the on-disk codec, title normalization, the incremental fetcher,
the statistics refresher and the merge/sort step.

No side effects or remote calls occur at package import time.
"""
from __future__ import annotations

__all__ = [
    "batching",
    "fetcher",
    "models",
    "reconcile",
    "refresher",
    "store",
    "text",
]
