"""
store.py

Flat-file catalog codec.

The catalog is a header-described CSV:

    "ID","Title","Published At","Duration","ViewCount","LikeCount"

Reading is lenient (trimmed cells, ragged rows, blank lines); writing
always emits the fixed column order above and fully replaces the file.
"""

from __future__ import annotations

import csv
import io
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence

from catalog.models import VideoRecord
from logger import get_logger

logger = get_logger(__name__)


class CatalogFormatError(ValueError):
    """Raised when the catalog header cannot be mapped to records."""


COLUMNS = ["ID", "Title", "Published At", "Duration", "ViewCount", "LikeCount"]


# ============================================================
# Read
# ============================================================


def _parse_count(raw: str) -> Optional[int]:
    raw = raw.strip()
    if not raw:
        return None
    try:
        n = int(raw)
    except (ValueError, OverflowError):
        try:
            n = int(float(raw))
        except (ValueError, OverflowError):
            return None
    return n if n >= 0 else None


def _row_to_record(row: Dict[str, str]) -> Optional[VideoRecord]:
    video_id = row.get("ID", "")
    if not video_id:
        return None

    return VideoRecord(
        id=video_id,
        title=row.get("Title", ""),
        published_at=row.get("Published At", ""),
        duration=row.get("Duration", ""),
        view_count=_parse_count(row.get("ViewCount", "")),
        like_count=_parse_count(row.get("LikeCount", "")),
    )


def parse_records(text: str) -> List[VideoRecord]:
    """
    Parse catalog text into records.

    - The first non-blank row is the header; column order is taken from it
    - Short rows are padded with empty cells, extra cells are ignored
    - Rows without an ID are skipped
    - Duplicate IDs keep their first occurrence

    Raises:
        CatalogFormatError: Data rows present but the header has no ID column
    """
    if text.startswith("\ufeff"):
        text = text[1:]

    reader = csv.reader(io.StringIO(text), skipinitialspace=True)

    header: Optional[List[str]] = None
    records: List[VideoRecord] = []
    seen: set[str] = set()

    for line_no, raw in enumerate(reader, start=1):
        cells = [c.strip() for c in raw]
        if not any(cells):
            continue

        if header is None:
            header = cells
            continue

        if "ID" not in header:
            raise CatalogFormatError(
                f"Line {line_no}: catalog header has no ID column: {header}"
            )

        if len(cells) != len(header):
            logger.debug(
                f"Line {line_no}: expected {len(header)} columns, got {len(cells)}"
            )
        cells += [""] * (len(header) - len(cells))

        record = _row_to_record(dict(zip(header, cells)))
        if record is None:
            logger.debug(f"Line {line_no}: no ID, skipping")
            continue

        if record.id in seen:
            logger.warning(f"Line {line_no}: duplicate ID {record.id}, keeping first")
            continue

        seen.add(record.id)
        records.append(record)

    return records


def load_records(path: Path) -> List[VideoRecord]:
    """
    Load the catalog at `path`.

    Returns:
        Parsed records; an empty list when the file does not exist

    Raises:
        OSError: Any read failure other than a missing file
        CatalogFormatError: The header has no ID column
    """
    try:
        text = Path(path).read_text(encoding="utf-8-sig")
    except FileNotFoundError:
        logger.info(f"No existing file found at {path}, starting fresh")
        return []

    return parse_records(text)


# ============================================================
# Write
# ============================================================


def _record_to_row(record: VideoRecord) -> List[object]:
    return [
        record.id,
        record.title,
        record.published_at,
        record.duration,
        "" if record.view_count is None else record.view_count,
        "" if record.like_count is None else record.like_count,
    ]


def format_records(records: Iterable[VideoRecord]) -> str:
    """Render records as catalog text: strings quoted, counts bare."""
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\n")
    writer.writerow(COLUMNS)
    for record in records:
        writer.writerow(_record_to_row(record))
    return buf.getvalue()


def save_records(path: Path, records: Sequence[VideoRecord]) -> None:
    """
    Replace the catalog at `path` with `records`, in the order given.

    Written to a sibling temp file first, then renamed over the target.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    tmp_path = path.with_suffix(path.suffix + ".tmp")
    try:
        with tmp_path.open("w", encoding="utf-8", newline="") as f:
            f.write(format_records(records))
        tmp_path.replace(path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise

    logger.debug(f"Wrote {len(records)} records to {path}")
