# artclub_admin/core/exporter.py
"""CSV export of the loaded page."""

from __future__ import annotations

import csv
import io
import logging
from datetime import date
from pathlib import Path
from typing import Any, Optional, Sequence

from ..resources import Column

logger = logging.getLogger(__name__)


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def to_csv(items: Sequence[Any], columns: Sequence[Column]) -> str:
    """
    One header row then one row per item, every field quoted and embedded
    quotes doubled. Only the given items are written (the loaded page).
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow([c.header for c in columns])
    for item in items:
        writer.writerow([_cell(c.accessor(item)) for c in columns])
    return buffer.getvalue()


def export_filename(resource: str, day: Optional[date] = None) -> str:
    """`<resource>_<YYYY-MM-DD>.csv`"""
    day = day or date.today()
    return f"{resource}_{day.isoformat()}.csv"


def write_csv(
    directory: str | Path,
    resource: str,
    items: Sequence[Any],
    columns: Sequence[Column],
    *,
    day: Optional[date] = None,
) -> Path:
    """Write the export file into `directory` and return its path."""
    target_dir = Path(directory).expanduser()
    target_dir.mkdir(parents=True, exist_ok=True)
    path = target_dir / export_filename(resource, day)
    path.write_text(to_csv(items, columns), encoding="utf-8", newline="")
    logger.info(f"Exported {len(items)} row(s) to {path}")
    return path
