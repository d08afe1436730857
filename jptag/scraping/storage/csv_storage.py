"""
Append-only CSV sink for crawl output rows.
"""

from __future__ import annotations

import csv
from datetime import date
from pathlib import Path

from jptag.scraping.storage.base import RowSink
from jptag.scraping.types import OUTPUT_HEADER, OutputRow

BOM = "\ufeff"


def default_output_name(today: date | None = None) -> str:
    return f"JPTag_info_{(today or date.today()).strftime('%Y_%m_%d')}.csv"


class CSVRowSink(RowSink):
    """
    Writes the header on open, then appends and flushes each row.

    Each row is written through a fresh append handle so rows already
    written stay on disk if the run stops midway.
    """

    def __init__(self, path: str | Path, *, write_bom: bool = True) -> None:
        self.path = Path(path)
        self.write_bom = write_bom
        self.rows_written = 0

    def open(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8", newline="") as handle:
            if self.write_bom:
                handle.write(BOM)
            csv.writer(handle).writerow(OUTPUT_HEADER)

    def write(self, row: OutputRow) -> None:
        with self.path.open("a", encoding="utf-8", newline="") as handle:
            csv.writer(handle).writerow(row.as_list())
            handle.flush()
        self.rows_written += 1
