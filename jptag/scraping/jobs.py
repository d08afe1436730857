"""
Crawl job loading from a delimited ID list.
"""

from __future__ import annotations

import csv
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class CrawlJob:
    """
    Ordered, immutable list of tag IDs for one run.
    """

    tag_ids: tuple[str, ...]

    @classmethod
    def from_ids(cls, tag_ids: Iterable[object]) -> "CrawlJob":
        cleaned = (str(tag_id).strip() for tag_id in tag_ids)
        return cls(tag_ids=tuple(tag_id for tag_id in cleaned if tag_id))

    def __iter__(self) -> Iterator[str]:
        return iter(self.tag_ids)

    def __len__(self) -> int:
        return len(self.tag_ids)


def load_crawl_job(path: str | Path, *, delimiter: str = ",") -> CrawlJob:
    """
    Read every cell of every row, in file order, as one flat ID list.
    """

    source = Path(path)
    if not source.exists():
        raise FileNotFoundError(f"Tag ID input file not found: {source}")

    with source.open("r", encoding="utf-8-sig", newline="") as handle:
        reader = csv.reader(handle, delimiter=delimiter)
        return CrawlJob.from_ids(cell for row in reader for cell in row)
