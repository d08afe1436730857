"""
Storage layer interfaces for crawl output rows.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from jptag.scraping.types import OutputRow


class RowSink(ABC):
    """
    Row-oriented output writer.
    """

    def open(self) -> None:
        """
        Prepare the destination before the first row.
        """

    @abstractmethod
    def write(self, row: OutputRow) -> None:
        """
        Persist one row immediately.
        """

    def close(self) -> None:
        """
        Release any resources held by the sink.
        """

    def __enter__(self) -> "RowSink":
        self.open()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
