"""
Position-indexed parser for the cattle search result table.

The portal renders one record as a flat run of `.resultTable` cells: a header
block with the identification number, import date and date of birth, then one
six-cell block per transfer event. Nothing in the markup labels the cells, so
the parser relies on fixed offsets collected in `ResultTableLayout`.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from bs4 import Tag

from jptag.scraping.types import UNKNOWN, CattleRecord, TransferEvent, UnknownRecord


@dataclass(frozen=True)
class ResultTableLayout:
    """
    Cell offsets of the result table.
    """

    min_cells: int = 20
    listed_id: int = 6
    import_date: int = 7
    date_of_birth: int = 11
    transfers_start: int = 19
    transfer_block_size: int = 6
    transfer_description: int = 1
    transfer_date: int = 2
    prefecture: int = 3
    city: int = 4
    location: int = 5


DEFAULT_LAYOUT = ResultTableLayout()


def cell_text(cell: Any) -> str | None:
    """
    Trimmed text of a cell, or None when the cell carries no text.
    """

    if isinstance(cell, Tag):
        return cell.get_text().strip()
    if isinstance(cell, str):
        return cell.strip()
    return None


def text_of(cell: Any, default: str = UNKNOWN) -> str:
    text = cell_text(cell)
    return default if text is None else text


def normalize_date(value: str) -> str:
    # 2019.04.01 -> 2019-04-01
    return value.replace(".", "-")


def _cell_at(cells: Sequence[Any], index: int) -> Any:
    if 0 <= index < len(cells):
        return cells[index]
    return None


def parse_transfers(
    cells: Sequence[Any],
    layout: ResultTableLayout = DEFAULT_LAYOUT,
) -> tuple[TransferEvent, ...]:
    """
    Split the trailing cells into complete transfer blocks.

    A final block shorter than `transfer_block_size` is dropped.
    """

    tail = list(cells[layout.transfers_start :])
    size = layout.transfer_block_size
    events: list[TransferEvent] = []
    for start in range(0, len(tail) - size + 1, size):
        block = tail[start : start + size]
        events.append(
            TransferEvent(
                transfer_description=text_of(_cell_at(block, layout.transfer_description)),
                transfer_date=normalize_date(text_of(_cell_at(block, layout.transfer_date))),
                prefecture=text_of(_cell_at(block, layout.prefecture)),
                city=text_of(_cell_at(block, layout.city)),
                location=text_of(_cell_at(block, layout.location)),
            )
        )
    return tuple(events)


def parse_result_cells(
    tag_id: str,
    cells: Sequence[Any],
    layout: ResultTableLayout = DEFAULT_LAYOUT,
) -> CattleRecord | UnknownRecord:
    """
    Turn the raw result cells for `tag_id` into a record.

    Returns `UnknownRecord` when fewer than `layout.min_cells` cells are
    present. Individual cells that carry no text become "Unknown" rather
    than failing the record.
    """

    if len(cells) < layout.min_cells:
        return UnknownRecord(tag_id=tag_id, cell_count=len(cells))

    return CattleRecord(
        tag_id=tag_id,
        import_date=normalize_date(text_of(_cell_at(cells, layout.import_date))),
        date_of_birth=normalize_date(text_of(_cell_at(cells, layout.date_of_birth))),
        listed_id=text_of(_cell_at(cells, layout.listed_id)),
        transfers=parse_transfers(cells, layout),
        cell_count=len(cells),
    )


def dump_cells(cells: Sequence[Any]) -> list[str]:
    """
    Cell texts for logging.
    """

    return [text_of(cell) for cell in cells]
