"""
Shared builders and fakes for the cattle lookup tests.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from bs4 import BeautifulSoup, Tag


def result_cells_html(texts: Sequence[str]) -> str:
    cells = "".join(f'<td class="resultTable">{text}</td>' for text in texts)
    return f"<table><tr>{cells}</tr></table>"


def build_cells(texts: Sequence[str]) -> list[Tag]:
    soup = BeautifulSoup(result_cells_html(texts), "html.parser")
    return soup.select(".resultTable")


def header_texts(
    *,
    listed_id: str = "1234567890",
    import_date: str = "2019.04.01",
    date_of_birth: str = "2018.12.24",
) -> list[str]:
    texts = [f"h{index}" for index in range(19)]
    texts[6] = listed_id
    texts[7] = import_date
    texts[11] = date_of_birth
    return texts


def transfer_block(index: int) -> list[str]:
    return [
        f"#{index}",
        f"transfer-{index}",
        f"2020.0{index % 9 + 1}.15",
        f"prefecture-{index}",
        f"city-{index}",
        f"farm-{index}",
    ]


class ScriptedNavigator:
    """
    Navigator fake: each tag maps to a list of outcomes consumed per call.

    An outcome is either a list of cell texts or an exception instance.
    """

    def __init__(
        self,
        script: dict[str, list[Any]],
        *,
        open_error: Exception | None = None,
    ) -> None:
        self.script = {tag: list(outcomes) for tag, outcomes in script.items()}
        self.open_error = open_error
        self.sessions_opened = 0
        self.calls: list[str] = []
        self.sessions_seen: list[object] = []
        self.closed = 0

    def close(self) -> None:
        self.closed += 1

    def open_session(self) -> object:
        self.sessions_opened += 1
        if self.open_error is not None:
            raise self.open_error
        return object()

    def query(self, session: object, tag_id: str) -> list[Tag]:
        self.calls.append(tag_id)
        self.sessions_seen.append(session)
        outcomes = self.script[tag_id]
        outcome = outcomes.pop(0) if len(outcomes) > 1 else outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        return build_cells(outcome)
