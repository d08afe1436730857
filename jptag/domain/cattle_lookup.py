"""
jptag/domain/cattle_lookup.py

Domain models for cattle lookup run bookkeeping.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class TagState(str, Enum):
    PENDING = "pending"
    ATTEMPTING = "attempting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class TagOutcome:
    """
    Final state for one tag ID in a run.
    """

    tag_id: str
    state: TagState = TagState.PENDING
    attempts: int = 0
    rows: int = 0
    placeholder: bool = False
    error: str | None = None


@dataclass
class CrawlSummary:
    """
    Summary for one crawl run.
    """

    outcomes: list[TagOutcome] = field(default_factory=list)
    rows_emitted: int = 0
    elapsed_seconds: float = 0.0
    fatal_error: str | None = None

    @property
    def succeeded(self) -> list[str]:
        return [outcome.tag_id for outcome in self.outcomes if outcome.state is TagState.SUCCEEDED]

    @property
    def failed(self) -> list[str]:
        return [outcome.tag_id for outcome in self.outcomes if outcome.state is TagState.FAILED]

    @property
    def placeholders(self) -> list[str]:
        return [outcome.tag_id for outcome in self.outcomes if outcome.placeholder]

    @property
    def status(self) -> str:
        if self.fatal_error is not None:
            return "aborted"
        if self.failed:
            return "partial_success" if self.succeeded else "failed"
        return "success"

    def to_dict(self) -> dict[str, object]:
        return {
            "status": self.status,
            "tags_total": len(self.outcomes),
            "tags_succeeded": len(self.succeeded),
            "tags_failed": self.failed,
            "placeholder_tags": self.placeholders,
            "rows_emitted": self.rows_emitted,
            "elapsed_seconds": round(self.elapsed_seconds, 3),
            "fatal_error": self.fatal_error,
        }
