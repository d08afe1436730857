"""
Cattle lookup crawl engine.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable, Iterator, Sequence
from typing import Any, Protocol

from jptag.domain.cattle_lookup import CrawlSummary, TagOutcome, TagState
from jptag.scraping.logging_utils import log_event
from jptag.scraping.parsing.result_parser import dump_cells, parse_result_cells
from jptag.scraping.retry import RetryExhaustedError, RetryPolicy, call_with_retry
from jptag.scraping.types import CattleRecord, OutputRow, UnknownRecord

ResultParser = Callable[[str, Sequence[Any]], CattleRecord | UnknownRecord]


class LookupNavigator(Protocol):
    def open_session(self) -> Any:
        ...

    def query(self, session: Any, tag_id: str) -> Sequence[Any]:
        ...

    def close(self) -> None:
        ...


class CrawlOrchestrator:
    """
    Resolves tag IDs one at a time over a single consented session.
    """

    def __init__(
        self,
        *,
        navigator: LookupNavigator,
        retry_policy: RetryPolicy | None = None,
        parser: ResultParser = parse_result_cells,
        logger: logging.Logger | None = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._navigator = navigator
        self._retry_policy = retry_policy or RetryPolicy()
        self._parser = parser
        self._logger = logger or logging.getLogger(__name__)
        self._sleep = sleep
        self._clock = clock
        self.summary = CrawlSummary()

    def run(self, job: Iterable[str]) -> Iterator[OutputRow]:
        """
        Yield output rows in input order; the run summary lands in `self.summary`.

        Nothing escapes this generator: a failure outside the per-tag retry
        boundary is logged with its traceback and ends the run.
        """

        summary = CrawlSummary(outcomes=[TagOutcome(tag_id=str(tag_id)) for tag_id in job])
        self.summary = summary
        started = self._clock()
        try:
            session = self._navigator.open_session()
            for outcome in summary.outcomes:
                for row in self.crawl_one(session, outcome):
                    summary.rows_emitted += 1
                    yield row
        except Exception as exc:
            summary.fatal_error = str(exc) or type(exc).__name__
            log_event(
                self._logger,
                logging.ERROR,
                "crawl_aborted",
                error=summary.fatal_error,
                error_type=type(exc).__name__,
                exc_info=exc,
            )
        finally:
            summary.elapsed_seconds = self._clock() - started
            log_event(
                self._logger,
                logging.INFO,
                "crawl_completed",
                elapsed_seconds=round(summary.elapsed_seconds, 3),
                tags_total=len(summary.outcomes),
                tags_failed=len(summary.failed),
                rows_emitted=summary.rows_emitted,
                status=summary.status,
            )

    def crawl_one(self, session: Any, outcome: TagOutcome) -> list[OutputRow]:
        """
        Look up one tag with retries and return its rows.
        """

        tag_id = outcome.tag_id
        outcome.state = TagState.ATTEMPTING
        try:
            cells, attempts = call_with_retry(
                lambda: self._navigator.query(session, tag_id),
                tag_id=tag_id,
                policy=self._retry_policy,
                sleep=self._sleep,
                log=self._logger,
            )
        except RetryExhaustedError as exc:
            outcome.state = TagState.FAILED
            outcome.attempts = exc.attempts
            outcome.error = str(exc.last_error)
            log_event(
                self._logger,
                logging.ERROR,
                "tag_retries_exhausted",
                tag_id=tag_id,
                attempts=exc.attempts,
                error=outcome.error,
            )
            return self._finish(outcome, [OutputRow.placeholder(tag_id)], placeholder=True)

        outcome.attempts = attempts
        outcome.state = TagState.SUCCEEDED
        record = self._parser(tag_id, cells)
        rows = record.to_rows()
        if isinstance(record, UnknownRecord) or not record.transfers:
            log_event(
                self._logger,
                logging.INFO,
                "tag_unknown" if isinstance(record, UnknownRecord) else "tag_without_transfers",
                tag_id=tag_id,
                cell_count=len(cells),
                cells=dump_cells(cells),
            )
            return self._finish(outcome, rows, placeholder=True)
        return self._finish(outcome, rows, placeholder=False)

    @staticmethod
    def _finish(outcome: TagOutcome, rows: list[OutputRow], *, placeholder: bool) -> list[OutputRow]:
        outcome.rows = len(rows)
        outcome.placeholder = placeholder
        return rows
