"""
jptag/services/cattle_lookup_service.py

Service orchestration for one cattle lookup run.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from jptag.config import CattleLookupSettings, get_cattle_lookup_settings, resolve_path
from jptag.domain.cattle_lookup import CrawlSummary
from jptag.scraping.engine import CrawlOrchestrator, LookupNavigator
from jptag.scraping.jobs import load_crawl_job
from jptag.scraping.logging_utils import log_event
from jptag.scraping.navigator import SessionNavigator
from jptag.scraping.retry import RetryPolicy
from jptag.scraping.storage import CSVRowSink, RowSink, default_output_name

logger = logging.getLogger(__name__)


class CattleLookupService:
    """
    Loads the tag list, runs the crawl and streams rows into the sink.
    """

    def __init__(
        self,
        *,
        settings: CattleLookupSettings | None = None,
        navigator: LookupNavigator | None = None,
    ) -> None:
        self._settings = settings or get_cattle_lookup_settings()
        self._navigator = navigator or SessionNavigator(settings=self._settings.portal)

    def default_output_path(self) -> Path:
        return resolve_path(self._settings.output.output_dir) / default_output_name()

    def run(
        self,
        *,
        input_path: str | Path | None = None,
        output_path: str | Path | None = None,
        sink: RowSink | None = None,
    ) -> CrawlSummary:
        output = self._settings.output
        source = Path(input_path) if input_path else resolve_path(output.input_path)
        job = load_crawl_job(source, delimiter=output.input_delimiter)

        if sink is None:
            target = Path(output_path) if output_path else self.default_output_path()
            sink = CSVRowSink(target, write_bom=output.output_bom)

        log_event(
            logger,
            logging.INFO,
            "crawl_started",
            input_path=str(source),
            tags_total=len(job),
        )
        orchestrator = CrawlOrchestrator(
            navigator=self._navigator,
            retry_policy=RetryPolicy.from_settings(self._settings.retry),
            logger=logging.getLogger("jptag.crawl"),
        )
        try:
            with sink:
                for row in orchestrator.run(job):
                    sink.write(row)
        finally:
            self._navigator.close()
        return orchestrator.summary


@lru_cache(maxsize=1)
def get_cattle_lookup_service() -> CattleLookupService:
    """
    Build and cache the cattle lookup service.
    """

    return CattleLookupService()
