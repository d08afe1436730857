"""
Cattle lookup crawl subsystem.
"""

from jptag.scraping.engine import CrawlOrchestrator, LookupNavigator
from jptag.scraping.jobs import CrawlJob, load_crawl_job
from jptag.scraping.navigator import LookupSession, NavigationError, SessionNavigator
from jptag.scraping.retry import RetryExhaustedError, RetryPolicy, call_with_retry
from jptag.scraping.types import (
    OUTPUT_HEADER,
    UNKNOWN,
    CattleRecord,
    OutputRow,
    TransferEvent,
    UnknownRecord,
)

__all__ = [
    "OUTPUT_HEADER",
    "UNKNOWN",
    "CattleRecord",
    "CrawlJob",
    "CrawlOrchestrator",
    "LookupNavigator",
    "LookupSession",
    "NavigationError",
    "OutputRow",
    "RetryExhaustedError",
    "RetryPolicy",
    "SessionNavigator",
    "TransferEvent",
    "UnknownRecord",
    "call_with_retry",
    "load_crawl_job",
]
