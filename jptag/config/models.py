"""
Cattle lookup configuration models.
"""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_AGREEMENT_URL = "https://www.id.nlbc.go.jp/CattleSearch/search/agreement.action"


@dataclass(frozen=True)
class PortalSettings:
    """
    Where the lookup portal lives and how its forms are named.
    """

    agreement_url: str = DEFAULT_AGREEMENT_URL
    agreement_form: str = "agreement"
    search_form: str = "frmSearch"
    id_field: str = "txtIDNO"
    result_selector: str = ".resultTable"
    user_agent: str = "JPTagCrawler/1.0"
    timeout_seconds: float = 15.0
    request_interval_seconds: float = 0.5


@dataclass(frozen=True)
class RetrySettings:
    """
    Per-ID retry behaviour.
    """

    max_retries: int = 3
    backoff_initial_seconds: float = 0.5
    backoff_multiplier: float = 2.0
    fail_fast_on_structural: bool = False


@dataclass(frozen=True)
class OutputSettings:
    """
    Input list, output CSV and log file locations.
    """

    input_path: str = "JPTag_input.csv"
    input_delimiter: str = ","
    output_dir: str = "."
    output_bom: bool = True
    log_path: str = "logfile.log"
    log_max_bytes: int = 1024000
    log_backup_count: int = 10
    log_level: str = "INFO"


@dataclass(frozen=True)
class CattleLookupSettings:
    """
    Runtime settings for one crawl run.
    """

    portal: PortalSettings
    retry: RetrySettings
    output: OutputSettings
