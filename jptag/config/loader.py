"""
Environment-driven settings loader for the cattle lookup crawler.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from jptag.config.models import (
    DEFAULT_AGREEMENT_URL,
    CattleLookupSettings,
    OutputSettings,
    PortalSettings,
    RetrySettings,
)

ENV_FILES = (".env", ".env.local")


def read_env_file(path: Path) -> dict[str, str]:
    """
    Parse `KEY=VALUE` lines, accepting an `export ` prefix and one pair of
    matching quotes around the value. Missing files yield nothing.
    """

    if not path.is_file():
        return {}
    values: dict[str, str] = {}
    for raw_line in path.read_text(encoding="utf-8-sig").splitlines():
        line = raw_line.strip()
        if line.startswith("export "):
            line = line[len("export "):].lstrip()
        key, sep, value = line.partition("=")
        key = key.strip()
        if not sep or not key or key.startswith("#"):
            continue
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
            value = value[1:-1]
        values[key] = value
    return values


def apply_env_files(directory: Path | None = None) -> None:
    """
    Merge `.env` then `.env.local` from `directory` (default: working
    directory) into the process environment. Variables already set win.
    """

    root = directory or Path.cwd()
    merged: dict[str, str] = {}
    for filename in ENV_FILES:
        merged.update(read_env_file(root / filename))
    for key, value in merged.items():
        os.environ.setdefault(key, value)


def _get_bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _get_int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    stripped = raw.strip()
    return stripped if stripped else default


def resolve_path(raw_path: str) -> Path:
    """
    Resolve a configured path against the current working directory.
    """

    candidate = Path(raw_path).expanduser()
    if candidate.is_absolute():
        return candidate
    return (Path.cwd() / candidate).resolve()


def load_settings() -> CattleLookupSettings:
    """
    Build settings from environment variables without caching.
    """

    apply_env_files()
    portal = PortalSettings(
        agreement_url=_get_str_env("JPTAG_AGREEMENT_URL", DEFAULT_AGREEMENT_URL),
        agreement_form=_get_str_env("JPTAG_AGREEMENT_FORM", "agreement"),
        search_form=_get_str_env("JPTAG_SEARCH_FORM", "frmSearch"),
        id_field=_get_str_env("JPTAG_ID_FIELD", "txtIDNO"),
        result_selector=_get_str_env("JPTAG_RESULT_SELECTOR", ".resultTable"),
        user_agent=_get_str_env("JPTAG_USER_AGENT", "JPTagCrawler/1.0"),
        timeout_seconds=max(
            1.0,
            _get_float_env("JPTAG_TIMEOUT_SECONDS", 15.0),
        ),
        request_interval_seconds=max(
            0.0,
            _get_float_env("JPTAG_REQUEST_INTERVAL_SECONDS", 0.5),
        ),
    )
    retry = RetrySettings(
        max_retries=max(0, _get_int_env("JPTAG_MAX_RETRIES", 3)),
        backoff_initial_seconds=max(
            0.0,
            _get_float_env("JPTAG_BACKOFF_INITIAL_SECONDS", 0.5),
        ),
        backoff_multiplier=max(
            1.0,
            _get_float_env("JPTAG_BACKOFF_MULTIPLIER", 2.0),
        ),
        fail_fast_on_structural=_get_bool_env("JPTAG_FAIL_FAST_ON_STRUCTURAL", False),
    )
    output = OutputSettings(
        input_path=_get_str_env("JPTAG_INPUT_PATH", "JPTag_input.csv"),
        input_delimiter=os.getenv("JPTAG_INPUT_DELIMITER") or ",",
        output_dir=_get_str_env("JPTAG_OUTPUT_DIR", "."),
        output_bom=_get_bool_env("JPTAG_OUTPUT_BOM", True),
        log_path=_get_str_env("JPTAG_LOG_PATH", "logfile.log"),
        log_max_bytes=max(1, _get_int_env("JPTAG_LOG_MAX_BYTES", 1024000)),
        log_backup_count=max(0, _get_int_env("JPTAG_LOG_BACKUP_COUNT", 10)),
        log_level=_get_str_env("JPTAG_LOG_LEVEL", "INFO").upper(),
    )
    return CattleLookupSettings(portal=portal, retry=retry, output=output)


@lru_cache(maxsize=1)
def get_cattle_lookup_settings() -> CattleLookupSettings:
    """
    Return cached crawler settings from environment variables.
    """

    return load_settings()
