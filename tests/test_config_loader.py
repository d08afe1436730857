from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

import pytest

from jptag.config import get_cattle_lookup_settings, load_settings, resolve_path
from jptag.config.loader import read_env_file
from jptag.config.models import DEFAULT_AGREEMENT_URL

ENV_NAMES = (
    "JPTAG_AGREEMENT_URL",
    "JPTAG_TIMEOUT_SECONDS",
    "JPTAG_MAX_RETRIES",
    "JPTAG_BACKOFF_MULTIPLIER",
    "JPTAG_FAIL_FAST_ON_STRUCTURAL",
    "JPTAG_OUTPUT_BOM",
    "JPTAG_LOG_LEVEL",
    "JPTAG_USER_AGENT",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    get_cattle_lookup_settings.cache_clear()
    yield
    for name in ENV_NAMES:
        os.environ.pop(name, None)
    get_cattle_lookup_settings.cache_clear()


class TestLoadSettings:
    def test_defaults(self) -> None:
        settings = load_settings()
        assert settings.portal.agreement_url == DEFAULT_AGREEMENT_URL
        assert settings.portal.search_form == "frmSearch"
        assert settings.portal.id_field == "txtIDNO"
        assert settings.portal.result_selector == ".resultTable"
        assert settings.retry.max_retries == 3
        assert settings.retry.fail_fast_on_structural is False
        assert settings.output.output_bom is True
        assert settings.output.log_max_bytes == 1024000
        assert settings.output.log_backup_count == 10

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("JPTAG_AGREEMENT_URL", "https://portal.test/agreement.action")
        monkeypatch.setenv("JPTAG_MAX_RETRIES", "5")
        monkeypatch.setenv("JPTAG_FAIL_FAST_ON_STRUCTURAL", "yes")
        monkeypatch.setenv("JPTAG_OUTPUT_BOM", "off")
        monkeypatch.setenv("JPTAG_LOG_LEVEL", "debug")

        settings = load_settings()

        assert settings.portal.agreement_url == "https://portal.test/agreement.action"
        assert settings.retry.max_retries == 5
        assert settings.retry.fail_fast_on_structural is True
        assert settings.output.output_bom is False
        assert settings.output.log_level == "DEBUG"

    def test_malformed_and_out_of_range_values_fall_back(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("JPTAG_MAX_RETRIES", "three")
        monkeypatch.setenv("JPTAG_TIMEOUT_SECONDS", "0.1")
        monkeypatch.setenv("JPTAG_BACKOFF_MULTIPLIER", "0.5")

        settings = load_settings()

        assert settings.retry.max_retries == 3
        assert settings.portal.timeout_seconds == 1.0
        assert settings.retry.backoff_multiplier == 1.0

    def test_env_file_does_not_override_process_env(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        (tmp_path / ".env").write_text(
            "# crawler\nJPTAG_USER_AGENT='FromFile/1'\nJPTAG_MAX_RETRIES=1\n",
            encoding="utf-8",
        )
        monkeypatch.setenv("JPTAG_MAX_RETRIES", "2")

        settings = load_settings()

        assert settings.portal.user_agent == "FromFile/1"
        assert settings.retry.max_retries == 2

    def test_env_local_overrides_env_file(self, tmp_path: Path) -> None:
        (tmp_path / ".env").write_text(
            'export JPTAG_USER_AGENT="Shared/1"\nJPTAG_TIMEOUT_SECONDS=20\n',
            encoding="utf-8",
        )
        (tmp_path / ".env.local").write_text("JPTAG_USER_AGENT=Local/2\n", encoding="utf-8")

        settings = load_settings()

        assert settings.portal.user_agent == "Local/2"
        assert settings.portal.timeout_seconds == 20.0

    def test_read_env_file_skips_comments_and_unmatched_quotes(self, tmp_path: Path) -> None:
        env_path = tmp_path / "sample.env"
        env_path.write_text("# note\nA='x'\nB=\"y\nnot a pair\nC=\n", encoding="utf-8")
        assert read_env_file(env_path) == {"A": "x", "B": '"y', "C": ""}
        assert read_env_file(tmp_path / "missing.env") == {}

    def test_cached_accessor_returns_same_instance(self) -> None:
        assert get_cattle_lookup_settings() is get_cattle_lookup_settings()


class TestResolvePath:
    def test_relative_paths_use_working_directory(self, tmp_path: Path) -> None:
        assert resolve_path("JPTag_input.csv") == (tmp_path / "JPTag_input.csv").resolve()

    def test_absolute_paths_are_kept(self, tmp_path: Path) -> None:
        assert resolve_path(str(tmp_path / "x.csv")) == tmp_path / "x.csv"
