from __future__ import annotations

import csv
import logging
from pathlib import Path

import pytest

from cattle_fakes import ScriptedNavigator, header_texts, transfer_block
from jptag.config.models import CattleLookupSettings, OutputSettings, PortalSettings, RetrySettings
from jptag.scraping.logging_utils import configure_logging
from jptag.scraping.navigator import NavigationError
from jptag.scraping.types import OUTPUT_HEADER
from jptag.services.cattle_lookup_service import CattleLookupService


def make_settings(tmp_path: Path) -> CattleLookupSettings:
    return CattleLookupSettings(
        portal=PortalSettings(request_interval_seconds=0.0),
        retry=RetrySettings(max_retries=3, backoff_initial_seconds=0.0),
        output=OutputSettings(
            input_path=str(tmp_path / "JPTag_input.csv"),
            output_dir=str(tmp_path / "out"),
        ),
    )


def read_rows(path: Path) -> list[list[str]]:
    with path.open("r", encoding="utf-8-sig", newline="") as handle:
        return list(csv.reader(handle))


class TestCattleLookupService:
    def test_end_to_end_rows_land_in_csv(self, tmp_path: Path) -> None:
        (tmp_path / "JPTag_input.csv").write_text("100\n200\n300\n", encoding="utf-8")
        navigator = ScriptedNavigator(
            {
                "100": [header_texts() + transfer_block(0) + transfer_block(1)],
                "200": [[]],
                "300": [NavigationError("down")],
            }
        )
        service = CattleLookupService(settings=make_settings(tmp_path), navigator=navigator)
        output = tmp_path / "result.csv"

        summary = service.run(output_path=output)

        rows = read_rows(output)
        assert rows[0][0] == "Tag"
        assert [row[0] for row in rows[1:]] == ["100", "100", "200", "300"]
        assert rows[3] == ["200"] + ["Unknown"] * 7
        assert summary.rows_emitted == 4
        assert summary.failed == ["300"]
        assert summary.to_dict()["status"] == "partial_success"

    def test_default_output_path_uses_output_dir(self, tmp_path: Path) -> None:
        (tmp_path / "JPTag_input.csv").write_text("1\n", encoding="utf-8")
        service = CattleLookupService(
            settings=make_settings(tmp_path),
            navigator=ScriptedNavigator({"1": [[]]}),
        )

        service.run()

        written = list((tmp_path / "out").glob("JPTag_info_*.csv"))
        assert len(written) == 1
        assert service.default_output_path() == written[0]

    def test_fatal_session_error_keeps_header_only_file(self, tmp_path: Path) -> None:
        (tmp_path / "JPTag_input.csv").write_text("1,2\n", encoding="utf-8")
        navigator = ScriptedNavigator({}, open_error=NavigationError("consent page gone"))
        service = CattleLookupService(settings=make_settings(tmp_path), navigator=navigator)
        output = tmp_path / "result.csv"

        summary = service.run(output_path=output)

        assert read_rows(output) == [list(OUTPUT_HEADER)]
        assert summary.fatal_error == "consent page gone"
        assert summary.to_dict()["status"] == "aborted"
        assert navigator.closed == 1

    def test_navigator_closed_after_run(self, tmp_path: Path) -> None:
        (tmp_path / "JPTag_input.csv").write_text("1\n", encoding="utf-8")
        navigator = ScriptedNavigator({"1": [[]]})
        service = CattleLookupService(settings=make_settings(tmp_path), navigator=navigator)

        service.run(output_path=tmp_path / "result.csv")

        assert navigator.closed == 1

    def test_missing_input_file(self, tmp_path: Path) -> None:
        service = CattleLookupService(settings=make_settings(tmp_path), navigator=ScriptedNavigator({}))
        with pytest.raises(FileNotFoundError):
            service.run()


class TestConfigureLogging:
    def test_writes_to_rotating_file(self, tmp_path: Path) -> None:
        log_path = tmp_path / "logs" / "logfile.log"
        root = configure_logging(log_path=log_path, max_bytes=2048, backup_count=2)
        try:
            logging.getLogger("jptag.crawl").info("hello")
            for handler in root.handlers:
                handler.flush()
            assert "hello" in log_path.read_text(encoding="utf-8")
            assert len(root.handlers) == 2
        finally:
            for handler in list(root.handlers):
                root.removeHandler(handler)
                handler.close()

    def test_reconfiguring_replaces_handlers(self, tmp_path: Path) -> None:
        configure_logging(log_path=tmp_path / "a.log")
        root = configure_logging(log_path=None)
        try:
            assert len(root.handlers) == 1
        finally:
            for handler in list(root.handlers):
                root.removeHandler(handler)
                handler.close()
