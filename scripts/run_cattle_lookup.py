"""
Run the cattle lookup crawl from CLI.
"""

from __future__ import annotations

import argparse
import json

from jptag.config import get_cattle_lookup_settings, resolve_path
from jptag.scraping.logging_utils import configure_logging
from jptag.services.cattle_lookup_service import CattleLookupService


def main() -> int:
    settings = get_cattle_lookup_settings()
    parser = argparse.ArgumentParser(description="Look up JPTag cattle records and write them to CSV.")
    parser.add_argument(
        "--input",
        dest="input_path",
        default=None,
        help=f"Delimited file of tag IDs (default: {settings.output.input_path}).",
    )
    parser.add_argument(
        "--output",
        dest="output_path",
        default=None,
        help="Output CSV path (default: JPTag_info_<date>.csv in the output directory).",
    )
    parser.add_argument(
        "--log-file",
        dest="log_file",
        default=settings.output.log_path,
        help="Rotating log file path.",
    )
    args = parser.parse_args()

    configure_logging(
        log_path=resolve_path(args.log_file),
        max_bytes=settings.output.log_max_bytes,
        backup_count=settings.output.log_backup_count,
        level=settings.output.log_level,
    )

    service = CattleLookupService(settings=settings)
    summary = service.run(input_path=args.input_path, output_path=args.output_path)
    print(json.dumps(summary.to_dict(), indent=2, ensure_ascii=False))
    return 1 if summary.fatal_error else 0


if __name__ == "__main__":
    raise SystemExit(main())
