"""
Structured logging helpers for crawl workflows.
"""

from __future__ import annotations

import json
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def log_event(
    logger: logging.Logger,
    level: int,
    event: str,
    *,
    exc_info: Any = None,
    **fields: Any,
) -> None:
    """
    Emit one structured log line as compact JSON.
    """

    payload = {"event": event, **fields}
    logger.log(
        level,
        json.dumps(payload, default=str, sort_keys=True, ensure_ascii=False),
        exc_info=exc_info,
    )


def configure_logging(
    *,
    log_path: str | Path | None,
    max_bytes: int = 1024000,
    backup_count: int = 10,
    level: str | int = logging.INFO,
) -> logging.Logger:
    """
    Attach a rotating file handler and a stderr handler to the `jptag` logger.
    """

    root = logging.getLogger("jptag")
    root.setLevel(level)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)
    if log_path:
        path = Path(log_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(formatter)
    root.addHandler(console)
    return root
