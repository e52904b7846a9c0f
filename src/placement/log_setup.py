"""Logging initialisation for the CLI and for embedding applications."""

from __future__ import annotations

import json
import logging
import os

LOG_LEVEL_ENV = "PLACEMENT_LOG_LEVEL"
_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class JsonFormatter(logging.Formatter):
    """Format logs as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        log_record = {
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            log_record["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(log_record)


def init_logging(level: str | int | None = None, json_format: bool = False) -> None:
    """
    Install a single stream handler on the root logger.

    `level` falls back to $PLACEMENT_LOG_LEVEL, then INFO. Calling this again
    replaces the previous handler.
    """
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, "INFO")
    if isinstance(level, str):
        level = level.upper()

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter() if json_format else logging.Formatter(_TEXT_FORMAT))
    logging.basicConfig(level=level, handlers=[handler], force=True)
