"""Logging setup for applications embedding depgather.

The library itself only creates module loggers under the ``depgather``
namespace. Front ends call :func:`setup_logging` once to attach a stderr
handler whose level comes from :class:`~depgather.config.Settings`.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from .config import Settings, load_settings

LOGGER_NAME = "depgather"
HANDLER_NAME = "depgather-stderr"

TEXT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def setup_logging(settings: Settings | None = None, *, structured: bool = False) -> logging.Logger:
    """Attach the depgather stderr handler and apply the configured level.

    ``settings`` defaults to :func:`load_settings`, so ``DEPGATHER_LOG_LEVEL``
    and the config file apply without the caller passing anything. A handler
    installed by an earlier call is replaced; handlers added by the host
    application are left alone.
    """
    if settings is None:
        settings = load_settings()

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(settings.log_level.upper())

    for existing in [h for h in logger.handlers if h.get_name() == HANDLER_NAME]:
        logger.removeHandler(existing)
        existing.close()

    # stdout carries the dependency listing
    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(JsonLineFormatter() if structured else logging.Formatter(TEXT_FORMAT))
    logger.addHandler(handler)

    return logger


class JsonLineFormatter(logging.Formatter):
    """One JSON object per record, UTC timestamps."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(entry)
