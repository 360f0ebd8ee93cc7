"""Logging helpers for applications embedding fbgraph.

The library itself only installs a NullHandler; call ``setup_logging`` to see
request logs on stdout.
"""

import json
import logging
import sys
from datetime import UTC, datetime

from fbgraph.config import settings

LIBRARY_LOGGER = "fbgraph"

# Fields GraphRequest attaches through `extra=`
REQUEST_FIELDS = ("method", "path", "status_code")


class JSONFormatter(logging.Formatter):
    """One JSON object per record, including the request fields when present."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update({key: getattr(record, key) for key in REQUEST_FIELDS if hasattr(record, key)})

        if record.exc_info and record.exc_info[0] is not None:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


def setup_logging(app_env: str | None = None, log_level: str | None = None) -> logging.Logger:
    """Send fbgraph records to stdout: JSON in production, plain text otherwise.

    Defaults come from ``settings``. Calling it again replaces the handler.
    """
    app_env = app_env or settings.app_env
    log_level = log_level or settings.log_level

    logger = logging.getLogger(LIBRARY_LOGGER)
    logger.setLevel(log_level)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    if app_env == "production":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)-8s [%(name)s] %(message)s"))
    logger.addHandler(handler)

    # httpx logs every request URL at INFO, access token included
    logging.getLogger("httpx").setLevel(logging.WARNING)
    return logger
