"""Structured Logging — one JSON object per log line, or plain text for local runs.

Invariants:
    - Every line carries timestamp (record creation time, UTC), level, logger, message
    - Known extras (user_id, post_id, profile_id, error_code, path, operation) are
      copied as strings when a call site passes them
    - setup_logging is idempotent: calling it again swaps the handler, never stacks one

Design Decisions:
    - stdlib logging.Formatter subclass: call sites keep using logging.getLogger(__name__)
"""

import json
import logging
from datetime import datetime, timezone

LOG_EXTRAS = (
    "user_id", "post_id", "profile_id", "error_code", "path", "operation",
)
TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_installed_handler: logging.Handler | None = None


class JSONFormatter(logging.Formatter):

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(
            (key, str(getattr(record, key)))
            for key in LOG_EXTRAS
            if getattr(record, key, None) is not None
        )
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    global _installed_handler
    handler = logging.StreamHandler()
    handler.setFormatter(
        JSONFormatter() if fmt == "json" else logging.Formatter(TEXT_FORMAT),
    )
    root = logging.getLogger()
    if _installed_handler is not None:
        root.removeHandler(_installed_handler)
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    _installed_handler = handler
