"""Structured Logging: one JSON object per line, request extras flattened in.

Invariants:
    - Every line carries timestamp (record creation time, UTC), level, logger, message
    - Only whitelisted extras are emitted: account_id, url, error_code, path,
      tag_count, fic_id, elapsed_ms
    - Passwords, the pepper and session tokens are never passed as extras
    - setup_logging is idempotent: a second call replaces the handler it installed

Design Decisions:
    - stdlib logging with a small formatter, no logging dependency
    - httpx request lines lowered to WARNING: they repeat every fic lookup URL
"""

import json
import logging
from datetime import datetime, timezone

_EXTRA_FIELDS = (
    "account_id", "url", "error_code", "path",
    "tag_count", "fic_id", "elapsed_ms",
)
_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"
_QUIET_LOGGERS = ("httpx", "httpcore")
_HANDLER_NAME = "ficai"


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(
            (key, getattr(record, key)) for key in _EXTRA_FIELDS
            if getattr(record, key, None) is not None
        )
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Install the root handler (json or text) at the given level."""
    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == _HANDLER_NAME]:
        root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(
        JSONFormatter() if fmt == "json" else logging.Formatter(_TEXT_FORMAT),
    )
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
