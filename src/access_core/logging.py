"""Process logging for the access engine.

Modules attach structured fields with ``extra=``. The fields shared across the
engine (the event name, the request id, the user/org/branch being evaluated and
the permission or path involved) are lifted to the top level of a JSON line or
appended as ``key=value`` tags to a text line. Anything else a caller attaches
is nested under ``context`` in JSON output.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from access_core.config import RuntimeSettings, get_runtime_settings

APP_LOGGER_NAME = "access_core"

ACCESS_LOG_FIELDS = (
    "event",
    "request_id",
    "user_id",
    "organization_id",
    "branch_id",
    "permission",
    "path",
)

_STANDARD_RECORD_ATTRS = frozenset(logging.LogRecord("", logging.NOTSET, "", 0, "", (), None).__dict__) | {
    "message",
    "asctime",
}

_applied_settings: RuntimeSettings | None = None


def split_record_fields(record: logging.LogRecord) -> tuple[dict[str, Any], dict[str, Any]]:
    """Return (access fields, other extras) attached to ``record``."""
    fields: dict[str, Any] = {}
    context: dict[str, Any] = {}
    for key, value in record.__dict__.items():
        if key in _STANDARD_RECORD_ATTRS or key.startswith("_"):
            continue
        if key in ACCESS_LOG_FIELDS:
            fields[key] = value
        else:
            context[key] = value
    return fields, context


class AccessJsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        fields, context = split_record_fields(record)
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in ACCESS_LOG_FIELDS:
            if name in fields:
                payload[name] = fields[name]
        if context:
            payload["context"] = context
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, ensure_ascii=True)


class AccessTextFormatter(logging.Formatter):
    def __init__(self) -> None:
        super().__init__("%(asctime)s %(levelname)s %(name)s %(message)s")

    def formatMessage(self, record: logging.LogRecord) -> str:
        line = super().formatMessage(record)
        fields, _ = split_record_fields(record)
        tags = " ".join(f"{name}={fields[name]}" for name in ACCESS_LOG_FIELDS if name in fields)
        return f"{line} [{tags}]" if tags else line


def setup_app_logging(settings: RuntimeSettings | None = None, *, force: bool = False) -> None:
    """Install a single stdout handler on the ``access_core`` logger.

    Repeated calls with unchanged settings are no-ops, so every ``create_app``
    may call this. Changed settings, or ``force``, rebuild the handler.
    """
    global _applied_settings  # pylint: disable=global-statement
    settings = settings or get_runtime_settings()
    if settings == _applied_settings and not force:
        return

    level = settings.resolved_log_level()
    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(AccessJsonFormatter() if settings.log_json else AccessTextFormatter())

    app_logger = logging.getLogger(APP_LOGGER_NAME)
    app_logger.handlers.clear()
    app_logger.addHandler(handler)
    app_logger.setLevel(level)
    app_logger.propagate = False

    if settings.log_capture_root:
        root = logging.getLogger()
        root.handlers.clear()
        root.addHandler(handler)
        root.setLevel(level)

    _applied_settings = settings
    logging.getLogger(__name__).info(
        "Access logging configured. env=%s level=%s json=%s",
        settings.env,
        settings.log_level,
        str(settings.log_json).lower(),
        extra={"event": "logging_configured"},
    )
