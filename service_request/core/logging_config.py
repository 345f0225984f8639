"""JSON logging for the API process plus the buffer behind ``/api/admin/logs``."""

from __future__ import annotations

import logging
from collections import deque
from datetime import datetime, timezone
from typing import Any

from pythonjsonlogger import jsonlogger

from service_request.core.config import Settings

# Extra fields callers attach with ``extra=``; copied into buffered entries.
CONTEXT_FIELDS = ("submission_id", "task", "recipient", "status_code")

_CONFIGURED = False
_LOG_BUFFER: deque[dict[str, Any]] = deque(maxlen=200)


class _ServiceNameFilter(logging.Filter):
    def __init__(self, service_name: str) -> None:
        super().__init__()
        self.service_name = service_name

    def filter(self, record: logging.LogRecord) -> bool:
        record.service = self.service_name
        return True


class _BufferHandler(logging.Handler):
    """Keeps recent records, newest first, for the admin dashboard."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            entry: dict[str, Any] = {
                "time": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
                "level": record.levelname,
                "name": record.name,
                "message": record.getMessage(),
            }
            for field in CONTEXT_FIELDS:
                value = getattr(record, field, None)
                if value is not None:
                    entry[field] = value
            _LOG_BUFFER.appendleft(entry)
        except Exception:
            self.handleError(record)


def _owned(handler: logging.Handler) -> bool:
    return getattr(handler, "_service_request", False)


def setup_logging(settings: Settings, force: bool = False) -> None:
    """Attach the JSON stream handler and the buffer to the root logger.

    Runs once per process unless ``force`` is set. Handlers installed by
    other code (test harnesses, uvicorn) are left alone.
    """

    global _CONFIGURED
    if _CONFIGURED and not force:
        return

    stream = logging.StreamHandler()
    stream.setFormatter(
        jsonlogger.JsonFormatter("%(asctime)s %(levelname)s %(name)s %(message)s %(service)s")
    )
    stream.addFilter(_ServiceNameFilter(settings.service_name))
    buffer = _BufferHandler()

    root = logging.getLogger()
    for handler in [h for h in root.handlers if _owned(h)]:
        root.removeHandler(handler)
    for handler in (stream, buffer):
        handler._service_request = True
        root.addHandler(handler)
    root.setLevel(settings.log_level.upper())
    logging.captureWarnings(True)
    _CONFIGURED = True


def get_log_buffer(limit: int = 100, level: str | None = None) -> list[dict[str, Any]]:
    entries = list(_LOG_BUFFER)
    if level:
        threshold = logging.getLevelName(level.upper())
        if isinstance(threshold, int):
            entries = [e for e in entries if logging.getLevelName(e["level"]) >= threshold]
    return entries[:limit]


__all__ = ["CONTEXT_FIELDS", "setup_logging", "get_log_buffer"]
