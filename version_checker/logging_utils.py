from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import TextIO


_EXTRA_KEYS = ("binary", "minimum_version", "actual_version", "working_dir", "code")
_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def _record_extras(record: logging.LogRecord) -> dict[str, object]:
    extras: dict[str, object] = {}
    for key in _EXTRA_KEYS:
        value = getattr(record, key, None)
        if value is not None:
            extras[key] = value
    return extras


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(_record_extras(record))
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


class KeyValueFormatter(logging.Formatter):
    """Plain text lines with check context appended as key=value pairs."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extras = _record_extras(record)
        if not extras:
            return line
        return line + " " + " ".join(f"{k}={v}" for k, v in extras.items())


def setup_logging(level: str = "INFO", *, json_output: bool = False, stream: TextIO | None = None) -> None:
    # Avoid duplicate handlers if called multiple times
    root = logging.getLogger()
    if root.handlers:
        return

    # stdout is reserved for CLI reports
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(JsonFormatter() if json_output else KeyValueFormatter(_TEXT_FORMAT))
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.addHandler(handler)
