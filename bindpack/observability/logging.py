from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, MutableMapping

# Attributes every LogRecord carries; anything else arrived through `extra`.
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}

_LOGGER_KWARGS = ("exc_info", "stack_info", "stacklevel")


class JsonFormatter(logging.Formatter):
    """Render a record as one JSON line with its extra fields at top level."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        fields = {k: v for k, v in vars(record).items() if k not in _RECORD_ATTRS and not k.startswith("_")}
        payload.update(fields)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=repr)


class KVLogger(logging.LoggerAdapter):
    """`log.info("event", key=value)`: keyword arguments become record fields."""

    def __init__(self, logger: logging.Logger) -> None:
        super().__init__(logger, {})

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> tuple[Any, MutableMapping[str, Any]]:
        passthrough = {k: kwargs.pop(k) for k in _LOGGER_KWARGS if k in kwargs}
        fields = dict(kwargs.pop("extra", None) or {})
        fields.update(kwargs)
        return msg, {**passthrough, "extra": fields}


def configure_logging(*, level: str = "WARNING") -> None:
    """Send JSON records to stderr. Repeat calls only change the level."""

    root = logging.getLogger()
    root.setLevel(level.upper())
    if any(getattr(h, "_bindpack", False) for h in root.handlers):
        return

    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(JsonFormatter())
    handler._bindpack = True  # type: ignore[attr-defined]
    root.handlers.clear()
    root.addHandler(handler)


def get_logger(name: str = "bindpack") -> KVLogger:
    return KVLogger(logging.getLogger(name))
