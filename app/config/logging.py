"""Process-wide logging setup with JSON or plain-text output."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone

_EXTRA_FIELDS = ("user_id", "role", "report_kind", "error_code")


class JsonLogFormatter(logging.Formatter):
    """Render log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field_name in _EXTRA_FIELDS:
            field_value = record.__dict__.get(field_name)
            if field_value is not None:
                payload[field_name] = field_value
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def config_configure_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Install one root stream handler.

    Args:
        level: Logging level name.
        fmt: `json` for structured output, anything else for plain text.

    Returns:
        None: Configures the root logger as side effect.
    """

    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JsonLogFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))

    root_logger = logging.getLogger()
    for existing_handler in list(root_logger.handlers):
        root_logger.removeHandler(existing_handler)
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
