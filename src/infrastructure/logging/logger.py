"""
Structured JSON logging for the service.

configure_logging() is called once by the app factory; modules log through
logging.getLogger(__name__) and inherit the root JSON handler.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Optional, Union

_configured_handler: Optional[logging.Handler] = None


class JsonFormatter(logging.Formatter):
    """Emit one JSON object per record with stable keys."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.now(tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            exc_type, exc_value, _ = record.exc_info
            if exc_type is not None:
                payload["exc_type"] = exc_type.__name__
            if exc_value is not None:
                payload["exc_message"] = str(exc_value)
        return json.dumps(payload, separators=(",", ":"), ensure_ascii=False)


def configure_logging(level: Union[str, int] = "INFO") -> None:
    """Install the JSON handler on the root logger (idempotent)."""
    global _configured_handler
    root = logging.getLogger()
    root.setLevel(level)
    if _configured_handler is not None:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    root.addHandler(handler)
    _configured_handler = handler
