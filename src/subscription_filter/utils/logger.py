"""JSON logger used across the plugin.

Emits one JSON object per record with the deployment stage and service name
attached when they are bound to the adapter.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Optional


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        payload: Dict[str, Any] = {
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in ("stage", "service", "function", "log_group_name"):
            value = getattr(record, key, None)
            if value:
                payload[key] = value
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        payload["timestamp"] = record.created
        return json.dumps(payload, ensure_ascii=False)


class _Adapter(logging.LoggerAdapter):
    def process(self, msg: Any, kwargs: Dict[str, Any]):  # type: ignore[override]
        extra = self.extra.copy() if isinstance(self.extra, dict) else {}
        if "extra" in kwargs and isinstance(kwargs["extra"], dict):
            extra.update(kwargs["extra"])  # merge per-call extras
        kwargs["extra"] = extra
        return msg, kwargs


def get_logger(
    name: str,
    stage: Optional[str] = None,
    service: Optional[str] = None,
    level: Optional[str] = None,
) -> logging.LoggerAdapter:
    """Return a JSON-formatted logger adapter bound to stage/service when given."""
    base = logging.getLogger(name)
    if not base.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(_JsonFormatter())
        base.addHandler(handler)
    level = (level or os.environ.get("SUBSCRIPTION_FILTER_LOG_LEVEL") or "INFO").strip().upper()
    base.setLevel(getattr(logging, level, logging.INFO))
    extras: Dict[str, Any] = {}
    if stage:
        extras["stage"] = stage
    if service:
        extras["service"] = service
    return _Adapter(base, extras)
