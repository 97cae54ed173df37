"""Logging for reqwatch.

The module-level ``logger`` supports structured context via
``logger.with_context(...)``. Importing the package leaves log routing to the
host application: the ``reqwatch`` logger only carries a ``NullHandler``
until ``configure_logging`` is called, which the demo app factory does.
Records are rendered as JSON lines unless ``LOCAL_DEVELOPMENT`` is enabled.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import TYPE_CHECKING, Any, MutableMapping

if TYPE_CHECKING:
    from reqwatch.core.config import Settings

_LOGGER_NAME = "reqwatch"
_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class JsonFormatter(logging.Formatter):
    """Render a record and its bound context as a single JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        context = getattr(record, "context", None)
        if isinstance(context, dict):
            payload.update(context)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


class ContextualLogger(logging.LoggerAdapter):
    """LoggerAdapter that carries a dict of structured context fields."""

    def __init__(self, logger: logging.Logger, context: dict[str, Any] | None = None):
        super().__init__(logger, context or {})

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> tuple[Any, MutableMapping[str, Any]]:
        extra = kwargs.setdefault("extra", {})
        merged = dict(self.extra)
        merged.update(extra.pop("context", {}))
        extra["context"] = merged
        return msg, kwargs

    def with_context(self, **context: Any) -> "ContextualLogger":
        """Return a child logger with ``context`` merged into the current fields."""
        merged = dict(self.extra)
        merged.update(context)
        return ContextualLogger(self.logger, merged)


def configure_logging(settings: "Settings") -> ContextualLogger:
    """Attach a stdout handler to the ``reqwatch`` logger.

    Safe to call more than once; the handler is replaced, never duplicated.
    """
    base = logging.getLogger(_LOGGER_NAME)
    handler = logging.StreamHandler(sys.stdout)
    if settings.LOCAL_DEVELOPMENT:
        handler.setFormatter(logging.Formatter(_PLAIN_FORMAT))
    else:
        handler.setFormatter(JsonFormatter())

    base.handlers = [handler]
    base.setLevel(settings.LOG_LEVEL)
    base.propagate = False
    return logger


_base_logger = logging.getLogger(_LOGGER_NAME)
_base_logger.addHandler(logging.NullHandler())

logger = ContextualLogger(_base_logger)
