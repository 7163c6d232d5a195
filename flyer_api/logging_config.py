# flyer_api/logging_config.py
"""
Structured logging for the flyer backend.

structlog events and plain stdlib records (uvicorn, SQLAlchemy) share one
processor chain and one stdout handler, so every line carries the same
request_id, trace ids and timestamp format.
"""

import logging
import sys
from typing import IO, Any, List, Optional

import structlog
from opentelemetry import trace

from flyer_api.config import get_settings

# Loggers that install their own handlers; they are made to propagate to root.
_FOREIGN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access", "sqlalchemy")

_handler: Optional[logging.Handler] = None


def add_open_telemetry_spans(_, __, event_dict):
    """
    Stamp each event with the active trace and span ids (None outside a span).
    """
    span = trace.get_current_span()
    if not span.is_recording():
        event_dict["trace_id"] = None
        event_dict["span_id"] = None
        return event_dict

    ctx = span.get_span_context()
    event_dict["trace_id"] = format(ctx.trace_id, "032x")
    event_dict["span_id"] = format(ctx.span_id, "016x")
    return event_dict


def _shared_processors() -> List[Any]:
    return [
        structlog.contextvars.merge_contextvars,
        add_open_telemetry_spans,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]


def configure_logging(stream: Optional[IO[str]] = None) -> None:
    """
    Install the processor chain and the root handler.

    Output is JSON lines when LOG_FORMAT is "json", colored console text
    otherwise. Safe to call more than once; the previous handler is replaced.
    """
    global _handler
    settings = get_settings()
    shared = _shared_processors()

    if settings.LOG_FORMAT == "json":
        renderer: Any = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    root = logging.getLogger()
    if _handler is not None:
        root.removeHandler(_handler)
    root.addHandler(handler)
    root.setLevel(settings.LOG_LEVEL.upper())
    _handler = handler

    for name in _FOREIGN_LOGGERS:
        foreign = logging.getLogger(name)
        foreign.handlers.clear()
        foreign.propagate = True


__all__ = ["configure_logging", "add_open_telemetry_spans"]
