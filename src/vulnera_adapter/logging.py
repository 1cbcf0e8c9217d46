"""Logging configuration.

All output goes to stderr. stdout is reserved for the language server
protocol spoken by the adapter once it is launched.
"""
import datetime
import json
import logging
import sys
from typing import Any, List

import structlog
from structlog.types import EventDict, Processor

STDERR_LOG_LEVEL = "INFO"
IGNORED_LOGGERS = [
    "aiohttp",
    "asyncio"
]


def add_timestamp(_, __, event_dict: EventDict) -> EventDict:
    """Add ISO timestamp to the event dict."""
    if "timestamp" not in event_dict:
        event_dict["timestamp"] = datetime.datetime.now(datetime.timezone.utc).isoformat()
    return event_dict


def level_filter(logger: Any, name: str, event_dict: EventDict) -> EventDict:
    """Drop records below the stderr level and records from noisy libraries."""
    try:
        if not any(ignored in logger.name for ignored in IGNORED_LOGGERS):
            level_no = getattr(logging, event_dict.get("level", "NOTSET").upper())
            min_level = getattr(logging, STDERR_LOG_LEVEL)
            if level_no >= min_level:
                return event_dict
        raise structlog.DropEvent
    except AttributeError:
        return event_dict


class CompactJSONRenderer:
    """Single-line JSON renderer with minimal output."""
    def __call__(self, _: Any, __: str, event_dict: EventDict) -> str:
        items = {
            "ts": event_dict.pop("timestamp", None),
            "lvl": event_dict.pop("level", "???"),
            "msg": event_dict.pop("event", ""),
        }
        if other := dict(event_dict):
            items["data"] = other
        return json.dumps(items, separators=(",", ":"), default=str)


def configure_logging(level: str = "INFO") -> None:
    """Configure structured logging for the adapter manager.

    stderr gets compact JSON when it is not a terminal (the usual case when
    an editor captures extension output) and coloured console output when a
    person is watching.
    """
    global STDERR_LOG_LEVEL
    STDERR_LOG_LEVEL = level.upper()

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, STDERR_LOG_LEVEL)
    )

    json_processors: List[Processor] = [
        structlog.stdlib.add_log_level,
        level_filter,
        add_timestamp,
        CompactJSONRenderer()
    ]

    console_processors: List[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.dev.ConsoleRenderer(colors=True)
    ]

    structlog.configure(
        processors=console_processors if sys.stderr.isatty() else json_processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_library_defaults() -> None:
    """Route events through stdlib logging without installing handlers.

    Used when the host embeds the package without calling configure_logging.
    Records then reach the host's own handlers, or stdlib's last-resort
    stderr handler, and never stdout.
    """
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            add_timestamp,
            CompactJSONRenderer()
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    if not structlog.is_configured():
        configure_library_defaults()
    return structlog.get_logger(name)
