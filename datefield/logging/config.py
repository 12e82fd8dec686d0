"""
Structured logging setup for the datefield engine.

Every module logs through structlog on top of the stdlib ``logging``
backend. Applications call configure_logging() (or configure_from_params()
with the ``logging`` section of a loaded config) once at startup; library
code only asks for loggers.
"""
import logging
import sys
from typing import Any, Optional, TextIO

import structlog
from structlog.types import FilteringBoundLogger, Processor

from ..config.defaults import LoggingParams


def _shared_processors(include_timestamp: bool, include_caller: bool) -> list[Processor]:
    """Processors applied to every event before rendering."""
    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso", utc=True))

    if include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder(
            parameters=[structlog.processors.CallsiteParameter.MODULE,
                        structlog.processors.CallsiteParameter.FUNC_NAME]
        ))

    return processors


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    include_caller: bool = False,
    stream: Optional[TextIO] = None
) -> None:
    """
    Configure structlog and the stdlib root logger.

    Args:
        level: Level name (DEBUG, INFO, WARNING, ERROR, CRITICAL), any case
        format_json: Render JSON lines instead of the console format
        include_timestamp: Add an ISO-8601 UTC timestamp to each event
        include_caller: Add module and function name of the call site
        stream: Output stream, stdout by default
    """
    log_level = getattr(logging, level.upper())

    logging.basicConfig(
        level=log_level,
        stream=stream or sys.stdout,
        format="%(message)s",
    )

    processors = _shared_processors(include_timestamp, include_caller)
    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=stream is None))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_from_params(params: LoggingParams, **kwargs: Any) -> None:
    """Apply the ``logging`` section of a loaded configuration."""
    configure_logging(level=params.level, format_json=params.format_json, **kwargs)


def loggable_text(value: Any) -> Any:
    """
    Make user-typed text safe for any log renderer.

    Lone surrogates cannot be encoded as UTF-8 and break stream loggers, so
    they are backslash-escaped. Other characters are kept as typed.
    """
    if not isinstance(value, str):
        return value
    return value.encode("utf-8", "backslashreplace").decode("utf-8")


def get_logger(name: str) -> FilteringBoundLogger:
    """Return a structlog logger named after the calling module."""
    return structlog.get_logger(name)


def get_field_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger for date field session events.

    Events carry ``subsystem="date_field"`` so commit and navigation logs can
    be filtered apart from parser debug output.
    """
    return get_logger(name).bind(subsystem="date_field")


def log_commit(
    logger: FilteringBoundLogger,
    field: str,
    outcome: str,
    raw: str,
    value: Optional[str],
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Emit the standard field commit event.

    Args:
        logger: Structlog logger instance
        field: Name of the field being committed
        outcome: "committed", "cleared" or "rejected"
        raw: Display text at commit time
        value: Canonical value after the commit
        context: Grammar, failure kind or commit source
    """
    event_logger = logger.bind(field=field, outcome=outcome, raw=loggable_text(raw), value=value)

    if context:
        event_logger = event_logger.bind(context=context)

    if outcome == "rejected":
        event_logger.warning("Date field commit rejected")
    else:
        event_logger.info("Date field commit")
