"""Logging configuration for datecal."""

import logging
import sys
import time
from contextlib import contextmanager
from typing import Generator, TextIO

import structlog

from datecal.validation import InvalidArgumentError


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a structlog logger."""
    return structlog.get_logger(name)


def configure_logging(
    level: str = "WARNING",
    json_output: bool = False,
    stream: TextIO | None = None,
) -> None:
    """Configure datecal logging.

    Calendars log every change event at debug level and the date loader
    logs at info, so "DEBUG" is the level to use when tracing listeners.
    Only structlog is configured; the stdlib root logger is left alone.

    Args:
        level: Log level ("DEBUG", "INFO", "WARNING", "ERROR")
        json_output: True for JSON output (production), False for console
        stream: Where rendered events are written. Defaults to stderr.

    Raises:
        InvalidArgumentError: If level is not a known level name.
    """
    level_no = logging.getLevelName(level.upper())
    if not isinstance(level_no, int):
        raise InvalidArgumentError(f"Unknown log level: {level!r}")

    shared_processors = [
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_output:
        processors = shared_processors + [structlog.processors.JSONRenderer()]
    else:
        processors = shared_processors + [structlog.dev.ConsoleRenderer(colors=True)]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level_no),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream or sys.stderr),
        cache_logger_on_first_use=True,
    )


@contextmanager
def timed_block(
    logger: structlog.BoundLogger,
    event: str,
    level: str = "debug",
    **fields,
) -> Generator[dict, None, None]:
    """Context manager for timing code blocks.

    Yields a dict; keys added to it inside the block are logged alongside
    the elapsed time. If the block raises, the event is logged at warning
    level with ``failed=True`` and the exception propagates.
    """
    extra: dict = dict(fields)
    start = time.perf_counter()
    try:
        yield extra
    except Exception as e:
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.warning(
            event,
            elapsed_ms=round(elapsed_ms, 2),
            failed=True,
            error=type(e).__name__,
            **extra,
        )
        raise
    elapsed_ms = (time.perf_counter() - start) * 1000
    getattr(logger, level)(event, elapsed_ms=round(elapsed_ms, 2), **extra)
