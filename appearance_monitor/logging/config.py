"""
Centralized logging configuration for the appearance monitor.

This module configures structlog on top of the standard library logging
module. Log output always goes to stderr: stdout carries the snapshot
stream and must contain nothing but JSON lines.
"""
import logging
import sys
from typing import Any, Optional, Sequence

import structlog
from structlog.types import FilteringBoundLogger


def configure_logging(
    level: str = "WARNING",
    format_json: bool = False,
    include_timestamp: bool = True,
    include_caller: bool = False,
    extra_processors: Optional[list] = None
) -> None:
    """
    Configure structlog for the entire application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output JSON format; otherwise human-readable
        include_timestamp: Include timestamp in log output
        include_caller: Include caller information (filename, line number)
        extra_processors: Additional structlog processors to include
    """
    log_level = getattr(logging, level.upper())

    logging.basicConfig(
        level=log_level,
        stream=sys.stderr,
        format="%(message)s",  # structlog will handle formatting
        force=True,
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder(
            parameters=[structlog.processors.CallsiteParameter.FILENAME,
                       structlog.processors.CallsiteParameter.LINENO]
        ))

    if extra_processors:
        processors.extend(extra_processors)

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)


def get_portal_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger bound for settings portal traffic.

    The context is passed as initial values so the logger stays lazy and
    picks up whatever configure_logging installs later, even when it is
    created at import time.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger for provider calls and signals
    """
    return structlog.get_logger(name, subsystem="portal")


def log_snapshot_change(
    logger: FilteringBoundLogger,
    sequence: int,
    changed: Sequence[str],
    snapshot: Any,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log an emitted snapshot with standardized format.

    Args:
        logger: Structlog logger instance
        sequence: Position of the snapshot in the emitted sequence
        changed: Names of the fields that differ from the previous snapshot
        snapshot: The emitted snapshot
        context: Additional context data
    """
    bound_logger = logger.bind(
        sequence=sequence,
        changed=list(changed),
        snapshot=repr(snapshot),
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.debug("Snapshot emitted")
