"""Logging utilities for gitstage.

This module provides standalone structlog logger factories that write
JSON-formatted or text-formatted logs to stderr or to a log file. Each
logger is self-contained and does not modify global structlog configuration.
"""

import logging
import sys
from functools import cache
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING, Literal, TextIO, cast

import structlog

from gitstage.config import LoggingConfig, load_logging_config
from gitstage.exceptions import ConfigValidationError

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

LogFormatType = Literal["json", "text"]


def _log_level_from_string(level: str) -> int:
    """Convert a log level string to a logging level integer.

    Args:
        level: Log level string (debug, info, warning, error).

    Returns:
        The logging level as an integer.
    """
    log_levels = logging.getLevelNamesMapping()
    return log_levels.get(level.upper(), logging.INFO)


def _create_logger(
    log_file_path: str = "",
    *,
    log_level: int = logging.WARNING,
    log_format: LogFormatType = "text",
    max_bytes: int | None = None,
    backup_count: int | None = None,
    stream: TextIO | None = None,
) -> "FilteringBoundLogger":  # noqa: UP037
    """Create a standalone structlog logger.

    Args:
        log_file_path: Path to the log file (opened in append mode). Empty
            writes to ``stream`` instead.
        log_level: Minimum level that is emitted.
        log_format: Output format, either "json" or "text".
        max_bytes: Maximum size in bytes before rotation. Must be set with
            backup_count for rotation to be enabled.
        backup_count: Number of rotated log files to keep. Must be set with
            max_bytes for rotation to be enabled.
        stream: Stream used when no log file is given. Defaults to stderr.

    Returns:
        A configured FilteringBoundLogger instance.
    """
    stdlib_logger: logging.Logger | None = None
    if log_file_path:
        log_path = Path(log_file_path)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        if max_bytes is not None and backup_count is not None:
            # Rotation goes through stdlib logging; structlog still renders
            stdlib_logger = logging.getLogger(f"gitstage.{log_path.stem}.{id(log_path)}")
            stdlib_logger.handlers.clear()
            stdlib_logger.propagate = False
            stdlib_logger.setLevel(log_level)

            handler = RotatingFileHandler(
                log_path,
                maxBytes=max_bytes,
                backupCount=backup_count,
            )
            handler.setLevel(log_level)
            handler.setFormatter(logging.Formatter("%(message)s"))
            stdlib_logger.addHandler(handler)

            logger_factory = structlog.stdlib.LoggerFactory()
        else:
            logger_factory = structlog.WriteLoggerFactory(file=log_path.open("a"))
    else:
        logger_factory = structlog.WriteLoggerFactory(
            file=stream if stream is not None else sys.stderr
        )

    processors: list[structlog.typing.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if log_format == "json":
        processors.append(structlog.processors.dict_tracebacks)
        processors.append(structlog.processors.JSONRenderer())
    else:
        # "timestamp [level] event key=value ..."
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    wrapper_class = structlog.make_filtering_bound_logger(log_level)
    raw_logger = stdlib_logger if stdlib_logger is not None else logger_factory()

    return cast(
        "FilteringBoundLogger",
        structlog.wrap_logger(
            raw_logger,
            processors=processors,
            wrapper_class=wrapper_class,
            context_class=dict,
        ),
    )


def create_logger(
    config: LoggingConfig | None = None,
    *,
    max_bytes: int | None = None,
    backup_count: int | None = None,
    stream: TextIO | None = None,
) -> "FilteringBoundLogger":  # noqa: UP037
    """Create a logger from library logging settings.

    Args:
        config: Logging settings. Loaded from the environment if None.
        max_bytes: Maximum size in bytes before rotation (file output only).
        backup_count: Number of rotated log files to keep (file output only).
        stream: Stream used when the settings name no log file.

    Returns:
        A FilteringBoundLogger instance.

    Raises:
        ConfigValidationError: If config is None and the environment holds
            an invalid logging setting.
    """
    if config is None:
        config = load_logging_config()

    return _create_logger(
        config.file,
        log_level=_log_level_from_string(config.level.value),
        log_format=cast("LogFormatType", config.format.value),
        max_bytes=max_bytes,
        backup_count=backup_count,
        stream=stream,
    )


@cache
def _library_logger() -> "FilteringBoundLogger":  # noqa: UP037
    """Build the shared library logger from the environment on first use."""
    try:
        return create_logger()
    except ConfigValidationError as e:
        logger = create_logger(LoggingConfig())
        logger.warning(
            "invalid_logging_config",
            key=e.key,
            value=str(e.value),
            expected=e.expected,
        )
        return logger


def get_logger(component: str) -> "FilteringBoundLogger":  # noqa: UP037
    """Get the library logger bound to a component name.

    Args:
        component: Short component name bound to every entry (e.g., "staging").

    Returns:
        A FilteringBoundLogger with ``component`` bound.
    """
    return _library_logger().bind(component=component)
