"""Logging configuration module."""

from logging import (
    INFO,
    Handler,
    Logger,
    StreamHandler,
    getLevelNamesMapping,
    getLogger,
)
from typing import cast

import structlog
from structlog import dev, processors, stdlib
from structlog.processors import JSONRenderer, TimeStamper, dict_tracebacks
from structlog.stdlib import BoundLogger


def configure_logging(
    testing: bool = False, level: str = "INFO", json_logs: bool = True
) -> None:
    """Configure structured logging for the package.

    Args:
        testing: Whether the package is running under the test suite
        level: Log level name, case insensitive
        json_logs: Render JSON lines instead of the console renderer
    """
    log_level = getLevelNamesMapping().get(level.upper(), INFO)
    use_json = json_logs and not testing

    package_logger: Logger = getLogger("locref")
    package_logger.setLevel(log_level)

    handler: Handler = StreamHandler()
    handler.setLevel(log_level)

    # Define shared processors
    shared_processors = [
        stdlib.add_logger_name,
        stdlib.add_log_level,
        stdlib.PositionalArgumentsFormatter(),
        TimeStamper(fmt="%Y-%m-%d %H:%M:%S.%f"),
        dict_tracebacks,
    ]

    # Configure structlog
    structlog.configure(
        processors=[
            stdlib.filter_by_level,
            *shared_processors,
            processors.format_exc_info,
            JSONRenderer() if not testing else processors.KeyValueRenderer(),
        ],
        context_class=dict,
        logger_factory=stdlib.LoggerFactory(),
        wrapper_class=stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = stdlib.ProcessorFormatter(
        processor=processors.JSONRenderer() if use_json else dev.ConsoleRenderer(),
        foreign_pre_chain=shared_processors,
    )
    handler.setFormatter(formatter)

    # Replace handlers from an earlier call
    package_logger.handlers = []
    package_logger.propagate = False
    package_logger.addHandler(handler)


def get_logger(name: str | None = None) -> BoundLogger:
    """Get a configured logger instance.

    Args:
        name: Optional logger name, usually the calling module's ``__name__``

    Returns:
        A structured logger instance.
    """
    return cast(BoundLogger, structlog.get_logger(name))


def get_reference_logger(
    reference: str | None = None, format: str | None = None
) -> BoundLogger:
    """Get a logger bound to a location reference being resolved.

    Args:
        reference: Optional raw location reference
        format: Optional location reference format

    Returns:
        Configured logger with reference context
    """
    logger: BoundLogger = get_logger("locref.resolver")
    if reference is not None:
        logger = logger.bind(location_reference=reference)
    if format is not None:
        logger = logger.bind(format=format)
    return logger
