"""
Centralized logging configuration for the projection engine.

This module provides standardized logging configuration using structlog
for all components. Host applications call ``configure_logging`` once;
library modules only ask for loggers.
"""
import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import FilteringBoundLogger


def configure_logging(
    level: str = "INFO",
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
        stream=sys.stdout,
        format="%(message)s"  # structlog will handle formatting
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
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

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


def get_calculation_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger bound to the calculation engine subsystem.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Structlog logger carrying ``subsystem="calculation_engine"``
    """
    logger = get_logger(name)

    return logger.bind(subsystem="calculation_engine")


def log_calculation(
    logger: FilteringBoundLogger,
    function_name: str,
    cache_hit: bool,
    execution_time_ms: float,
    input_size: int,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a completed calculation with standardized fields.

    Args:
        logger: Structlog logger instance
        function_name: Engine operation that ran
        cache_hit: Whether the result came from the cache
        execution_time_ms: Wall time spent in the call
        input_size: Coarse size of the input (iterations, debt count, ...)
        context: Additional context data
    """
    bound_logger = logger.bind(
        function_name=function_name,
        cache_hit=cache_hit,
        execution_time_ms=round(execution_time_ms, 3),
        input_size=input_size,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    if cache_hit:
        bound_logger.debug("Calculation served from cache")
    else:
        bound_logger.info("Calculation completed")
