"""structlog setup."""

import logging

import structlog


def configure_logging(level: str = "INFO") -> None:
    """Configure structlog with console rendering at `level`.

    Args:
        level: Standard logging level name (DEBUG, INFO, WARNING, ...)

    Raises:
        ValueError: If level is not a known logging level name
    """
    log_level = logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        raise ValueError(f"Unknown log level: {level}")

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
    )
