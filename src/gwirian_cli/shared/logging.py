"""Logging configuration for gwirian-cli.

Configures structlog with human-readable output on stderr so that stdout
stays clean for rendered results and piped JSON.
"""

import logging
import sys

import structlog

# -v count -> log level
VERBOSITY_LEVELS = {0: "warning", 1: "info"}


def level_for_verbosity(verbose: int) -> str:
    """Map the root --verbose count to a log level name."""
    return VERBOSITY_LEVELS.get(verbose, "debug")


def configure_logging(level: str = "warning") -> None:
    """Configure logging for the application.

    Called once by the root command group. Configures both standard logging
    and structlog.

    Args:
        level: Log level (debug, info, warning, error, critical)
    """
    log_level = getattr(logging, level.upper(), logging.WARNING)

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setLevel(log_level)

    logging.basicConfig(
        level=log_level,
        handlers=[stream_handler],
        format="%(message)s",
        force=True,
    )

    processors: list[structlog.types.Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        structlog.dev.ConsoleRenderer(colors=False),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)
