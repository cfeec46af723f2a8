"""Structured logging setup for runway.

Diagnostics go to stderr through structlog on top of the stdlib logging
backend. User-facing output stays on the rich console.
"""

import logging
import sys

import structlog


def configure_logging(verbose: bool = False) -> None:
    """Configure structlog once for the whole process.

    Args:
        verbose: Log INFO events as well as warnings and errors.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=logging.INFO if verbose else logging.WARNING,
        force=True,
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a named structured logger."""
    return structlog.get_logger(name)
