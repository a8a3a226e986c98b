"""structlog configuration for the command-line interface."""

import logging
import sys

import structlog


def _stderr_logger(*args) -> structlog.PrintLogger:
    # Resolve sys.stderr per logger so redirected streams are honoured
    return structlog.PrintLogger(file=sys.stderr)


def configure_logging(verbose: bool = False) -> None:
    """Send structured log events to stderr.

    Args:
        verbose: Log debug events instead of warnings and errors only
    """
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.DEBUG if verbose else logging.WARNING
        ),
        logger_factory=_stderr_logger,
        cache_logger_on_first_use=False,
    )
