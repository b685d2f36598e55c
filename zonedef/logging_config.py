"""Structured logging setup for command line use."""

import logging
import sys

import structlog


def setup_logging(log_level: str = "INFO", json_output: bool | None = None) -> None:
    """
    Configure structured logging.

    Args:
        log_level: Minimum level name (DEBUG, INFO, WARNING, ERROR)
        json_output: Render JSON lines; defaults to True when stderr is not a TTY
    """
    if json_output is None:
        json_output = not sys.stderr.isatty()

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, log_level.upper(), logging.INFO),
        force=True,
    )

    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer()
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
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
