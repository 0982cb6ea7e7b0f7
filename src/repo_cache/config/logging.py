"""Structured logging configuration using structlog.

Usage:
    from repo_cache.config.logging import configure_logging

    configure_logging(log_level="DEBUG")
    logger = structlog.get_logger(__name__)
    logger.info("Repository installed", name="wordlists")
"""

import logging
import sys

import structlog
from structlog.types import Processor


def configure_logging(log_level: str = "WARNING", json_logs: bool = False) -> None:
    """Configure stdlib logging and structlog for the application.

    Logs go to stderr so that command output on stdout stays machine-readable.
    """
    level = getattr(logging, log_level.upper(), logging.WARNING)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=level,
    )

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if json_logs:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )
