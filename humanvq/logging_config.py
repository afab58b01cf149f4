"""
Centralized logging configuration for HumanVQ.

Uses structlog on top of the standard library so that module loggers created
with ``structlog.get_logger(__name__)`` share one set of processors.
"""

import logging
import sys
from typing import Optional

import structlog


def setup_logging(level: str = "INFO", json_logs: bool = True) -> None:
    """
    Configure structlog and the stdlib root logger.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        json_logs: Render JSON lines (production) instead of console output
    """
    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if json_logs:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
    )


def configure_from_settings(settings: Optional[object] = None) -> None:
    """Configure logging from ``humanvq.config.Settings``."""
    if settings is None:
        from humanvq.config import get_settings

        settings = get_settings()
    setup_logging(level=settings.LOG_LEVEL, json_logs=settings.json_logs)
