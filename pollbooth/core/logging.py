"""Structured logging setup shared by the survey app and its services."""

from __future__ import annotations

import logging
import sys

import structlog
from structlog.types import Processor

from pollbooth.core.config import settings

_logging_configured = False


def configure_logging(level: str | None = None) -> None:
    """Route structlog through the stdlib root logger with a console renderer.

    Safe to call on every Streamlit rerun; only the first call has an effect.
    """

    global _logging_configured

    if _logging_configured:
        return

    log_level = (level or settings.log_level).upper()

    shared_processors: list[Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()),
            foreign_pre_chain=shared_processors,
        )
    )

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.addHandler(console_handler)
    root_logger.setLevel(log_level)

    # Streamlit's own loggers are chatty at INFO.
    logging.getLogger("streamlit").setLevel(logging.WARNING)

    structlog.get_logger("logging_setup").info("logging_configured", level=log_level)

    _logging_configured = True
