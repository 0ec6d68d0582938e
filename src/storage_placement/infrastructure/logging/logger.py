"""Structured logging setup using structlog."""

import logging
import os
from typing import Optional

import structlog

from storage_placement.config.schemas.logging_schema import LoggingConfig

LOGGER_NAME = "storage_placement"

_configured = False


def setup_logging(config: Optional[LoggingConfig] = None) -> structlog.stdlib.BoundLogger:
    """
    Set up structured logging for the application using structlog.

    :param config: Logging configuration; defaults are used when omitted.
    :return: Configured structlog logger instance.
    """
    global _configured
    config = config or LoggingConfig()

    shared_processors = [
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processor=structlog.dev.ConsoleRenderer(colors=False),
        foreign_pre_chain=shared_processors,
    )

    handlers: list[logging.Handler] = []
    if config.destination in ("file", "both"):
        os.makedirs(config.log_dir, exist_ok=True)
        handlers.append(
            logging.FileHandler(os.path.join(config.log_dir, config.filename), encoding="utf-8")
        )
    if config.destination in ("stdout", "both"):
        handlers.append(logging.StreamHandler())

    root_logger = logging.getLogger(LOGGER_NAME)
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, config.level.upper(), logging.INFO))
    root_logger.propagate = False

    # Azure SDK HTTP logging is noisy at INFO.
    logging.getLogger("azure").setLevel(logging.WARNING)

    _configured = True
    return structlog.get_logger(LOGGER_NAME)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a logger under the application namespace."""
    if not name.startswith(LOGGER_NAME):
        name = f"{LOGGER_NAME}.{name}"
    return structlog.get_logger(name)


def is_configured() -> bool:
    """Check whether setup_logging has run."""
    return _configured
