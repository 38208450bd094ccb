"""Structured logging for the client, bridged onto the standard library."""

from __future__ import annotations

import logging
from typing import Any

import structlog

# Transport chatter is only interesting when something is already wrong.
NOISY_LIBRARIES = ("httpx", "httpcore", "watchdog")


def _renderer(json_output: bool) -> Any:
    if json_output:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def setup_logging(level: str = "INFO", *, json_output: bool = False) -> None:
    """Route structlog events through stdlib logging at ``level``."""

    logging.basicConfig(level=level, format="%(message)s")
    for name in NOISY_LIBRARIES:
        logging.getLogger(name).setLevel(max(logging.WARNING, logging.getLevelName(level)))
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            _renderer(json_output),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str, **context: Any) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger named ``name`` with ``context`` bound to every event."""

    logger = structlog.get_logger(name)
    return logger.bind(**context) if context else logger


__all__ = ["get_logger", "setup_logging"]
