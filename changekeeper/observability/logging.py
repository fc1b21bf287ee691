"""Structured logging for changekeeper, backed by stdlib ``logging``.

Library loggers are structlog loggers wrapping ``logging.getLogger(
"changekeeper.<component>")``.  The ``changekeeper`` logger carries a
NullHandler, so a host that configures nothing sees no output at all.
Hosts either route the ``changekeeper`` logger through their own logging
setup or opt in to JSON lines with ``setup_logging``.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

import structlog

LOGGER_NAME = "changekeeper"

logging.getLogger(LOGGER_NAME).addHandler(logging.NullHandler())

_PROCESSORS = [
    structlog.stdlib.filter_by_level,
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.processors.StackInfoRenderer(),
    structlog.dev.set_exc_info,
    structlog.processors.TimeStamper(fmt="iso", utc=True, key="ts"),
    structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
]

# handler installed by setup_logging, replaced on every call
_handler: logging.Handler | None = None


def setup_logging(level: str = "info", stream: TextIO | None = None) -> None:
    """Emit changekeeper logs as JSON lines to *stream* (stderr by default).

    Only the ``changekeeper`` logger is touched; it stops propagating so the
    host's root handlers do not print the same events twice.
    """
    global _handler

    log_level = getattr(logging, level.upper(), logging.INFO)
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.processors.JSONRenderer(),
            ],
        )
    )

    logger = logging.getLogger(LOGGER_NAME)
    if _handler is not None:
        logger.removeHandler(_handler)
    logger.addHandler(handler)
    logger.setLevel(log_level)
    logger.propagate = False
    _handler = handler


def get_logger(component: str) -> structlog.stdlib.BoundLogger:
    """Get a logger for ``changekeeper.<component>`` bound with a component name."""
    return structlog.wrap_logger(  # type: ignore[no-any-return]
        logging.getLogger(f"{LOGGER_NAME}.{component}"),
        processors=_PROCESSORS,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        component=component,
    )
