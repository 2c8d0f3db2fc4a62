"""Structured logging for chainhook.

structlog renders every line, on top of stdlib logging so host
applications keep control of handlers. Level and format come from
``Settings.log_level`` / ``Settings.log_format`` (``CHAINHOOK_LOG_LEVEL``,
``CHAINHOOK_LOG_FORMAT``) unless configure_logging() is called explicitly.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from structlog.typing import Processor

    from chainhook.config import Settings

_configured = False


def configure_logging(
    level: str = "INFO",
    format: str = "json",
) -> None:
    """Configure structured logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Unknown
            names fall back to INFO.
        format: "json" for machine-readable lines, "text" for a colored console.
    """
    global _configured

    log_level = getattr(logging, level.upper(), logging.INFO)

    # basicConfig is a no-op when the host already installed handlers,
    # so the level is applied separately.
    logging.basicConfig(format="%(message)s", stream=sys.stdout)
    logging.getLogger().setLevel(log_level)

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if format.lower() == "json":
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    _configured = True


def configure_from_settings(settings: Settings | None = None) -> None:
    """Configure logging from Settings (the global instance by default)."""
    if settings is None:
        from chainhook.config import settings as default_settings

        settings = default_settings

    configure_logging(level=settings.log_level, format=settings.log_format)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger, configuring from settings on first use."""
    if not _configured:
        configure_from_settings()

    return structlog.get_logger(name)  # type: ignore[no-any-return]


def bind_context(**kwargs: object) -> None:
    """Bind key-value pairs to every log line emitted in this context."""
    structlog.contextvars.bind_contextvars(**kwargs)


def unbind_context(*keys: str) -> None:
    """Remove keys previously bound with bind_context()."""
    structlog.contextvars.unbind_contextvars(*keys)


@contextmanager
def delivery_context(**kwargs: object) -> Iterator[None]:
    """Tag log lines with delivery tracing fields for the duration of a block.

    None values are not bound. Only the keys bound here are removed on exit.

    Example:
        ```python
        with delivery_context(request_key="req_1", rule_chain="rule_a"):
            logger.info("Posting event")  # includes request_key and rule_chain
        ```
    """
    bound = {key: value for key, value in kwargs.items() if value is not None}
    bind_context(**bound)
    try:
        yield
    finally:
        unbind_context(*bound)
