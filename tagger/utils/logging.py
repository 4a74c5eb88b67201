"""structlog setup for tagger.

Every record passes through one processor chain (context variables, level,
stack info, exception info, ISO timestamp) and ends in either a console
renderer or, when ``APP_ENV`` is ``production``, a JSON renderer with one
object per line.  Output goes to stderr.

The batch processor binds the current file path as a context variable
(:func:`bound_file_context`), so provider and enricher events logged while
that file is handled carry ``path`` without passing it around.

httpx reports each request through stdlib ``logging``; those records are
routed through the same renderer and held at WARNING unless the run is at
DEBUG.
"""

from __future__ import annotations

import logging
import os
import sys
from contextlib import AbstractContextManager

import structlog

# Stdlib loggers that log once per HTTP request at INFO.
_CHATTY_LOGGERS = ("httpx", "httpcore")


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]


def configure_logging(log_level: str = "INFO", json_output: bool = False) -> structlog.BoundLogger:
    """Configure structlog and the stdlib bridge.

    Args:
        log_level: DEBUG, INFO, WARNING or ERROR (case-insensitive).
        json_output: Force the JSON renderer.  Without it JSON is still used
            when the ``APP_ENV`` environment variable is ``production``.

    Returns:
        A logger bound to the new configuration.
    """
    level_name = log_level.upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level_name, level = "INFO", logging.INFO

    use_json = json_output or os.environ.get("APP_ENV", "development") == "production"
    renderer: structlog.types.Processor
    if use_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    processors = _shared_processors()
    structlog.configure(
        processors=[*processors, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                *processors,
                renderer,
            ],
        )
    )
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level_name)

    chatty_level = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(chatty_level)

    return structlog.get_logger()


def get_logger(name: str) -> structlog.BoundLogger:
    """Return a logger tagged with ``logger_name``; configures defaults on first use."""
    if not structlog.is_configured():
        configure_logging()
    return structlog.get_logger(logger_name=name)


def bound_file_context(path: str) -> AbstractContextManager[None]:
    """Bind ``path`` to every event logged inside the ``with`` block."""
    return structlog.contextvars.bound_contextvars(path=path)
