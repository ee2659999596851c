"""structlog configuration for org-kubectl.

All log output goes to stderr so stdout stays a clean project list.
``-v`` raises the app loggers to INFO and ``-vv`` to DEBUG; ``--log-json``
switches the console renderer for JSON lines.
"""

from __future__ import annotations

import logging
import sys

import structlog

APP_LOGGER = "orgkubectl"

# Client libraries that log every HTTP request at INFO/DEBUG.
_NOISY_LOGGERS = ("googleapiclient", "google.auth", "urllib3")

_LEVELS = (logging.WARNING, logging.INFO, logging.DEBUG)


def _level_for(verbosity: int) -> int:
    return _LEVELS[min(max(verbosity, 0), len(_LEVELS) - 1)]


def _shared_processors() -> list[structlog.types.Processor]:
    """Processors applied to structlog and stdlib records alike."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(log_json: bool) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(*, verbosity: int = 0, log_json: bool = False) -> None:
    """Route structlog and stdlib logging through one stderr handler.

    Safe to call more than once; each call replaces the root handler.

    Args:
        verbosity: Number of ``-v`` flags. 0 logs WARNING+, 1 adds INFO,
            2 or more adds DEBUG.
        log_json: Emit JSON lines instead of console-formatted text.
    """
    shared = _shared_processors()
    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    logging.getLogger(APP_LOGGER).setLevel(_level_for(verbosity))
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
