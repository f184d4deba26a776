"""Structlog setup shared by the API process and the maintenance scripts.

Probes log through structlog only; this module decides how those events
are rendered. Interactive terminals get colored key/value lines, anything
else (containers, cron) gets one JSON object per line.
"""

import logging
import os
import sys

import structlog

_TRUTHY = ("1", "true", "yes")


def _wants_colors() -> bool:
    # FORCE_COLOR=1 keeps colors when stdout is not a TTY (docker compose logs)
    if os.environ.get("FORCE_COLOR", "").lower() in _TRUTHY:
        return True
    return sys.stdout.isatty()


def _renderer_chain(use_colors: bool) -> list[structlog.types.Processor]:
    if use_colors:
        return [structlog.dev.ConsoleRenderer(colors=True)]
    # Tracebacks go into the event so a 500 keeps its full detail server-side
    return [
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ]


def configure_logging(debug: bool = False) -> None:
    """Configure structlog for the current process.

    Tenant lookups and session validations log at debug level and are
    dropped unless ``debug`` is set.

    Args:
        debug: Emit debug-level events in addition to info and above.
    """
    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        *_renderer_chain(_wants_colors()),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.DEBUG if debug else logging.INFO
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
