"""structlog configuration for datemath.

All log output goes to stderr so that computed dates and day counts on
stdout stay pipeable. Two renderers:

- Console (default): key/value lines, colored when stderr is a TTY
- JSON (--log-json): one JSON object per line

Library code logs through ``logging.getLogger(__name__)``; records from
those loggers pass through the same processor chain as structlog loggers.
"""

from __future__ import annotations

import logging
import sys

import structlog

PACKAGE_LOGGER = "datemath"


def _renderer(log_json: bool) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
) -> None:
    """Configure structlog processors and route records to stderr.

    Safe to call repeatedly; each call replaces the root handler.

    Args:
        verbose: Show DEBUG records from datemath loggers. Otherwise
            only WARNING and above.
        log_json: Render JSON lines instead of console lines.
    """
    pre_chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
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

    logging.getLogger(PACKAGE_LOGGER).setLevel(logging.DEBUG if verbose else logging.WARNING)
