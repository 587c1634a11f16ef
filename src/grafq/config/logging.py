"""structlog configuration for grafq.

Two renderers:
- Human (default): colored console output
- JSON (--log-json): structured JSON lines

Two destinations:
- stderr (default), WARNING+ unless --verbose
- a log file, when ``GRAFQ_LOG`` names a level; keeps the console clean
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import structlog

_NOISY_LOGGERS = ("neo4j", "botocore", "boto3", "urllib3", "asyncio")


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    level: str | None = None,
    log_file: Path | None = None,
) -> None:
    """Configure structlog processors and output routing.

    Args:
        verbose: Enable DEBUG-level output. When False, only WARNING+.
        log_json: Use JSON renderer instead of console renderer.
        level: Explicit level name (e.g. ``"debug"``); overrides *verbose*.
        log_file: Append logs to this file instead of stderr.

    Raises:
        ValueError: If *level* is not a known level name.
    """
    if level:
        grafq_level = logging.getLevelName(level.upper())
        if not isinstance(grafq_level, int):
            raise ValueError(f"unknown log level: {level}")
    else:
        grafq_level = logging.DEBUG if verbose else logging.WARNING

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if log_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    elif log_file is not None:
        renderer = structlog.dev.ConsoleRenderer(colors=False)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler: logging.Handler
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger("grafq").setLevel(grafq_level)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
