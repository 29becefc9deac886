from __future__ import annotations

import logging
import sys
from uuid import uuid4

import structlog
from structlog.contextvars import bind_contextvars
from structlog.typing import FilteringBoundLogger

from stringset.config import StringSetConfig, get_settings


def _resolve_level(name: str) -> int:
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(config: StringSetConfig | None = None) -> str:
    """
    Configure structlog for the process and bind a fresh run_id.

    Returns the run_id so callers can correlate their own output with log lines.
    """
    cfg = config or get_settings()
    level = _resolve_level(cfg.logging.level)

    renderer: structlog.typing.Processor
    if cfg.logging.json_output:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )

    run_id = uuid4().hex
    bind_contextvars(run_id=run_id)
    return run_id


def get_logger(name: str) -> FilteringBoundLogger:
    # "logger" is a positional parameter of wrap_logger, so it cannot go through get_logger
    return structlog.get_logger().bind(logger=name)


__all__ = ["configure_logging", "get_logger"]
