"""Structured logging configuration using structlog."""

import logging
import sys
from typing import Any

import structlog

QUIET_LOGGERS: tuple[str, ...] = ("watchdog",)


def build_processors() -> list[Any]:
    """Processors shared by structlog and foreign stdlib records.

    Returns:
        Processor chain applied before rendering.
    """
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]


def configure_logging(debug: bool = False, json_logs: bool = True) -> None:
    """Configure structlog and route stdlib records through the same renderer.

    Args:
        debug: Enable debug-level logging when True.
        json_logs: Render JSON lines, otherwise colourless console output.
    """
    level = logging.DEBUG if debug else logging.INFO
    shared = build_processors()

    if json_logs:
        renderer: Any = structlog.processors.JSONRenderer()
        shared.append(structlog.processors.format_exc_info)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[*shared, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )
    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level)

    # watchdog emits a debug record per inotify event
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.INFO))
