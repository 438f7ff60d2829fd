"""Structured logging configuration using structlog."""

import logging
import sys

import structlog

# Libraries whose records are routed through structlog at WARNING and above.
QUIET_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access", "httpx")


def configure_logging(debug: bool = False, json_logs: bool = True) -> None:
    """Configure structlog for the tree service.

    Context variables bound by the request middleware are merged into
    every event. Gather workers run in their own threads, so the thread
    name is recorded to tell adapter log lines apart.

    Args:
        debug: Enable debug-level logging when True.
        json_logs: Render JSON lines; otherwise render for a terminal.
    """
    level = logging.DEBUG if debug else logging.INFO

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.CallsiteParameterAdder(
            [structlog.processors.CallsiteParameter.THREAD_NAME]
        ),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]
    if json_logs:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", level=level, stream=sys.stdout)

    for name in QUIET_LOGGERS:
        stdlib_logger = logging.getLogger(name)
        stdlib_logger.handlers = []
        stdlib_logger.propagate = True
        stdlib_logger.setLevel(max(level, logging.WARNING))
