"""Logging for the storefront.

structlog renders every event; the standard library owns the handlers.
Events go to stdout always, and to ``<prefix>.log`` and ``<prefix>_error.log``
when a log directory is configured (``LOG_DIR``). Production emits JSON lines,
other environments a colored console with rich tracebacks.

Request handlers bind ``request_id`` and ``path`` with :func:`add_context`, so
every event logged while serving a request carries them.
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any

import structlog

LEVELS = {
    "production": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}

NOISY_LOGGERS = ("asyncio", "urllib3", "protean", "sqlalchemy.engine", "uvicorn.access")

ROTATE_BYTES = 10 * 1024 * 1024
ROTATE_KEEP = 5


def environment() -> str:
    return os.getenv("PROTEAN_ENV", "development").lower()


def log_level() -> str:
    return os.getenv("LOG_LEVEL", LEVELS.get(environment(), "INFO")).upper()


def _rotating(path: Path, level) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=path, maxBytes=ROTATE_BYTES, backupCount=ROTATE_KEEP, encoding="utf-8"
    )
    handler.setLevel(level)
    return handler


def _handlers(level: str, log_dir: str | None, prefix: str) -> list[logging.Handler]:
    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    handlers = [console]

    if log_dir:
        directory = Path(log_dir)
        directory.mkdir(parents=True, exist_ok=True)
        handlers.append(_rotating(directory / f"{prefix}.log", level))
        handlers.append(_rotating(directory / f"{prefix}_error.log", logging.ERROR))
    return handlers


def _renderer():
    if environment() == "production":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=True,
        exception_formatter=structlog.dev.RichTracebackFormatter(show_locals=False, max_frames=4),
    )


def configure_logging(level: str | None = None, log_dir: str | None = None, prefix: str = "storefront") -> None:
    """Wire the standard library handlers and the structlog pipeline. Safe to call more than once."""
    level = level or log_level()
    log_dir = log_dir or os.getenv("LOG_DIR")

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = _handlers(level, log_dir, prefix)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.CallsiteParameterAdder(
                parameters=[
                    structlog.processors.CallsiteParameter.MODULE,
                    structlog.processors.CallsiteParameter.LINENO,
                ]
            ),
            _renderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def add_context(**values: Any) -> None:
    """Bind values to every event logged from the current context."""
    structlog.contextvars.bind_contextvars(**values)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
