"""Logging setup for the restaurants domain.

Handlers live on the stdlib root logger: stdout, a rotating main log and a
rotating error-only log. structlog wraps it, adding logger name, level,
timestamp, callsite and any bound context, then renders JSON when deployed
and a coloured console line otherwise.

Environment:
    LOG_LEVEL                  explicit level, wins over everything else
    PROTEAN_ENV / ENVIRONMENT  picks the default level and the renderer
    LOG_DIR                    where the rotating files go (default ``logs``)
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any

import structlog

LOG_FILE_PREFIX = "restaurant_search"

_MAX_BYTES = 10 * 1024 * 1024
_BACKUP_COUNT = 5

_DEFAULT_LEVELS = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}

_DEPLOYED = ("production", "staging")

# Chatty third-party loggers held at WARNING regardless of our level
_QUIET_LOGGERS = ("asyncio", "protean")


def current_environment() -> str:
    return (os.getenv("PROTEAN_ENV") or os.getenv("ENVIRONMENT") or "development").lower()


def get_log_level(environment: str | None = None) -> str:
    """LOG_LEVEL if set, else the default for the environment."""
    environment = environment or current_environment()
    return os.getenv("LOG_LEVEL", _DEFAULT_LEVELS.get(environment, "INFO")).upper()


def _rotating(path: Path, level) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=path,
        maxBytes=_MAX_BYTES,
        backupCount=_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setLevel(level)
    return handler


def setup_stdlib_logging(level: str, log_dir: str | None = None) -> None:
    """Replace the root logger's handlers with console plus rotating files."""
    directory = Path(log_dir or os.getenv("LOG_DIR", "logs"))
    directory.mkdir(parents=True, exist_ok=True)

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = [
        console,
        _rotating(directory / f"{LOG_FILE_PREFIX}.log", level),
        _rotating(directory / f"{LOG_FILE_PREFIX}_error.log", logging.ERROR),
    ]

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def _renderer(environment: str):
    if environment in _DEPLOYED:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=True,
        exception_formatter=structlog.dev.RichTracebackFormatter(show_locals=True, max_frames=2),
    )


def setup_structlog(environment: str) -> None:
    """Route structlog through stdlib with the shared processor chain."""
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.CallsiteParameterAdder(
                parameters=[
                    structlog.processors.CallsiteParameter.MODULE,
                    structlog.processors.CallsiteParameter.FUNC_NAME,
                    structlog.processors.CallsiteParameter.LINENO,
                ]
            ),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            _renderer(environment),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging(level: str | None = None, log_dir: str | None = None) -> None:
    """Configure stdlib handlers and structlog in one go. Safe to call again."""
    environment = current_environment()
    setup_stdlib_logging(level or get_log_level(environment), log_dir)
    setup_structlog(environment)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def add_context(**kwargs: Any) -> None:
    """Bind key/values onto every log line emitted from this context (e.g. restaurant_id)."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
