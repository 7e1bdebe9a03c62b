"""Logging setup shared by the registry builder, resolver and HTTP service."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List

ROOT_LOGGER = "uiregistry"

# uvicorn.error and uvicorn.access propagate here once uvicorn runs with log_config=None.
SERVER_LOGGERS = ("uvicorn",)

CONSOLE_FORMAT = "[uiregistry] %(levelname)s %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``uiregistry.<name>``, or the root project logger."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}" if name else ROOT_LOGGER)


def configure_logging(
    *,
    verbose: bool = False,
    log_file: Path | None = None,
    server_loggers: Iterable[str] = (),
) -> logging.Logger:
    """Send project logs to stderr and, when ``log_file`` is given, to that file.

    ``server_loggers`` names third-party loggers (uvicorn during ``serve``)
    that share the same handlers, so one file holds both the registry trail
    and the HTTP access log.
    """
    level = logging.DEBUG if verbose else logging.INFO
    handlers = _build_handlers(level, log_file)

    logger = logging.getLogger(ROOT_LOGGER)
    _install(logger, level, handlers)
    for name in server_loggers:
        _install(logging.getLogger(name), level, handlers)
    return logger


def _build_handlers(level: int, log_file: Path | None) -> List[logging.Handler]:
    console = logging.StreamHandler()
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    handlers: List[logging.Handler] = [console]
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        sink = logging.FileHandler(log_file, encoding="utf-8")
        sink.setFormatter(logging.Formatter(FILE_FORMAT))
        handlers.append(sink)
    for handler in handlers:
        handler.setLevel(level)
    return handlers


def _install(logger: logging.Logger, level: int, handlers: List[logging.Handler]) -> None:
    # Repeated CLI invocations in one process must not stack handlers.
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
        existing.close()
    logger.setLevel(level)
    logger.propagate = False
    for handler in handlers:
        logger.addHandler(handler)


__all__ = [
    "CONSOLE_FORMAT",
    "FILE_FORMAT",
    "ROOT_LOGGER",
    "SERVER_LOGGERS",
    "configure_logging",
    "get_logger",
]
