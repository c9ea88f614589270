# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Loguru sinks plus per-request context (request id and player id)."""

from __future__ import annotations

import logging
import os
import sys
from contextvars import ContextVar
from typing import TYPE_CHECKING

from loguru import logger as _logger

from .sensitive_filter import sanitize_record

if TYPE_CHECKING:
    from newsquiz.shared.config import LogConfig

_FMT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<lvl>{level:<8}</lvl> | "
    "<magenta>{extra[request_id]}</magenta> "
    "<yellow>p={extra[player]}</yellow> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> | "
    "<lvl>{message}</lvl>"
)

_REQUEST_ID: ContextVar[str] = ContextVar("request_id", default="-")
_PLAYER: ContextVar[str] = ContextVar("player", default="-")

# Third-party loggers that are chatty at INFO.
_QUIET = ("httpx", "httpcore", "sqlalchemy.engine", "urllib3")


def _context() -> dict[str, str]:
    return {"request_id": _REQUEST_ID.get(), "player": _PLAYER.get()}


class _InterceptHandler(logging.Handler):
    """Route stdlib ``logging`` records (werkzeug, sqlalchemy) into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = _logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        _logger.bind(**_context()).opt(depth=6, exception=record.exc_info).log(
            level, record.getMessage()
        )


class ContextualLogger:
    """Proxy for loguru that binds the current request context on every call."""

    def __getattr__(self, name):  # pragma: no cover
        return getattr(_logger.bind(**_context()), name)


def set_correlation_id(value: str | None) -> None:
    _REQUEST_ID.set(value or "-")


def get_correlation_id() -> str:
    return _REQUEST_ID.get()


def bind_player(player_id: int | None) -> None:
    _PLAYER.set("-" if player_id is None else str(player_id))


def clear_correlation_id() -> None:
    _REQUEST_ID.set("-")
    _PLAYER.set("-")


def _add_file_sink(path: str, level: str) -> None:
    directory = os.path.dirname(os.path.abspath(path))
    os.makedirs(directory, exist_ok=True)
    _logger.add(
        path,
        level=level,
        format=_FMT,
        filter=sanitize_record,
        colorize=False,
        backtrace=False,
        diagnose=False,
        enqueue=True,
        rotation="10 MB",
        retention=5,
        encoding="utf-8",
    )


def setup_logging(config: LogConfig) -> None:
    level = "DEBUG" if config.debug else config.level

    _logger.remove()
    _logger.configure(extra={"request_id": "-", "player": "-"})
    _logger.add(
        sys.stderr,
        level=level,
        format=_FMT,
        filter=sanitize_record,
        colorize=sys.stderr.isatty(),
        backtrace=False,
        diagnose=False,
    )
    if config.to_file:
        _add_file_sink(config.file, level)

    logging.basicConfig(handlers=[_InterceptHandler()], level=0, force=True)
    for name in _QUIET:
        logging.getLogger(name).setLevel(logging.WARNING)


logger = ContextualLogger()

__all__ = [
    "bind_player",
    "clear_correlation_id",
    "get_correlation_id",
    "logger",
    "set_correlation_id",
    "setup_logging",
]
