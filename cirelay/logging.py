"""femtologging helpers shared by the relay.

Messages are interpolated before they reach femtologging, so every module
formats with the same percent-style templates whether it logs pipeline
lifecycle events, host table builds or delivery results.

Example:
>>> from cirelay.logging import get_logger, log_info
>>> logger = get_logger(__name__)
>>> log_info(logger, "Processing %s", "example/job #42")

"""

from __future__ import annotations

import enum
import typing as typ

from femtologging import basicConfig, get_logger


class LogLevel(enum.StrEnum):
    """Log levels accepted by ``CIRELAY_LOG_LEVEL``."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


DEFAULT_LOG_LEVEL = LogLevel.INFO

# Spellings operators commonly export that name an existing level
_LEVEL_ALIASES = {"WARN": LogLevel.WARNING, "FATAL": LogLevel.CRITICAL}


def normalize_log_level(level: str | None) -> tuple[LogLevel, bool]:
    """Resolve a raw level name and flag unusable input.

    Parameters
    ----------
    level : str | None
        Raw level name, usually read from the environment. Matching is
        case-insensitive and ``WARN``/``FATAL`` are accepted as aliases.

    Returns
    -------
    tuple[LogLevel, bool]
        The resolved level (``INFO`` when unusable) and ``True`` when the
        input had to be replaced.

    """
    name = (level or "").strip().upper()
    if name in _LEVEL_ALIASES:
        return (_LEVEL_ALIASES[name], False)
    try:
        return (LogLevel(name), False)
    except ValueError:
        return (DEFAULT_LOG_LEVEL, True)


def configure_logging(
    level: str | None, *, force: bool = False
) -> tuple[LogLevel, bool]:
    """Install the femtologging root configuration at ``level``.

    Parameters
    ----------
    level : str | None
        Raw level name.
    force : bool, optional
        Replace handlers that an earlier call already installed.

    Returns
    -------
    tuple[LogLevel, bool]
        Result of :func:`normalize_log_level` for ``level``.

    """
    resolved, invalid = normalize_log_level(level)
    basicConfig(level=str(resolved), force=force)
    return (resolved, invalid)


def format_log_message(template: str, *args: object) -> str:
    """Interpolate ``args`` into a percent-style ``template``."""
    return template % args


class _SupportsLog(typ.Protocol):
    """Minimal femtologging logger surface used by the helpers."""

    def log(
        self,
        level: str,
        message: str,
        /,
        *,
        exc_info: object | None = None,
        stack_info: bool = False,
    ) -> str | None: ...


def _emit(
    logger: _SupportsLog,
    level: str,
    template: str,
    args: tuple[object, ...],
    exc_info: object | None,
) -> None:
    logger.log(
        level,
        format_log_message(template, *args),
        exc_info=exc_info,
        stack_info=False,
    )


def log_debug(
    logger: _SupportsLog,
    template: str,
    *args: object,
    exc_info: object | None = None,
) -> None:
    """Log a DEBUG message with percent-style formatting."""
    _emit(logger, "DEBUG", template, args, exc_info)


def log_info(
    logger: _SupportsLog,
    template: str,
    *args: object,
    exc_info: object | None = None,
) -> None:
    """Log an INFO message with percent-style formatting.

    Parameters
    ----------
    logger : _SupportsLog
        Destination logger.
    template : str
        Percent-style message template.
    *args : object
        Values interpolated into ``template``.
    exc_info : object | None, optional
        Exception attached to the record.

    """
    _emit(logger, "INFO", template, args, exc_info)


def log_warning(
    logger: _SupportsLog,
    template: str,
    *args: object,
    exc_info: object | None = None,
) -> None:
    """Log a WARNING message with percent-style formatting."""
    _emit(logger, "WARNING", template, args, exc_info)


def log_error(
    logger: _SupportsLog,
    template: str,
    *args: object,
    exc_info: object | None = None,
) -> None:
    """Log an ERROR message with percent-style formatting."""
    _emit(logger, "ERROR", template, args, exc_info)


__all__ = [
    "DEFAULT_LOG_LEVEL",
    "LogLevel",
    "configure_logging",
    "format_log_message",
    "get_logger",
    "log_debug",
    "log_error",
    "log_info",
    "log_warning",
    "normalize_log_level",
]
