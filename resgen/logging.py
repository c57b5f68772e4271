"""Logger setup shared by the resgen CLI and library modules."""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "resgen"
_CONSOLE_FORMAT = "[resgen] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``resgen.<name>``, or the package logger when ``name`` is empty."""
    return logging.getLogger(f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Send resgen records to stderr and, when ``log_file`` is given, append them there.

    Handlers from an earlier call are closed first, so running the CLI twice in one
    process does not print every record twice.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False
    _drop_handlers(logger)

    logger.addHandler(_with_format(logging.StreamHandler(), level, _CONSOLE_FORMAT))
    if log_file is not None:
        log_file = Path(log_file).expanduser()
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        logger.addHandler(_with_format(file_handler, level, _FILE_FORMAT))
        logger.debug("Writing log records to %s", log_file)
    return logger


def _drop_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def _with_format(handler: logging.Handler, level: int, fmt: str) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    return handler


__all__ = ["configure_logging", "get_logger"]
