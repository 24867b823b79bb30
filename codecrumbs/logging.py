"""Logging setup shared by the codecrumbs CLI and service."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

ROOT_LOGGER = "codecrumbs"

CONSOLE_FORMAT = "[codecrumbs] %(levelname)s %(message)s"
VERBOSE_FORMAT = "[codecrumbs:%(component)s] %(levelname)s %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class _ComponentFilter(logging.Filter):
    """Exposes the logger name below ``codecrumbs.`` as ``%(component)s``."""

    def filter(self, record: logging.LogRecord) -> bool:
        _, _, component = record.name.partition(".")
        record.component = component or "main"
        return True


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``codecrumbs.<name>``, or the package logger when ``name`` is empty."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}" if name else ROOT_LOGGER)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Install console (stderr) and optional file handlers on the package logger.

    Calling it again replaces the handlers installed by the previous call.
    Verbose mode lowers the level to DEBUG and tags console lines with the
    emitting component, e.g. ``[codecrumbs:scanner]``.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    if verbose:
        console.addFilter(_ComponentFilter())
        console.setFormatter(logging.Formatter(VERBOSE_FORMAT))
    else:
        console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        sink = logging.FileHandler(log_file, encoding="utf-8")
        sink.setLevel(logging.DEBUG)
        sink.setFormatter(logging.Formatter(FILE_FORMAT))
        logger.addHandler(sink)
        logger.setLevel(logging.DEBUG)

    return logger


__all__ = ["ROOT_LOGGER", "configure_logging", "get_logger"]
