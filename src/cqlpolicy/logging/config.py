"""Root logger setup for cqlpolicy.

configure_logging() owns the handlers it installs: calling it again
removes and closes them before installing new ones, and handlers added by
anything else are left alone.
"""

from __future__ import annotations

import logging
import sys
import threading
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

from cqlpolicy.logging.context import ResolutionContextFilter
from cqlpolicy.logging.handlers import JSONFormatter

if TYPE_CHECKING:
    from cqlpolicy.config.models import LoggingConfig

logger = logging.getLogger(__name__)

# resolution_tag is "[retry] " while an expression is resolved, else empty
TEXT_FORMAT = "%(asctime)s - %(resolution_tag)s%(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"

_installed: list[logging.Handler] = []
_installed_lock = threading.Lock()


def configure_logging(config: LoggingConfig) -> list[logging.Handler]:
    """Install cqlpolicy's handlers on the root logger.

    Records go to a rotating log file when ``config.file`` is set, and to
    stderr when no file is set, when ``include_stderr`` is true, or when the
    file cannot be opened.

    Args:
        config: Validated logging configuration.

    Returns:
        The handlers that were installed.
    """
    level = logging.getLevelName(config.level.upper())
    formatter = _make_formatter(config.format)
    context_filter = ResolutionContextFilter()

    handlers: list[logging.Handler] = []
    file_error: OSError | None = None
    if config.file is not None:
        try:
            handlers.append(_open_log_file(config))
        except OSError as e:
            file_error = e
    if config.include_stderr or not handlers:
        handlers.append(logging.StreamHandler(sys.stderr))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        handler.addFilter(context_filter)

    root = logging.getLogger()
    with _installed_lock:
        for old in _installed:
            root.removeHandler(old)
            old.close()
        _installed[:] = handlers
        for handler in handlers:
            root.addHandler(handler)
        root.setLevel(level)

    if file_error is not None:
        logger.warning(
            "Could not open log file %s, logging to stderr: %s",
            config.file,
            file_error,
        )
    return list(handlers)


def _make_formatter(log_format: str) -> logging.Formatter:
    if log_format.lower() == "json":
        return JSONFormatter()
    return logging.Formatter(TEXT_FORMAT, datefmt=DATE_FORMAT)


def _open_log_file(config: LoggingConfig) -> RotatingFileHandler:
    path = Path(config.file).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    return RotatingFileHandler(
        path,
        maxBytes=config.max_bytes,
        backupCount=config.backup_count,
        encoding="utf-8",
    )
