"""Loguru setup for registry and host logs.

Every record carries two extras: ``component`` (``registry``, ``host``,
``cli``) and ``registry``, the context label of the registry that emitted
it (``server``, ``client``, ``shared``; ``-`` outside a registry).
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any, Optional

from loguru import logger

LOG_LEVEL_ENV = "MODHOST_LOG_LEVEL"
LOG_FILE_NAME = "modhost.log"

_DEFAULT_EXTRA = {"component": "modhost", "registry": "-"}

_LINE = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | "
    "{extra[component]}@{extra[registry]} | {name}:{function}:{line} - {message}"
)
_CONSOLE_LINE = (
    "<green>{time:HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[component]}</cyan>@<magenta>{extra[registry]}</magenta> - "
    "<level>{message}</level>"
)


def default_log_level() -> str:
    return os.environ.get(LOG_LEVEL_ENV, "INFO").upper()


def configure_logging(log_dir: Path | str | None = None, level: str = "INFO") -> None:
    """Route logs to stderr and, when *log_dir* is usable, a rotating file.

    stdout stays free for CLI output.
    """

    logger.remove()
    logger.configure(extra=dict(_DEFAULT_EXTRA))
    logger.add(sys.stderr, format=_CONSOLE_LINE, colorize=True, level=level)

    if log_dir is None:
        return
    path = Path(log_dir)
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        logger.warning("File logging disabled; cannot create {}: {}", path, exc)
        return
    logger.add(
        path / LOG_FILE_NAME,
        format=_LINE,
        level=level,
        rotation="1 day",
        retention="14 days",
        compression="gz",
        backtrace=False,
        diagnose=False,
    )


def get_logger(name: Optional[str] = None, **extra: Any):
    """Return a logger bound to *name* and any extra fields (e.g. ``registry``)."""

    fields = dict(extra)
    if name:
        fields["component"] = name
    return logger.bind(**fields) if fields else logger
