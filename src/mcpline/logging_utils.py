"""Runtime logging helpers.

stdout carries the protocol, so no sink ever writes there.
"""

from __future__ import annotations

import sys
from logging import Handler
from pathlib import Path
from typing import Literal

from loguru import logger
from rich.console import Console
from rich.logging import RichHandler

LogProfile = Literal["default", "rich"]

_DEFAULT_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<7} | {name}:{function}:{line} | {message}"
_CONFIGURED = False


def _build_rich_handler() -> Handler:
    return RichHandler(
        console=Console(stderr=True),
        show_level=True,
        show_time=True,
        show_path=False,
        markup=False,
        rich_tracebacks=False,
    )


def configure_logging(
    *,
    level: str = "INFO",
    log_file: Path | None = None,
    profile: LogProfile = "default",
    force: bool = False,
) -> None:
    """Configure process-level logging once."""

    global _CONFIGURED
    if _CONFIGURED and not force:
        return

    logger.remove()
    file_error: OSError | None = None
    if log_file is not None:
        try:
            logger.add(log_file, mode="w", level=level, format=_DEFAULT_FORMAT, backtrace=False, diagnose=False)
        except OSError as exc:
            file_error = exc
    if log_file is None or file_error is not None:
        _add_stderr_sink(level, profile)
    if file_error is not None:
        logger.warning("logging.file_unavailable path={} error={}", log_file, file_error)
        logger.info("logging.using_stderr")
    _CONFIGURED = True


def _add_stderr_sink(level: str, profile: LogProfile) -> None:
    if profile == "rich":
        logger.add(_build_rich_handler(), level=level, format="{message}", backtrace=False, diagnose=False)
    else:
        logger.add(sys.stderr, level=level, format=_DEFAULT_FORMAT, backtrace=False, diagnose=False)
