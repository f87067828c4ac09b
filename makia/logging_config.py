"""Loguru setup driven by ``Settings``.

The console sink is always on. Production adds a rotated application log
and an error-only log under ``settings.log_dir``. Variable values in
tracebacks (``diagnose``) are shown only with ``debug`` enabled, since they
can contain learner transcripts.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from makia.config import Settings

PREVIEW_CHARS = 50

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {extra[name]}:{function}:{line} | {message}"


def setup_logging(settings: Settings) -> None:
    """Replace loguru's default sink with the tutor backend's sinks."""
    logger.remove()
    logger.configure(extra={"name": "makia"})

    logger.add(
        sys.stderr,
        format=CONSOLE_FORMAT,
        level=settings.log_level,
        colorize=True,
        backtrace=settings.debug,
        diagnose=settings.debug,
    )

    if settings.is_production:
        log_path = Path(settings.log_dir)
        log_path.mkdir(parents=True, exist_ok=True)

        logger.add(
            log_path / "makia_{time:YYYY-MM-DD}.log",
            format=FILE_FORMAT,
            level=settings.log_level,
            rotation="100 MB",
            retention="30 days",
            compression="gz",
            diagnose=False,
        )
        # Turn failures only, with tracebacks
        logger.add(
            log_path / "errors_{time:YYYY-MM-DD}.log",
            format=FILE_FORMAT + "\n{exception}",
            level="ERROR",
            rotation="50 MB",
            retention="90 days",
            compression="gz",
            backtrace=True,
            diagnose=False,
        )

    logger.info(
        f"Logging initialized at {settings.log_level} "
        f"({settings.environment}, files: {'on' if settings.is_production else 'off'})"
    )


def get_logger(name: str):
    """Logger bound to a module name, shown in the ``name`` column."""
    return logger.bind(name=name)


def preview(text: str | None, limit: int = PREVIEW_CHARS) -> str:
    """Shorten learner text before it goes into a log line."""
    if not text:
        return "<empty>"
    text = " ".join(text.split())
    if len(text) <= limit:
        return text
    return f"{text[:limit]}..."
