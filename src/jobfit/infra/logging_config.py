"""Loguru sinks for a JobFit run.

Each CLI invocation gets its own DEBUG log file under ``logs_dir``; the
console only shows ``console_level`` and above. Records emitted through the
stdlib ``logging`` module (openai, httpx, urllib3) are routed into Loguru so
everything lands in the same file.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional

from loguru import logger

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<8} | {name}:{function}:{line} | {message}"
CONSOLE_FORMAT = "{message}"
VERBOSE_CONSOLE_FORMAT = "<green>{time:HH:mm:ss}</green> <level>{level:<7}</level> {message}"


class InterceptHandler(logging.Handler):
    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Walk past the logging module's own frames so Loguru reports the caller.
        frame, depth = logging.currentframe(), 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def _route_stdlib_logging(levels: Dict[str, str]) -> None:
    logging.basicConfig(handlers=[InterceptHandler()], level=logging.DEBUG, force=True)
    for name, level_name in levels.items():
        logging.getLogger(name).setLevel(getattr(logging, level_name.upper(), logging.INFO))


def configure_logging(
    log_file_prefix: str,
    logs_dir: str = "logs",
    console_level: str = "INFO",
    third_party_levels: Optional[Dict[str, str]] = None,
) -> str:
    """Install the file and console sinks and return the log file path."""
    run_dir = Path(logs_dir)
    run_dir.mkdir(parents=True, exist_ok=True)
    log_file = run_dir / f"{log_file_prefix}_{datetime.now():%Y%m%d_%H%M%S}.log"

    verbose = console_level.upper() == "DEBUG"

    logger.remove()
    logger.add(
        log_file,
        level="DEBUG",
        format=FILE_FORMAT,
        encoding="utf-8",
        retention=20,
        backtrace=verbose,
    )
    logger.add(
        sys.stderr,
        level=console_level.upper(),
        format=VERBOSE_CONSOLE_FORMAT if verbose else CONSOLE_FORMAT,
        colorize=verbose,
    )

    _route_stdlib_logging(third_party_levels or {})

    logger.debug(f"📝 Logging to {log_file}")
    return str(log_file)
