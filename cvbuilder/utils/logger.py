"""
Server logging setup.

One call to setup_logger() at process start gives every context logger
(contexts/{context}/logger.py) two sinks: a DEBUG log file for the session and
a colourized console. Records that uvicorn and FastAPI emit through the
standard logging module are forwarded into the same sinks, so a single file
holds request lines and application events in order.
"""

import logging
import os
import sys
from pathlib import Path
from typing import Dict, Iterable, Optional

from dotenv import load_dotenv
from loguru import logger

from cvbuilder import __version__

load_dotenv()

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
CONSOLE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>"

LEVEL_COLORS = {
    "WARNING": "<white>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}

# Standard-library loggers whose records are forwarded to loguru
INTERCEPTED_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access", "fastapi")


class InterceptHandler(logging.Handler):
    """Forward standard logging records to loguru, keeping level and caller."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Skip logging-module frames so loguru reports the real caller
        frame, depth = logging.currentframe(), 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def intercept_standard_logging(names: Iterable[str] = INTERCEPTED_LOGGERS) -> None:
    """Route the named standard-library loggers through loguru."""
    handler = InterceptHandler()
    for name in names:
        std_logger = logging.getLogger(name)
        std_logger.handlers = [handler]
        std_logger.propagate = False
        std_logger.setLevel(logging.INFO)


def setup_logger(
    context_name: str,
    log_dir: Path,
    extra_provenance: Optional[Dict] = None,
    level_colors: Optional[Dict[str, str]] = None,
    console_level: str = LOG_LEVEL,
) -> Path:
    """
    Configure loguru sinks for a process and log where it came from.

    Args:
        context_name: Names the log file (e.g., "serve")
        log_dir: Directory for this logging session, created if missing
        extra_provenance: Additional key-value pairs for the provenance header
        level_colors: Overrides for console level colours
        console_level: Minimum console level (the file always gets DEBUG)

    Returns:
        Path to log file

    Example:
        log_file = setup_logger(
            context_name="serve",
            log_dir=Path("outs/logs/serve_20251114_123456"),
            extra_provenance={"Port": 3000},
        )
    """
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()

    for level_name, color in {**LEVEL_COLORS, **(level_colors or {})}.items():
        logger.level(level_name, color=color)

    logger.add(log_file, format=FILE_FORMAT, level="DEBUG")
    logger.add(sys.stdout, format=CONSOLE_FORMAT, level=console_level, colorize=True)

    intercept_standard_logging()
    log_provenance(extra_provenance)

    return log_file


def log_provenance(extra_context: Optional[Dict] = None) -> None:
    """Log a header with the command, environment and any extra context."""
    logger.info("=" * 80)
    logger.info(f"CV Builder {__version__}")
    logger.info(f"Command: {' '.join(sys.argv)}")
    logger.info(f"Working directory: {Path.cwd()}")
    logger.info(f"Python: {sys.version.split()[0]}")

    for key, value in (extra_context or {}).items():
        logger.info(f"{key}: {value}")

    logger.info("=" * 80)
