"""
Logging Utility
================

Every module gets its own named logger through setup_logger(), so log
lines say where they came from:

    12:04:31 | INFO     | sheetexport.engine        | Exported xml: 6 rows, 2841 bytes

LEARNING POINT: Libraries Log, Applications Configure
--------------------------------------------------------
The export engine is called from inside someone else's web server.
It must never print() to stdout (that would end up in the HTTP body
in some deployments). Logging goes to handlers the host application
controls, and the level can be raised to WARNING in production
without touching the code.

EXAMPLE:
    from sheetexport.utils.logger import setup_logger

    logger = setup_logger(__name__)

    logger.debug("Empty table, nothing to export")
    logger.info("Exported csv: 3 rows")
    logger.error("Could not allocate output buffer")
"""

import logging
import sys
from pathlib import Path


LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)-25s | %(message)s"
DATE_FORMAT = "%H:%M:%S"


def setup_logger(
    name: str,
    level: int | str = logging.INFO,
    log_file: str | None = None,
) -> logging.Logger:
    """
    Create and configure a logger instance.

    Args:
        name: Logger name (typically __name__ of the calling module)
        level: Minimum log level, as a logging constant or a name like "DEBUG"
        log_file: Optional file path to also write logs to

    Returns:
        A configured Logger instance
    """
    logger = logging.getLogger(name)

    # Avoid adding duplicate handlers if called multiple times
    if logger.handlers:
        return logger

    level = _resolve_level(level)

    logger.setLevel(level)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(ColorFormatter(LOG_FORMAT, DATE_FORMAT))
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        logger.addHandler(file_handler)

    return logger


def _resolve_level(level: int | str) -> int:
    """Map "DEBUG" to logging.DEBUG; unknown names fall back to INFO."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    return resolved if isinstance(resolved, int) else logging.INFO


class ColorFormatter(logging.Formatter):
    """Console formatter that colors the level name with ANSI codes."""

    COLORS = {
        logging.DEBUG:    "\033[36m",    # Cyan
        logging.INFO:     "\033[32m",    # Green
        logging.WARNING:  "\033[33m",    # Yellow
        logging.ERROR:    "\033[31m",    # Red
        logging.CRITICAL: "\033[1;31m",  # Bold Red
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        # Copy so the file handler (if any) still sees the plain level name
        record = logging.makeLogRecord(record.__dict__)
        color = self.COLORS.get(record.levelno, self.RESET)
        record.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(record)


def configure_logging(
    level: int | str = logging.INFO,
    log_file: str | None = None,
    root: str = "sheetexport",
) -> None:
    """
    Re-level every logger already created under `root`.

    Loggers are set up at import time, before configuration is read;
    the entry point calls this once the Config is loaded.
    """
    level = _resolve_level(level)

    for name, logger in logging.root.manager.loggerDict.items():
        if not isinstance(logger, logging.Logger):
            continue
        if name != root and not name.startswith(root + "."):
            continue
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)
        if log_file and not any(isinstance(h, logging.FileHandler) for h in logger.handlers):
            Path(log_file).parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
            file_handler.setLevel(level)
            file_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
            logger.addHandler(file_handler)
