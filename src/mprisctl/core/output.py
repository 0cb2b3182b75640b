"""
Unified output system using Loguru.

Diagnostics go to a rotating log file; user-facing messages additionally go
to the terminal through the Rich consoles.
"""

import sys
from pathlib import Path

from loguru import logger

from .console import get_console, get_error_console

_LEVEL_STYLES = {
    "debug": "cyan",
    "info": None,
    "warning": "yellow",
    "error": "red",
}


def setup_loguru(log_file: Path | None, level: str = "INFO", verbose: bool = False) -> None:
    """
    Configure loguru sinks.

    Args:
        log_file: Path to log file, or None to disable file logging
        level: Minimum level for file logging (DEBUG, INFO, WARNING, ERROR)
        verbose: Also log everything at DEBUG to stderr
    """
    # Remove default handler
    logger.remove()

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            rotation="10 MB",
            retention=5,  # Keep 5 backup files
            level=level,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{line} | {message}",
            enqueue=False,  # Synchronous writes
        )

    if verbose:
        logger.add(
            sys.stderr,
            level="DEBUG",
            format="<level>{level: <8}</level> | {name}:{line} | {message}",
        )

    logger.debug(f"Loguru initialized: {log_file} (level={level}, verbose={verbose})")


def log(message: str, level: str = "info") -> None:
    """
    Unified logging: writes to the log file AND prints to the terminal.

    Warnings and errors are printed on stderr, everything else on stdout.

    Args:
        message: User-facing message
        level: Log level (debug, info, warning, error)
    """
    log_func = getattr(logger, level)
    log_func(message)

    style = _LEVEL_STYLES.get(level)
    console = get_error_console() if level in ("warning", "error") else get_console()
    if style:
        console.print(message, style=style)
    else:
        console.print(message)
