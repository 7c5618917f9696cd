from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger


def configure_logging(verbose: bool = False, log_file: Path | str | None = None) -> None:
    """Install the console sink (and optionally a file sink) for the CLI.

    Library modules only emit records; sinks are configured here.
    """
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "INFO", format="{level: <8} | {message}")
    if log_file is not None:
        logger.add(str(log_file), rotation="5 MB", retention=10, backtrace=False, diagnose=False)
