"""Logging setup for scripts.

Library modules only create module-level loggers; handlers are installed
here, once, by whichever script is running.
"""

import logging
from pathlib import Path
from typing import Optional, Union


LOG_FORMAT = "%(asctime)s [%(threadName)s] %(levelname)-5s %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    level: Union[int, str] = "INFO",
    log_file: Optional[Union[str, Path]] = None,
) -> None:
    """Send log records to the console and, optionally, a file.

    Args:
        level: Root logger level (name or number).
        log_file: Also write the log to this file when given.
    """
    if isinstance(level, str):
        level = level.upper()

    handlers = [logging.StreamHandler()]
    if log_file is not None:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=handlers,
        force=True,
    )
