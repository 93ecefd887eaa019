"""
Logging configuration for command-line entry points.

Library modules only create module-level loggers (logging.getLogger(__name__))
and never configure handlers. Entry points such as main.py call setup_logger()
once at startup.
"""

import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logger(level: str | int = logging.WARNING) -> None:
    """
    Configure the root logger with a single console handler.

    Existing root handlers are cleared first so calling this twice does not
    duplicate output.

    Args:
        level: Level name ("DEBUG", "INFO", ...) or numeric level.

    Example:
        >>> setup_logger("DEBUG")
        >>> logging.getLogger("src.dates.timezone").debug("hello")
        2021-01-05 09:03:02 - src.dates.timezone - DEBUG - hello
    """
    if isinstance(level, str):
        level = level.upper()

    logging.root.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.setLevel(level)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)
