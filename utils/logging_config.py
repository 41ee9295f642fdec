"""
Logging configuration utility for the AniRecog CLI and services.
"""
import logging
import os
import sys

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(module)s::%(funcName)s - %(message)s'


def verbosity_to_level(verbosity: int) -> int:
    """
    Map a -v count to a logging level.

    Args:
        verbosity (int): 0 = silent, 1 = INFO, 2 or more = DEBUG.

    Returns:
        int: Logging level. Silent is one above CRITICAL.
    """
    if verbosity <= 0:
        return logging.CRITICAL + 1
    if verbosity == 1:
        return logging.INFO
    return logging.DEBUG


def setup_logging(verbosity: int = 0, logfile: str = None) -> None:
    """
    Configure the root logger's level, console output and optional file output.

    Args:
        verbosity (int): Verbosity level (0=off, 1=info, 2=debug).
        logfile (str, optional): Path to log file. Parent directories are created.

    Returns:
        None
    """
    level = verbosity_to_level(verbosity)
    formatter = logging.Formatter(LOG_FORMAT)

    logger = logging.getLogger()
    logger.setLevel(level)
    logger.handlers.clear()

    if verbosity > 0:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        console_handler.setLevel(level)
        logger.addHandler(console_handler)

    if logfile:
        log_dir = os.path.dirname(logfile)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.FileHandler(logfile, encoding='utf-8')
        file_handler.setFormatter(formatter)
        file_handler.setLevel(level)
        logger.addHandler(file_handler)

    logger.debug(f"Logging configured: level={logging.getLevelName(level)}, logfile={logfile}")
