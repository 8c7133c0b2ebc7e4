"""
Logging Configuration
=====================
Sets up the 'orthogrid' namespace logger for the animation host.

The level and an optional log file are taken from the environment so the
animation can be traced without touching the code:

    $ ORTHOGRID_LOG_LEVEL=DEBUG ORTHOGRID_LOG_FILE=frames.log orthogrid
"""
import logging
import os
import sys
from typing import Mapping, Optional, Union

from orthogrid.config import LOG_FILE_ENV, LOG_LEVEL_ENV

LOGGER_NAME = "orthogrid"


def settings_from_env(environ: Optional[Mapping[str, str]] = None) -> tuple[int, Optional[str]]:
    """
    Read the log level and log file of the host from environment variables.

    Args:
        environ: Mapping to read from. Defaults to ``os.environ``.

    Returns:
        The numeric level (INFO when unset) and the log file path or None.

    Raises:
        ValueError: If the level is not a known logging level name.
    """
    environ = os.environ if environ is None else environ
    level_name = environ.get(LOG_LEVEL_ENV, "INFO").strip().upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        raise ValueError(f"{LOG_LEVEL_ENV}={level_name!r} is not a logging level.")
    log_file = environ.get(LOG_FILE_ENV) or None
    return level, log_file


def setup_logging(level: Union[int, str] = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configures the logger of the 'orthogrid' namespace.

    Args:
        level: Logging level, numeric or by name (e.g. logging.DEBUG, "INFO")
        log_file: Optional path the frame log is written to as well.

    Returns:
        The configured namespace logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Reopening the window must not duplicate the output
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
        logger.info(f"Logging to {log_file} at {logging.getLevelName(logger.level)}.")
    else:
        logger.info(f"Logging at {logging.getLevelName(logger.level)}.")

    return logger
