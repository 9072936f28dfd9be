"""
Logger factory shared by every iopchain module

The level of a new logger comes from the log_level argument, then the IOPCHAIN_LOG_LEVEL environment variable,
then INFO. Handlers are attached once per logger name.
"""
import logging
import os
import sys
from pathlib import Path
from typing import Optional, Union

__all__ = ["get_logger", "DEFAULT_FORMAT", "LOG_LEVEL_ENV"]

DEFAULT_FORMAT = '%(asctime)s [%(name)s] [%(levelname)s]: %(message)s'
DEFAULT_LEVEL = "INFO"
LOG_LEVEL_ENV = "IOPCHAIN_LOG_LEVEL"


def get_logger(name: str, log_level: Optional[str] = None, log_file: Union[str, Path, None] = None,
               format_string: Optional[str] = None) -> logging.Logger:
    """
    Return the logger for name, configuring it on first use.

    Args:
        name: Logger name, __name__ of the calling module
        log_level: Level name; falls back to $IOPCHAIN_LOG_LEVEL, then INFO
        log_file: Optional file that receives the same records as stdout
        format_string: Optional format replacing DEFAULT_FORMAT
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    level_name = (log_level or os.environ.get(LOG_LEVEL_ENV) or DEFAULT_LEVEL).upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level {level_name!r} for iopchain logger {name!r}")
    logger.setLevel(level)

    handlers: list[logging.Handler] = [logging.StreamHandler(stream=sys.stdout)]
    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    formatter = logging.Formatter(format_string or DEFAULT_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger
