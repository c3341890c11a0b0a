import logging
import os
import sys
import time

from .classes import LogLevel
from .exceptions import ConfigError

TRACE = 5
FILE_SCHEME = "file://"

logging.addLevelName(TRACE, "TRACE")

_log_levels = {
    LogLevel.Error: logging.ERROR,
    LogLevel.Warn: logging.WARNING,
    LogLevel.Info: logging.INFO,
    LogLevel.Debug: logging.DEBUG,
    LogLevel.Trace: TRACE,
}


def normalize_answer(text: str) -> str:
    return text.strip().lower()


def strip_file_scheme(uri: str) -> str:
    if not uri.startswith(FILE_SCHEME):
        raise ValueError(f"'{uri}' is not a {FILE_SCHEME} URI")
    return uri.removeprefix(FILE_SCHEME)


def logging_file_formatter() -> logging.Formatter:
    return logging.Formatter("[%(asctime)s] [%(name)s|%(levelname)s]: %(message)s")


def logging_setup(log_level: LogLevel, log_dir_uri: str | None = None) -> logging.Handler | None:
    root_logger = logging.getLogger()
    if log_level == LogLevel.Off:
        root_logger.addHandler(logging.NullHandler())
        root_logger.setLevel(logging.CRITICAL + 1)
        return None
    level = _log_levels[log_level]
    # stdout belongs to the renderer, so console logs go to stderr
    if log_dir_uri is not None:
        try:
            log_dir = strip_file_scheme(log_dir_uri)
        except ValueError as e:
            raise ConfigError(f"Invalid log_dir_uri: {e}") from e
        os.makedirs(log_dir, exist_ok=True)
        handler = logging.FileHandler(os.path.join(log_dir, time.strftime('%Y-%m-%d_%H-%M-%S-phrasey.log')))
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging_file_formatter())
    handler.setLevel(level)
    root_logger.setLevel(level)
    root_logger.addHandler(handler)
    logging.getLogger("phrasey.logging").debug(f"Logging initialized with log_dir_uri: {log_dir_uri}")
    return handler
