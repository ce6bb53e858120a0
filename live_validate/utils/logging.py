import logging
import os
from pathlib import Path

PACKAGE_LOGGER_NAME = "live_validate"

_logging_configured = False
_log_file_path: Path | None = None


def get_package_logger() -> logging.Logger:
    """Parent of every `live_validate.*` module logger."""
    return logging.getLogger(PACKAGE_LOGGER_NAME)


def setup_logging(log_file_name: str | None = None, propagate: bool = False):
    """
    Send validator logs to a file of their own.

    Only the `live_validate` logger is configured; the host application's root
    logger and its handlers are left alone. With `propagate=True` records are
    also passed on to the host's handlers.

    Environment:
    - LOG_DIR: directory of the log file (default `./log`)
    - LOG_FILE_NAME: file name when `log_file_name` is not given (default `live_validate.log`)
    - LOG_LEVEL: level of the package logger (default INFO; DEBUG logs every
      validation pass and feedback message)
    - ENV=debug: also log to the console
    """
    global _logging_configured, _log_file_path

    log_dir = Path(os.getenv("LOG_DIR", Path.cwd() / "log"))
    file_name = log_file_name if log_file_name else os.getenv('LOG_FILE_NAME', 'live_validate.log')
    log_file = log_dir / file_name

    if _logging_configured and _log_file_path == log_file:
        return

    log_dir.mkdir(parents=True, exist_ok=True)

    package_logger = get_package_logger()
    package_logger.setLevel(os.getenv('LOG_LEVEL', 'INFO').upper())
    package_logger.propagate = propagate

    # Replace handlers from an earlier call so records are not written twice
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    file_handler = logging.FileHandler(str(log_file), mode='a')
    file_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
    package_logger.addHandler(file_handler)

    if os.getenv('ENV') == 'debug':
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(logging.Formatter('%(levelname)s - %(name)s - %(message)s'))
        package_logger.addHandler(console_handler)

    _log_file_path = log_file
    _logging_configured = True
    package_logger.info(f"Logging to {log_file}")


def get_log_file_path() -> Path | None:
    return _log_file_path
