"""
Logging setup for the catalog search library.

Everything the library logs goes through the "catalog_search" package
logger, never the root logger, so an embedding application keeps control
of its own handlers. The package logger writes to stderr and, when a logs
directory is configured, to a rotating catalog_search.log file.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from .exceptions import ConfigurationError


PACKAGE_LOGGER = "catalog_search"
LOG_FILE_NAME = "catalog_search.log"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_logger_initialized = False


def setup_logging(
    log_level: str = "INFO",
    log_format: str = DEFAULT_FORMAT,
    logs_directory: Path = None,
    max_file_size_mb: int = 10,
    backup_count: int = 5,
    force: bool = False
) -> logging.Logger:
    """
    Attach handlers to the package logger.

    Later calls are ignored unless force is set, in which case the
    previous handlers are closed and replaced.

    Args:
        log_level: Level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: Format string for log messages.
        logs_directory: Directory for catalog_search.log. None disables
                       file output.
        max_file_size_mb: Size at which the log file rotates.
        backup_count: Number of rotated files to keep.
        force: Reconfigure even if logging was already set up.

    Returns:
        The package logger.

    Raises:
        ConfigurationError: If the level name is unknown.
    """
    global _logger_initialized

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if _logger_initialized and not force:
        return package_logger

    level = logging.getLevelName(str(log_level).upper())
    if not isinstance(level, int):
        raise ConfigurationError(
            f"Unknown log level: {log_level}",
            {"level": log_level}
        )

    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    package_logger.setLevel(level)
    package_logger.propagate = False

    formatter = logging.Formatter(log_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    package_logger.addHandler(console_handler)

    if logs_directory:
        logs_directory = Path(logs_directory)
        logs_directory.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            logs_directory / LOG_FILE_NAME,
            maxBytes=max_file_size_mb * 1024 * 1024,
            backupCount=backup_count,
            encoding="utf-8"
        )
        file_handler.setFormatter(formatter)
        package_logger.addHandler(file_handler)

    _logger_initialized = True
    return package_logger


def setup_logging_from_config(config, force: bool = False) -> logging.Logger:
    """Configure the package logger from the logging and paths config sections."""
    return setup_logging(
        log_level=config.logging.level,
        log_format=config.logging.format,
        logs_directory=config.paths.logs_directory,
        max_file_size_mb=config.logging.max_file_size_mb,
        backup_count=config.logging.backup_count,
        force=force
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger below the package logger.

    Sets logging up from config.json on first use and falls back to
    stderr-only defaults when no config file can be found. Names outside
    the package namespace are nested under it.

    Args:
        name: Logger name, typically __name__ of the calling module.

    Returns:
        Logger instance.
    """
    if not _logger_initialized:
        try:
            from .config_loader import get_config
            setup_logging_from_config(get_config())
        except ConfigurationError:
            setup_logging()

    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


if __name__ == "__main__":
    setup_logging(log_level="DEBUG")

    logger = get_logger(__name__)
    logger.debug("Debug message")
    logger.info("Info message")

    get_logger("scripts").warning("Nested under %s", PACKAGE_LOGGER)
