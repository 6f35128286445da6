"""
Centralized logging configuration for the LOLHTML compiler.

This module sets up consistent logging for the command-line driver and the
preview server:
- Detailed formatting including line numbers and function names
- Console output, plus optional rotating file output
- Separate level for the compiler's own loggers
"""

import logging
import logging.handlers
from pathlib import Path
from typing import Optional

# Loggers owned by this project; they get the app-specific level.
APP_LOGGER_NAMES = ('lol_parser', 'common', 'web')

def configure_logging(
    log_level: str = "INFO",
    app_log_level: Optional[str] = None,
    log_dir: Optional[str] = None,
    log_filename: Optional[str] = None
) -> Optional[Path]:
    """
    Configure process-wide logging settings.

    Console output is always installed. A rotating file log is added only when
    a log directory is given.

    Args:
        log_level: Root logger level (default: "INFO")
        app_log_level: Level for the compiler's own loggers (default: same as log_level)
        log_dir: Optional directory for rotating log files
        log_filename: Optional custom log filename (default: lolhtml.log)

    Returns:
        Path of the log file, or None when logging to the console only
    """
    formatter = logging.Formatter(
        fmt='%(asctime)s - %(levelname)s - %(name)s - %(filename)s:%(lineno)d:%(funcName)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper()))

    # Clear any existing handlers to avoid duplicates on reconfiguration
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    log_file_path = None
    if log_dir:
        directory = Path(log_dir)
        directory.mkdir(parents=True, exist_ok=True)
        log_file_path = directory / (log_filename or 'lolhtml.log')

        file_handler = logging.handlers.RotatingFileHandler(
            log_file_path,
            maxBytes=1024 * 1024,  # 1MB per file
            backupCount=5,
            encoding='utf-8'
        )
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    app_level = getattr(logging, (app_log_level or log_level).upper())
    for name in APP_LOGGER_NAMES:
        logging.getLogger(name).setLevel(app_level)

    logging.info(f"Logging initialized: root_level={log_level}, app_level={app_log_level or log_level}, log_file={log_file_path}")
    return log_file_path

def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the standardized configuration.

    Args:
        name: Name for the logger, typically __name__ from the calling module

    Returns:
        A logger instance
    """
    return logging.getLogger(name)
