"""
Logging configuration for kubeboot
Provides a centralized logger with console and optional file output
"""
import inspect
import logging
import sys
from datetime import datetime
from pathlib import Path
DEFAULT_LOGGER_NAME = "kubeboot"
DEFAULT_FORMAT = "%(asctime)s - %(name)-25s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level=logging.INFO, log_file=None, format_string=None):
    """
    Setup logging configuration
    Args:
        level: Logging level (default: INFO)
        log_file: Optional path to log file (default: None, console only)
        format_string: Custom format string (default: DEFAULT_FORMAT)
    """
    formatter = logging.Formatter(format_string or DEFAULT_FORMAT, datefmt=DATE_FORMAT)
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    # Remove existing handlers to avoid duplicates
    root_logger.handlers.clear()
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
        # The file always keeps command output, whatever the console level
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
        root_logger.setLevel(logging.DEBUG)
    # paramiko is chatty at DEBUG
    logging.getLogger("paramiko").setLevel(logging.WARNING)
    return root_logger


def get_logger(name=None):
    """
    Get a logger instance for a module
    Args:
        name: Logger name (default: None, uses calling module name)
    Returns:
        Logger instance
    """
    if name is None:
        frame = inspect.currentframe()
        caller = frame.f_back if frame else None
        name = caller.f_globals.get("__name__", DEFAULT_LOGGER_NAME) if caller else DEFAULT_LOGGER_NAME
    return logging.getLogger(name)


def init_logger(level=logging.INFO, log_file=None, always_log_to_file=True, logs_dir="logs"):
    """
    Initialize the default logger (called once at startup)
    Args:
        level: Console logging level
        log_file: Optional log file path
        always_log_to_file: If True and log_file is None, creates a timestamped log file in logs_dir
        logs_dir: Directory for timestamped log files
    """
    if log_file is None and always_log_to_file:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = Path(logs_dir) / f"kubeboot_{timestamp}.log"
    setup_logging(level=level, log_file=log_file)
    return logging.getLogger(DEFAULT_LOGGER_NAME)
