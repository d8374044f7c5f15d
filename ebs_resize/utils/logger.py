"""
EBS Resize - Logging Setup

This module sets up logging for EBS Resize operations.

Logging Strategy:
- INFO (default): High-level progress for operators, on stdout
- DEBUG (--verbosity=debug): API calls and poll attempts
- WARNING/ERROR/CRITICAL: Problems, on stderr
"""

import logging
import sys
from pathlib import Path
from typing import Any

LOGGER_NAME = 'ebs_resize'


class CleanFormatter(logging.Formatter):
    """
    Custom formatter for clean user-facing logs.

    - INFO: Just the message (clean)
    - WARNING/ERROR/CRITICAL: Show level as a prefix
    """

    def format(self, record):
        """Format log record based on level."""

        if record.levelno == logging.INFO:
            return record.getMessage()

        elif record.levelno == logging.WARNING:
            return f"[!]  WARNING: {record.getMessage()}"

        elif record.levelno == logging.ERROR:
            return f"[X] ERROR: {record.getMessage()}"

        elif record.levelno == logging.CRITICAL:
            return f"[!!] CRITICAL: {record.getMessage()}"

        else:
            return f"[DEBUG] {record.getMessage()}"


class _BelowLevelFilter(logging.Filter):
    """Pass only records strictly below a level."""

    def __init__(self, level):
        super().__init__()
        self.level = level

    def filter(self, record):
        return record.levelno < self.level


def setup_logging(level='INFO', log_file=None, debug=False, info_to_stderr=False):
    """
    Setup logging for EBS Resize.

    Configures logging to:
    1. Send DEBUG/INFO to stdout (or stderr) and WARNING and above to stderr
    2. Optionally write everything to a log file
    3. Use a detailed format in debug mode

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file. If None, only logs to console.
        debug: If True, use DEBUG level and detailed format
        info_to_stderr: Send DEBUG/INFO to stderr too, leaving stdout for
            machine-readable output

    Returns:
        logging.Logger: Configured logger instance

    Example:
        logger = setup_logging('INFO')
        logger.info("Detaching volume...")
    """

    if debug:
        level = 'DEBUG'

    numeric_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(numeric_level)

    # Remove existing handlers (in case setup_logging called multiple times)
    logger.handlers.clear()

    if debug:
        # [2026-01-02 10:30:45] DEBUG [_call:52]: API call: detach_volume(...)
        console_format = logging.Formatter(
            '[%(asctime)s] %(levelname)s [%(funcName)s:%(lineno)d]: %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
    else:
        console_format = CleanFormatter('%(message)s')

    info_handler = logging.StreamHandler(sys.stderr if info_to_stderr else sys.stdout)
    info_handler.setLevel(numeric_level)
    info_handler.addFilter(_BelowLevelFilter(logging.WARNING))
    info_handler.setFormatter(console_format)
    logger.addHandler(info_handler)

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(max(numeric_level, logging.WARNING))
    stderr_handler.setFormatter(console_format)
    logger.addHandler(stderr_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(logging.Formatter(
            '[%(asctime)s] %(levelname)s [%(name)s.%(funcName)s:%(lineno)d] %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        logger.addHandler(file_handler)

        logger.debug(f"Logging to file: {log_file}")

    return logger


def get_logger():
    """
    Get the EBS Resize logger instance.

    Returns:
        logging.Logger: Logger instance
    """
    return logging.getLogger(LOGGER_NAME)


# Debug logging helpers

def log_api_call(logger, method_name: str, **params):
    """
    Log an API call (DEBUG level).

    Example:
        log_api_call(logger, 'detach_volume', VolumeId='vol-1', InstanceId='i-1')
        # Output: API call: detach_volume(VolumeId=vol-1, InstanceId=i-1)
    """
    param_str = ', '.join(f'{k}={v}' for k, v in params.items())
    logger.debug(f"API call: {method_name}({param_str})")


def log_api_response(logger, response: Any, truncate: int = 200):
    """
    Log an API response (DEBUG level), truncated to `truncate` characters.
    """
    response_str = str(response)
    if len(response_str) > truncate:
        response_str = response_str[:truncate] + '...'
    logger.debug(f"API response: {response_str}")


def log_state_change(logger, resource: str, old_state: str, new_state: str):
    """
    Log a state change (DEBUG level).

    Example:
        log_state_change(logger, 'Workflow', 'DETACHING', 'SNAPSHOTTING')
        # Output: State change: Workflow: DETACHING -> SNAPSHOTTING
    """
    logger.debug(f"State change: {resource}: {old_state} -> {new_state}")


def print_header(logger, title: str, char='=', length=60):
    """
    Print a formatted header (INFO level).

    Example:
        print_header(logger, 'EBS Resize')
        # Output:
        # ============================================================
        # EBS Resize
        # ============================================================
    """
    logger.info(char * length)
    logger.info(title)
    logger.info(char * length)
