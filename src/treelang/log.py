"""Logging configuration for the treelang command line."""
import logging
import os
import sys
from typing import Optional


def setup_logging(level: str = "WARNING", log_file: Optional[str] = None) -> None:
    """
    Configure logging for the command line.

    Program output goes to stdout, so log records go to stderr unless a
    log file is given.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file. If None, logs to stderr.
    """
    numeric_level = getattr(logging, level.upper(), logging.WARNING)

    config = {
        'level': numeric_level,
        'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    }

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir)
        config['filename'] = log_file
    else:
        config['stream'] = sys.stderr

    logging.basicConfig(**config)
    logging.getLogger("treelang").setLevel(numeric_level)

    logging.getLogger(__name__).debug("Logging initialized at %s level", level.upper())
