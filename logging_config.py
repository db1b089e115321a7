"""
Logging Configuration

Centralized logging configuration for the ground track tracker.
The command-line entry point configures logging through this module; library
modules in ground_track/ only call logging.getLogger(__name__).

Usage (as in track.py):
    from logging_config import configure_logging, get_logger

    configure_logging(level=logging.DEBUG if args.verbose else logging.INFO,
                      log_file=args.log_file)
    logger = get_logger(__name__)
    logger.error(f"No satellites match prefix {prefix!r}")

Records go to stderr, and also to log_file when one is given. The
ground_track/ modules log geometry failures and unusable element sets at
WARNING, roster progress at INFO, and SGP4 propagation failures and per-cycle
snapshot summaries at DEBUG, which --verbose turns on.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

# Default logging format
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Configure logging for the entire application.

    Calling it again replaces the handlers installed by a previous call.

    Parameters
    ----------
    level : int
        Logging level (e.g., logging.DEBUG, logging.INFO)
    log_file : str, optional
        Path to log file. If None, logs only to console.
    """
    handlers = [logging.StreamHandler(sys.stderr)]

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=handlers,
        force=True,
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a configured logger instance.

    Parameters
    ----------
    name : str
        Name of the logger (typically __name__)

    Returns
    -------
    logging.Logger
        Configured logger instance
    """
    return logging.getLogger(name)
