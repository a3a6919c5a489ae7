"""
Logging utilities for the AGCWD command-line tool and HTTP service.
"""

import logging
import sys

def setup_logger(name: str = "agcwd", level: int = logging.INFO) -> logging.Logger:
    """
    Set up and return a configured logger.

    Library modules log through ``logging.getLogger(__name__)``, so configuring
    the ``agcwd`` logger here also routes their records to the same handler.

    Args:
        name: Logger name
        level: Logging level (default: INFO)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        # Console handler
        handler = logging.StreamHandler(sys.stdout)

        # Format
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%H:%M:%S'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(level)

    return logger
