"""Logging utility for Critical CSS."""

import logging
import os
from typing import Optional, Union

import cssutils

from .config import LOG_FORMAT, LOG_DATE_FORMAT, LOG_LEVEL

def setup_logging(log_level: Union[int, str] = LOG_LEVEL, log_file: Optional[str] = None) -> None:
    """Set up logging configuration.

    Args:
        log_level: Level name or number for the root logger
        log_file: Optional path of a file that receives a copy of the log
    """
    handlers = [logging.StreamHandler()]
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        handlers=handlers,
        force=True
    )

    # cssutils reports every unknown property; keep it quiet
    cssutils.log.setLevel(logging.CRITICAL)

# Exported functions
__all__ = ['setup_logging']
