"""
common.logging_setup

Set up standard logging for the project.
"""
import logging
import os
from typing import Optional


def setup_logging(level: Optional[int] = None):
    if level is None:
        level = getattr(logging, os.environ.get("LOG_LEVEL", "INFO").upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    )
