"""Logging setup for scripts using abs_lookup."""

import logging
import sys
from typing import Union


def setup_logging(level: Union[int, str] = logging.INFO, verbose: bool = False) -> None:
    """Configure logging.

    Args:
        level: Logging level name or number
        verbose: If True, force DEBUG level
    """
    if verbose:
        level = logging.DEBUG
    elif isinstance(level, str):
        level = getattr(logging, level.upper())
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
