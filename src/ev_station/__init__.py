"""EV charging station booking core — dock allocation, deferral, settlement."""

from __future__ import annotations

import logging
import sys

__version__ = "1.0.0"


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Configure root logging for the API / CLI entry points."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    return logging.getLogger("ev_station")
