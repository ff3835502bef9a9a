"""Tactician: minimax / alpha-beta move selection over python-chess."""

import logging
from typing import Optional

from tactician.config import CONFIG

__version__ = "1.0.0"


def configure_logging(level: Optional[str] = None) -> None:
    """Set up root logging at ``level`` (defaults to ``CONFIG.log_level``)."""
    logging.basicConfig(
        level=(level or CONFIG.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
