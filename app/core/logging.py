"""Process-wide logging setup."""

from __future__ import annotations

import logging
from typing import Final

_DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"


def configure_logging(*, level: str = "INFO") -> None:
    """Configure the root logger once.

    Uvicorn may already have attached handlers; in that case only the level is adjusted.
    """
    root = logging.getLogger()
    if root.handlers:
        root.setLevel(level)
        return

    logging.basicConfig(level=level, format=_DEFAULT_FORMAT, datefmt=_DATE_FORMAT)

    logging.getLogger("httpx").setLevel(logging.WARNING)
