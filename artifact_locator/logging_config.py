"""Logging setup shared by the ASGI app and scripts."""

from __future__ import annotations

import logging
import sys
from typing import Optional

_HANDLER_NAME = "artifact_locator"


def configure_logging(level: str = "INFO", fmt: Optional[str] = None) -> None:
    """Install a single stream handler on the root logger.

    Calling this more than once replaces the level and format instead of
    stacking handlers.
    """
    root = logging.getLogger()
    root.setLevel(level.upper())
    formatter = logging.Formatter(fmt or "%(asctime)s %(levelname)s [%(name)s] %(message)s")

    for handler in root.handlers:
        if handler.get_name() == _HANDLER_NAME:
            handler.setFormatter(formatter)
            return

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(formatter)
    root.addHandler(handler)
    # httpx logs every request line at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
