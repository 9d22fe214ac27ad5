#!/usr/bin/env python3
"""
Logging setup for the CLI. Library modules only create module loggers via
`logging.getLogger(__name__)` and never configure handlers themselves.
"""

import logging
from typing import Union

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: Union[str, int] = "INFO") -> None:
    """
    Attach a single stream handler to the `wonzimer` logger at `level`.

    Calling it again only updates the level.

    Raises:
        ValueError: if `level` is not a known logging level name
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.strip().upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level {level!r}")
        level = resolved

    root = logging.getLogger("wonzimer")
    root.setLevel(level)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
