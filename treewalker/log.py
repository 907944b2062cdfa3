# treewalker/log.py

"""
Logger naming and console configuration for treewalker.

Library modules log through ``logging.getLogger(__name__)`` and never
configure handlers. Front ends call :func:`setup_base_logger` once to get
console output for the whole ``treewalker`` namespace.
"""


from __future__ import annotations

import logging
import sys
from typing import TextIO

BASE_LOGGER = "treewalker"


def setup_base_logger(*, level: int | str = logging.WARNING, stream: TextIO | None = None) -> logging.Logger:
    """
    Configure the base ``treewalker`` logger once and return it.

    A second call only adjusts the level; handlers are not duplicated.

    Parameters
    ----------
    level : int | str, default=logging.WARNING
        Level for the base logger, as a number or a level name.
    stream : TextIO | None, optional
        Destination stream, ``sys.stderr`` by default.

    Returns
    -------
    logging.Logger
        The configured base logger.
    """

    base = logging.getLogger(BASE_LOGGER)
    if base.handlers:
        base.setLevel(level)
        return base

    base.setLevel(level)
    base.propagate = False

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    base.addHandler(handler)
    return base


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger namespaced under ``treewalker``."""
    if not name or name == BASE_LOGGER:
        return logging.getLogger(BASE_LOGGER)
    if name.startswith(BASE_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{BASE_LOGGER}.{name}")
