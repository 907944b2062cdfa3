"""
treewalker — background traversal of include/exclude directory trees.

This package provides:
- a registry of absolute include roots and exclude prefixes that resolves
  overlapping registrations as they are added,
- a walker that traverses the include roots on a background thread, prunes
  excluded subtrees and hands every accepted path to a callback, with
  pause, resume and stop controls.

The API is based on ``pathlib.Path``. The found-callback runs on the
walker's thread and throttles the walk while it runs.
"""

from __future__ import annotations

from .errors import (
    FilesystemEntryError,
    InvalidArgumentError,
    InvalidPathError,
    TreeWalkerError,
    diagnostic_trace,
)
from .registry import PathRegistry
from .tree import build_registry_tree, draw_registry_tree
from .walker import Walker, WalkerState, accept_all

__version__ = "0.1.0"

__all__ = [
    "PathRegistry",
    "Walker",
    "WalkerState",
    "accept_all",
    "build_registry_tree",
    "draw_registry_tree",
    "diagnostic_trace",
    "TreeWalkerError",
    "InvalidPathError",
    "InvalidArgumentError",
    "FilesystemEntryError",
]
