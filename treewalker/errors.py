# treewalker/errors.py

"""
Exception types and failure diagnostics.

Registry calls fail fast with :class:`InvalidPathError`, :meth:`Walker.run`
fails with :class:`InvalidArgumentError`, and per-entry filesystem failures
met during a walk are wrapped in :class:`FilesystemEntryError` and reported
without ending the walk.

:func:`diagnostic_trace` turns a chain of nested failures into a readable,
multi-line description.
"""


from __future__ import annotations

import traceback
from pathlib import Path


class TreeWalkerError(Exception):
    """Base class for all treewalker errors."""


class InvalidPathError(TreeWalkerError, ValueError):
    """A path handed to the registry is not absolute."""

    def __init__(self, path, message: str | None = None) -> None:
        self.path = path
        super().__init__(message or f"Path must be absolute: {path!s}")


class InvalidArgumentError(TreeWalkerError, ValueError):
    """A required argument is missing or unusable."""


class FilesystemEntryError(TreeWalkerError):
    """
    A single filesystem entry could not be processed during a walk.

    The originating :class:`OSError` is attached as ``__cause__``.
    """

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        super().__init__(message)


def _nested(exc: BaseException) -> BaseException | None:
    if exc.__cause__ is not None:
        return exc.__cause__
    if exc.__context__ is not None and not exc.__suppress_context__:
        return exc.__context__
    return None


def diagnostic_trace(exc: BaseException) -> str:
    """
    Describe an exception and all of its nested causes.

    Each level of the chain is rendered on its own line as
    ``Type: message``; every nested level is prefixed with ``caused by:``.
    Explicit causes (``raise ... from ...``) are followed first, implicit
    contexts only when they were not suppressed.

    Parameters
    ----------
    exc : BaseException
        Outermost exception of the chain.

    Returns
    -------
    str
        The multi-line diagnostic, without a trailing newline.
    """

    lines: list[str] = []
    seen: set[int] = set()
    current: BaseException | None = exc

    # Chains can loop when an exception is re-raised inside its own handler.
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        text = "".join(traceback.format_exception_only(type(current), current)).strip()
        lines.append(text if not lines else f"caused by: {text}")
        current = _nested(current)

    return "\n".join(lines)
