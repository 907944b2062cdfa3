# treewalker/paths.py

"""
Path normalization and safe filesystem checks.

Registry entries and traversal-time lookups are compared in *directory
form*: an absolute, lexically normalized path string. Normalization never
touches the filesystem, so symbolic links are not resolved and paths that
do not exist yet can be registered.

Every path is taken to name a directory unless the caller states otherwise
with ``is_file=True``, in which case the final component is dropped.

In segment-aware mode the directory form ends with a separator
(``/data/tmp/``), which makes plain string prefix matching respect path
segments: ``/data/tmpfiles/`` does not start with ``/data/tmp/``. Without it
the comparison degrades to raw string matching, where ``/a/bc`` starts with
``/a/b``.
"""


from __future__ import annotations

import os

from treewalker.errors import InvalidPathError


def directory_form(
    path: str | os.PathLike[str],
    *,
    is_file: bool = False,
    segment_aware: bool = True,
) -> str:
    """
    Reduce a path to the directory form used for prefix comparisons.

    Parameters
    ----------
    path : str | os.PathLike
        Absolute path to normalize.
    is_file : bool, default=False
        Whether ``path`` names a file. If so, the file name is stripped and
        the containing directory is returned.
    segment_aware : bool, default=True
        Whether to terminate the result with a path separator.

    Returns
    -------
    str
        The normalized directory form.

    Raises
    ------
    InvalidPathError
        If ``path`` is not absolute.
    """

    raw = os.fspath(path)
    if not os.path.isabs(raw):
        raise InvalidPathError(path)

    text = os.path.normpath(raw)
    if is_file:
        text = os.path.dirname(text)

    # normpath keeps a trailing separator only on the filesystem root.
    if segment_aware and not text.endswith(os.sep):
        text += os.sep
    return text


def sort_key(entry: os.DirEntry) -> tuple[bool, str]:
    """Stable listing order: directories first, then case-insensitive names."""
    try:
        directory = entry.is_dir()
    except OSError:
        directory = False
    return (not directory, entry.name.casefold())
