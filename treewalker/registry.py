# treewalker/registry.py

"""
Include/exclude path registry.

A :class:`PathRegistry` holds the absolute directories a walk starts from
(include roots) and the directories whose subtrees a walk skips (exclude
prefixes). Overlaps are resolved when a prefix is added, so lookups during a
walk stay a simple linear scan over the exclude list.

Fill a registry by adding include roots first and exclude prefixes second:
an exclude prefix only has an effect when some include root covers it, and a
recursive include added later re-admits the excluded subtrees below it.

The registry never touches the filesystem and has no internal locking; it
must not be mutated while a walk over it is in progress.
"""


from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterator

from treewalker.paths import directory_form

logger = logging.getLogger(__name__)


def _collapse(entries: list[str]) -> list[str]:
    """Drop duplicates and entries lying under another entry, keeping order."""
    kept = []
    for i, e in enumerate(entries):
        covered = any(
            e.startswith(o) and (o != e or j < i)
            for j, o in enumerate(entries)
            if j != i
        )
        if not covered:
            kept.append(e)
    return kept


class PathRegistry:
    """
    Ordered sets of include roots and exclude prefixes.

    Parameters
    ----------
    segment_aware : bool, default=True
        Whether prefix matching respects path segments. With ``False`` the
        registry compares raw path strings, so an exclude prefix ``/a/b``
        also matches ``/a/bc``.
    """

    def __init__(self, *, segment_aware: bool = True) -> None:
        self.segment_aware = segment_aware
        self._includes: list[str] = []
        self._excludes: list[str] = []

    def _normalize(self, path: str | os.PathLike[str], *, is_file: bool = False) -> str:
        return directory_form(path, is_file=is_file, segment_aware=self.segment_aware)

    # ------------------------------------------------------------------ #
    # Modifiers
    # ------------------------------------------------------------------ #

    def add_include(self, path: str | os.PathLike[str], recursive: bool) -> None:
        """
        Register an include root.

        Parameters
        ----------
        path : str | os.PathLike
            Absolute directory to walk.
        recursive : bool
            If ``True``, every exclude prefix lying under ``path`` is dropped,
            re-admitting those subtrees.

        Raises
        ------
        InvalidPathError
            If ``path`` is not absolute.

        Notes
        -----
        A root equal to, or lying under, an existing root is not added again.
        Existing roots lying under the new one are merged into it.
        """

        p = self._normalize(path)

        if recursive:
            dropped = [e for e in self._excludes if e.startswith(p)]
            if dropped:
                logger.debug("include %s re-admits %d excluded prefix(es)", p, len(dropped))
                self._excludes = [e for e in self._excludes if not e.startswith(p)]

        if any(p.startswith(i) for i in self._includes):
            logger.debug("include %s already covered", p)
            return

        self._includes = [i for i in self._includes if not i.startswith(p)]
        self._includes.append(p)

    def add_exclude(self, path: str | os.PathLike[str]) -> None:
        """
        Register an exclude prefix.

        Every sub path of ``path`` is excluded as well. Exclude prefixes that
        lie under the new one become redundant and are removed; include
        roots that lie under it are voided.

        Raises
        ------
        InvalidPathError
            If ``path`` is not absolute.
        """

        p = self._normalize(path)
        self._excludes = [e for e in self._excludes if not e.startswith(p)]
        voided = [i for i in self._includes if i.startswith(p)]
        if voided:
            logger.debug("exclude %s voids include root(s) %s", p, voided)
            self._includes = [i for i in self._includes if not i.startswith(p)]
        self._excludes.append(p)

    def reroot(self, old_root: str | os.PathLike[str], new_root: str | os.PathLike[str]) -> None:
        """
        Move entries from one root to another.

        With ``/foo/bar`` as old root and ``/foo/rab`` as new root,
        ``/foo/bar/baz`` becomes ``/foo/rab/baz``. Entries that do not start
        with the old root are left unchanged. Roots that end up duplicated or
        nested inside another root are merged afterwards, and so are exclude
        prefixes.
        """

        old = self._normalize(old_root)
        new = self._normalize(new_root)

        def move(entries: list[str]) -> list[str]:
            return [new + e[len(old):] if e.startswith(old) else e for e in entries]

        self._includes = _collapse(move(self._includes))
        self._excludes = _collapse(move(self._excludes))

    def sort(self) -> None:
        """Sort include roots and exclude prefixes lexicographically."""
        self._includes.sort()
        self._excludes.sort()

    def clear(self) -> None:
        self._includes.clear()
        self._excludes.clear()

    # ------------------------------------------------------------------ #
    # Accessors
    # ------------------------------------------------------------------ #

    def excluded(self, path: str | os.PathLike[str], *, is_file: bool = False) -> bool:
        """
        Tell whether a path falls under an exclude prefix.

        Parameters
        ----------
        path : str | os.PathLike
            Absolute path to test.
        is_file : bool, default=False
            Whether ``path`` names a file, in which case its containing
            directory is tested.

        Returns
        -------
        bool
            ``True`` if some exclude prefix is a prefix of the directory form
            of ``path``.

        Raises
        ------
        InvalidPathError
            If ``path`` is not absolute.
        """

        p = self._normalize(path, is_file=is_file)
        return any(p.startswith(e) for e in self._excludes)

    @property
    def includes(self) -> tuple[Path, ...]:
        return tuple(Path(i) for i in self._includes)

    @property
    def excludes(self) -> tuple[Path, ...]:
        return tuple(Path(e) for e in self._excludes)

    def __iter__(self) -> Iterator[Path]:
        # Copy so that a fresh iteration always reflects the current contents.
        return iter(self.includes)

    def __reversed__(self) -> Iterator[Path]:
        return reversed(self.includes)

    def __len__(self) -> int:
        return len(self._includes)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(includes={self._includes!r}, "
            f"excludes={self._excludes!r}, segment_aware={self.segment_aware!r})"
        )
