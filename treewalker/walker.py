# treewalker/walker.py

"""
Background, pausable filesystem walker.

A :class:`Walker` walks the include roots of a :class:`PathRegistry` on a
single worker thread. Every entry below a root is first checked against the
registry (excluded directories are pruned with their whole subtree), then
passed to the filter predicate; accepted entries are handed to the
found-callback.

The callback runs synchronously on the worker. A slow callback therefore
slows the walk down, which is the intended way to throttle a traversal.

Control calls (:meth:`Walker.run`, :meth:`Walker.pause`,
:meth:`Walker.stop`) may come from any thread. The worker looks at its state
once after each entry, so a pause or stop request never interrupts the
filter or the callback half-way.
"""


from __future__ import annotations

import logging
import os
import threading
from enum import Enum
from pathlib import Path
from typing import Callable, Iterator

from treewalker.errors import FilesystemEntryError, InvalidArgumentError, diagnostic_trace
from treewalker.paths import sort_key
from treewalker.registry import PathRegistry
from treewalker.settings import settings

logger = logging.getLogger(__name__)

FilterPredicate = Callable[[Path], bool]
FoundCallback = Callable[[Path], None]
ErrorSink = Callable[[FilesystemEntryError], None]


class WalkerState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"


def accept_all(path: Path) -> bool:
    return True


class Walker:
    """
    Walk the include roots of a registry on a background thread.

    Parameters
    ----------
    registry : PathRegistry
        Include roots and exclude prefixes. The registry is shared, not
        copied: its roots are read when a walk starts, and it must not be
        mutated while a walk is in progress.
    filter_predicate : Callable[[pathlib.Path], bool], optional
        Decides which visited entries are handed to the found-callback.
        Accepts everything by default.
    on_error : Callable[[FilesystemEntryError], None] | None, optional
        Receives per-entry filesystem failures. When omitted, failures are
        logged as warnings. Either way the walk goes on.
    follow_symlinks : bool | None, optional
        Whether to descend into symbolic links to directories. Defaults to
        the ``TREEWALKER_FOLLOW_SYMLINKS`` setting.

    Raises
    ------
    InvalidArgumentError
        If ``filter_predicate`` is not callable.
    """

    def __init__(
        self,
        registry: PathRegistry,
        filter_predicate: FilterPredicate = accept_all,
        *,
        on_error: ErrorSink | None = None,
        follow_symlinks: bool | None = None,
    ) -> None:
        if not callable(filter_predicate):
            raise InvalidArgumentError("filter_predicate must be callable")

        self.registry = registry
        self.follow_symlinks = settings.FOLLOW_SYMLINKS if follow_symlinks is None else follow_symlinks
        self.error: BaseException | None = None

        self._filter = filter_predicate
        self._on_error = on_error
        self._state = WalkerState.IDLE
        self._cond = threading.Condition()
        self._worker: threading.Thread | None = None
        self._generation = 0
        self._parked = False

    # ------------------------------------------------------------------ #
    # State
    # ------------------------------------------------------------------ #

    @property
    def state(self) -> WalkerState:
        with self._cond:
            return self._state

    def running(self) -> bool:
        with self._cond:
            return self._state is WalkerState.RUNNING

    def paused(self) -> bool:
        with self._cond:
            return self._state is WalkerState.PAUSED

    # ------------------------------------------------------------------ #
    # Control
    # ------------------------------------------------------------------ #

    def run(self, found_callback: FoundCallback) -> None:
        """
        Start a walk, or resume a paused one.

        No-op while a walk is running. A paused walk resumes where it
        stopped and keeps its original callback. Otherwise a fresh walk
        starts from the first include root.

        Raises
        ------
        InvalidArgumentError
            If ``found_callback`` is missing or not callable.
        """

        if found_callback is None or not callable(found_callback):
            raise InvalidArgumentError("found_callback must be a callable")

        with self._cond:
            if self._state is WalkerState.RUNNING:
                return

            previous = self._worker
            if self._state is WalkerState.PAUSED and previous is not None and previous.is_alive():
                self._state = WalkerState.RUNNING
                self._cond.notify_all()
                logger.debug("walk resumed")
                return

            # A stopped worker that has not reached its checkpoint yet sees
            # the new generation there and quits.
            self._generation += 1
            generation = self._generation
            self._cond.notify_all()

        if previous is not None and previous is not threading.current_thread():
            previous.join()

        with self._cond:
            if self._generation != generation:
                # A concurrent run() took over.
                return
            self._state = WalkerState.RUNNING
            self._parked = False
            self.error = None
            self._worker = threading.Thread(
                target=self._work,
                args=(found_callback, generation),
                name=f"treewalker-{generation}",
                daemon=True,
            )
            self._worker.start()

    def pause(self) -> None:
        """Ask a running walk to park after the entry it is processing."""
        with self._cond:
            if self._state is not WalkerState.RUNNING:
                return
            self._state = WalkerState.PAUSED
        logger.debug("walk pause requested")

    def stop(self) -> None:
        """Ask the walk to end after the entry it is processing."""
        with self._cond:
            self._state = WalkerState.IDLE
            self._cond.notify_all()
        logger.debug("walk stop requested")

    def wait_parked(self, timeout: float | None = None) -> bool:
        """
        Block until a paused worker has actually parked.

        Returns ``True`` once the worker sits at its checkpoint, or as soon
        as the walker is no longer paused; ``False`` on timeout.
        """

        with self._cond:
            return self._cond.wait_for(
                lambda: self._parked or self._state is not WalkerState.PAUSED,
                timeout,
            )

    def join(self, timeout: float | None = None) -> bool:
        """
        Wait for the worker thread to terminate.

        Returns ``True`` if no worker is alive afterwards. Calling it from
        the worker itself returns ``False`` immediately.
        """

        worker = self._worker
        if worker is None:
            return True
        if worker is threading.current_thread():
            return False
        worker.join(timeout)
        return not worker.is_alive()

    def close(self) -> bool:
        self.stop()
        return self.join(settings.JOIN_TIMEOUT)

    def __enter__(self) -> Walker:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ------------------------------------------------------------------ #
    # Worker
    # ------------------------------------------------------------------ #

    def _work(self, found_callback: FoundCallback, generation: int) -> None:
        try:
            self._walk(found_callback, generation)
        except Exception as exc:
            logger.exception("walk aborted by %s", type(exc).__name__)
            with self._cond:
                if self._generation == generation:
                    self.error = exc
        finally:
            with self._cond:
                if self._generation == generation:
                    self._state = WalkerState.IDLE
                    self._parked = False
                    self._cond.notify_all()

    def _walk(self, found_callback: FoundCallback, generation: int) -> None:
        roots = list(self.registry)
        logger.info("walk started over %d root(s)", len(roots))

        visited = accepted = 0
        seen: set[tuple[int, int]] = set()

        for root in roots:
            if self.registry.excluded(root):
                logger.debug("root %s is excluded, skipped", root)
                continue
            if self.follow_symlinks:
                try:
                    st = os.stat(root)
                except OSError as exc:
                    self._report(root, "cannot stat root", exc)
                    continue
                seen.add((st.st_dev, st.st_ino))

            stack: list[Iterator[os.DirEntry]] = [iter(self._scan(root))]
            while stack:
                entry = next(stack[-1], None)
                if entry is None:
                    stack.pop()
                    continue

                visited += 1
                path = Path(entry.path)
                try:
                    directory = entry.is_dir(follow_symlinks=self.follow_symlinks)
                except OSError as exc:
                    self._report(path, "cannot determine entry type", exc)
                else:
                    if directory and self.registry.excluded(path):
                        logger.debug("pruned %s", path)
                    else:
                        if self._filter(path):
                            accepted += 1
                            found_callback(path)
                        if directory and self._first_visit(entry, seen):
                            stack.append(iter(self._scan(path)))

                if not self._checkpoint(generation):
                    logger.info("walk stopped after %d entries (%d accepted)", visited, accepted)
                    return

        logger.info("walk finished: %d entries visited, %d accepted", visited, accepted)

    def _checkpoint(self, generation: int) -> bool:
        with self._cond:
            while self._generation == generation and self._state is WalkerState.PAUSED:
                self._parked = True
                self._cond.notify_all()
                self._cond.wait()
            self._parked = False
            return self._generation == generation and self._state is WalkerState.RUNNING

    def _scan(self, directory: Path) -> list[os.DirEntry]:
        try:
            with os.scandir(directory) as it:
                return sorted(it, key=sort_key)
        except OSError as exc:
            self._report(directory, "cannot list directory", exc)
            return []

    def _first_visit(self, entry: os.DirEntry, seen: set[tuple[int, int]]) -> bool:
        # Only followed symlinks can lead back into an already visited directory.
        if not self.follow_symlinks:
            return True
        try:
            st = entry.stat()
        except OSError as exc:
            self._report(Path(entry.path), "cannot stat directory", exc)
            return False
        key = (st.st_dev, st.st_ino)
        if key in seen:
            logger.debug("%s already visited, not descending again", entry.path)
            return False
        seen.add(key)
        return True

    def _report(self, path: Path, message: str, cause: OSError) -> None:
        error = FilesystemEntryError(path, f"{message}: {path}")
        error.__cause__ = cause
        if self._on_error is not None:
            self._on_error(error)
        else:
            logger.warning("%s", diagnostic_trace(error))
