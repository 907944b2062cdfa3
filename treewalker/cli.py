# treewalker/cli.py

"""
Command-line interface.

Walks one or more directory trees, skipping excluded subtrees, and prints
every accepted path on its own line::

    treewalker ~/data --exclude ~/data/tmp --suffix .txt --files-only

Relative paths given on the command line are resolved against the current
working directory before they are registered.
"""


from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path
from typing import Callable, TextIO

from treewalker.errors import FilesystemEntryError, TreeWalkerError, diagnostic_trace
from treewalker.log import get_logger, setup_base_logger
from treewalker.registry import PathRegistry
from treewalker.settings import settings
from treewalker.tree import build_registry_tree, draw_registry_tree
from treewalker.walker import Walker

logger = get_logger("cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="treewalker",
        description="Walk directory trees, pruning excluded subtrees, and print matching paths.",
    )
    parser.add_argument("roots", nargs="+", type=Path, metavar="ROOT", help="directory to walk")
    parser.add_argument(
        "-x", "--exclude", action="append", default=[], type=Path, metavar="DIR",
        help="directory whose subtree is skipped (repeatable)",
    )
    parser.add_argument(
        "-s", "--suffix", action="append", default=[], metavar=".EXT",
        help="only accept paths with this suffix (repeatable, case-insensitive)",
    )
    parser.add_argument("--files-only", action="store_true", help="do not print directories")
    parser.add_argument(
        "--follow-symlinks", action="store_true", default=settings.FOLLOW_SYMLINKS,
        help="descend into symbolic links to directories",
    )
    parser.add_argument(
        "--throttle", type=float, default=0.0, metavar="SECONDS",
        help="pause after every printed path to slow the walk down",
    )
    parser.add_argument("--show-registry", action="store_true", help="print the include/exclude tree first")
    parser.add_argument("--segment-unaware", action="store_true", help="match exclude prefixes as raw strings")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="more logging (-vv for debug)")
    return parser


def make_filter(suffixes: list[str], files_only: bool) -> Callable[[Path], bool]:
    wanted = {s.lower() if s.startswith(".") else f".{s.lower()}" for s in suffixes}

    def accept(path: Path) -> bool:
        if files_only and not path.is_file():
            return False
        return not wanted or path.suffix.lower() in wanted

    return accept


def main(argv: list[str] | None = None, out: TextIO | None = None) -> int:
    args = build_parser().parse_args(argv)
    out = out or sys.stdout

    level = {0: settings.LOG_LEVEL, 1: "INFO"}.get(args.verbose, "DEBUG")
    setup_base_logger(level=level)

    registry = PathRegistry(segment_aware=not args.segment_unaware)
    try:
        for root in args.roots:
            registry.add_include(root.expanduser().resolve(), recursive=True)
        for excluded in args.exclude:
            registry.add_exclude(excluded.expanduser().resolve())
    except TreeWalkerError as exc:
        print(diagnostic_trace(exc), file=sys.stderr)
        return 2

    if args.show_registry:
        print(draw_registry_tree(build_registry_tree(registry)), file=out)

    failures: list[FilesystemEntryError] = []

    def on_error(error: FilesystemEntryError) -> None:
        failures.append(error)
        print(diagnostic_trace(error), file=sys.stderr)

    def found(path: Path) -> None:
        print(path, file=out)
        if args.throttle > 0:
            time.sleep(args.throttle)

    walker = Walker(
        registry,
        make_filter(args.suffix, args.files_only),
        on_error=on_error,
        follow_symlinks=args.follow_symlinks,
    )
    try:
        walker.run(found)
        walker.join()
    except KeyboardInterrupt:
        logger.warning("interrupted, stopping walk")
        walker.close()
        return 130

    if walker.error is not None:
        print(diagnostic_trace(walker.error), file=sys.stderr)
        return 1

    if failures:
        logger.warning("%d entries could not be read", len(failures))
    return 0
