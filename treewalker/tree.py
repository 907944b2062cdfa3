# treewalker/tree.py

"""
Registry rendering utilities.

This module turns a :class:`~treewalker.registry.PathRegistry` into an
``anytree`` hierarchy and renders it as a Unicode tree, similar to the Unix
``tree`` command. Include roots hang below a synthetic ``registry`` node and
every exclude prefix is nested below the include root that covers it, which
makes it easy to see which parts of a walk will be pruned.

Exclude prefixes that no include root covers never affect a walk; they are
listed separately as *inert*.
"""


from __future__ import annotations

from anytree import ContStyle, Node, RenderTree

from treewalker.paths import directory_form
from treewalker.registry import PathRegistry

MARKERS = {"include": "+ ", "exclude": "- ", "inert": "! "}


def build_registry_tree(registry: PathRegistry) -> Node:
    """
    Build an ``anytree`` hierarchy describing a registry.

    Each include root becomes a child of the returned node with
    ``kind="include"``. Each exclude prefix becomes a child of the deepest
    include root covering it with ``kind="exclude"`` and is named by the
    part of its path below that root. Uncovered exclude prefixes are
    attached to the returned node with ``kind="inert"``.

    Every node except the synthetic root carries its absolute path as
    ``fs_path``.

    Parameters
    ----------
    registry : PathRegistry
        Registry to describe.

    Returns
    -------
    anytree.Node
        Root node named ``"registry"``.
    """

    def form(p) -> str:
        return directory_form(p, segment_aware=registry.segment_aware)

    root = Node("registry", kind="registry")
    includes = [(form(p), Node(str(p), parent=root, kind="include", fs_path=p)) for p in registry.includes]

    for p in registry.excludes:
        text = form(p)
        covering = [(prefix, node) for prefix, node in includes if text.startswith(prefix)]
        if not covering:
            Node(str(p), parent=root, kind="inert", fs_path=p)
            continue
        prefix, parent = max(covering, key=lambda c: len(c[0]))
        name = text[len(prefix):].strip("/\\") or "."
        Node(name, parent=parent, kind="exclude", fs_path=p)

    return root


def draw_registry_tree(node: Node) -> str:
    """
    Render a registry hierarchy as a string.

    Include roots are prefixed with ``+``, exclude prefixes with ``-`` and
    inert exclude prefixes with ``!``.
    """

    lines = []
    for pre, _, n in RenderTree(node, style=ContStyle()):
        lines.append(f"{pre}{MARKERS.get(n.kind, '')}{n.name}")
    return "\n".join(lines)
