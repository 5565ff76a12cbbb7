"""Queries against the indexed baseline tree."""

from __future__ import annotations

import logging

from wumuc_core.distribution.models import MatchSet, Node, NodeKind
from wumuc_core.logs import TRACE

logger = logging.getLogger(__name__)


def _segments(relative_path: str) -> list[str]:
    return [s for s in relative_path.replace("\\", "/").split("/") if s]


def node_at(root: Node, relative_path: str) -> Node | None:
    """Walk *relative_path* segment by segment; ``None`` if any segment is missing.

    An empty path resolves to *root* itself.
    """
    current = root
    for segment in _segments(relative_path):
        child = current.children.get(segment)
        if child is None:
            logger.log(TRACE, "%s not found under %r", segment, current.relative_path)
            return None
        current = child
    return current


def path_exists(root: Node, relative_path: str, is_dir: bool) -> bool:
    """True when a node exists at *relative_path* with the given kind."""
    node = node_at(root, relative_path)
    return node is not None and node.kind is NodeKind.of(is_dir)


def hash_matches(root: Node, relative_path: str, digest: str) -> bool:
    """True when a file node exists at *relative_path* and carries *digest*."""
    node = node_at(root, relative_path)
    return node is not None and not node.is_dir and node.hash == digest


def find_matches(root: Node, name: str, is_dir: bool) -> MatchSet:
    """Collect every node that has a direct child called *name* of the given kind.

    The result maps the *parent's* relative path to the parent node. The search
    keeps descending below a match since the same name can recur deeper in
    the tree.
    """
    kind = NodeKind.of(is_dir)
    matches: MatchSet = {}
    stack = [root]
    while stack:
        node = stack.pop()
        child = node.children.get(name)
        if child is not None and child.kind is kind:
            matches[node.relative_path] = node
            logger.log(TRACE, "match at %s", child.path_from_root())
        stack.extend(c for c in node.children.values() if c.is_dir)
    logger.debug("matches for %s (dir=%s): %s", name, is_dir, sorted(matches))
    return matches
