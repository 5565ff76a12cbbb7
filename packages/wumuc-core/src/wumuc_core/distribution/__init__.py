"""Baseline distribution indexing and matching."""

from wumuc_core.distribution.indexer import (
    ArchiveEntry,
    build_tree,
    distribution_name,
    index_archive,
)
from wumuc_core.distribution.models import MatchSet, Node, NodeKind
from wumuc_core.distribution.resolver import (
    find_matches,
    hash_matches,
    node_at,
    path_exists,
)

__all__ = [
    "ArchiveEntry",
    "MatchSet",
    "Node",
    "NodeKind",
    "build_tree",
    "distribution_name",
    "find_matches",
    "hash_matches",
    "index_archive",
    "node_at",
    "path_exists",
]
