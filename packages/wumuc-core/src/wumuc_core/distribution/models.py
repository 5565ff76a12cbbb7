"""Data models for the indexed baseline distribution."""

from __future__ import annotations

import weakref
from dataclasses import dataclass, field
from enum import Enum


class NodeKind(str, Enum):
    """Whether a tree entry is a file or a directory."""

    file = "file"
    directory = "directory"

    @classmethod
    def of(cls, is_dir: bool) -> NodeKind:
        return cls.directory if is_dir else cls.file


@dataclass(eq=False)
class Node:
    """One entry in the baseline tree.

    Children are owned by the parent through a name-keyed mapping. The parent
    link is a weak reference kept only for path reconstruction.
    """

    name: str
    kind: NodeKind
    relative_path: str
    hash: str | None = None
    children: dict[str, Node] = field(default_factory=dict, repr=False)
    _parent: weakref.ReferenceType[Node] | None = field(
        default=None, repr=False, compare=False
    )

    @classmethod
    def root(cls) -> Node:
        """Synthetic root: empty name, no hash, directory kind."""
        return cls(name="", kind=NodeKind.directory, relative_path="")

    @property
    def is_dir(self) -> bool:
        return self.kind is NodeKind.directory

    @property
    def parent(self) -> Node | None:
        return self._parent() if self._parent is not None else None

    def child_path(self, name: str) -> str:
        """Relative path of a (possibly hypothetical) child called *name*."""
        return f"{self.relative_path}/{name}" if self.relative_path else name

    def add_child(self, child: Node) -> Node:
        """Attach *child*, replacing any existing child of the same name."""
        child._parent = weakref.ref(self)
        self.children[child.name] = child
        return child

    def path_from_root(self) -> str:
        """Rebuild the relative path by following parent links."""
        parts: list[str] = []
        node: Node | None = self
        while node is not None and node.name:
            parts.append(node.name)
            node = node.parent
        return "/".join(reversed(parts))


# Mapping from a candidate parent's relative path to the parent node.
MatchSet = dict[str, Node]
