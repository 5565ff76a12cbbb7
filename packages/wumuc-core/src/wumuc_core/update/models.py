"""Data models for the scanned update source."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(frozen=True)
class InventoryEntry:
    """A file or directory found under the update root."""

    relative_path: str
    is_dir: bool
    hash: str | None = None

    @property
    def name(self) -> str:
        return self.relative_path.rsplit("/", 1)[-1]


@dataclass(frozen=True)
class Inventory:
    """Flat, read-only view of everything under the update root."""

    entries: Mapping[str, InventoryEntry] = field(
        default_factory=lambda: MappingProxyType({})
    )
    root_dir_names: frozenset[str] = frozenset()
    root_file_names: frozenset[str] = frozenset()

    def files_under(self, relative_path: str) -> list[InventoryEntry]:
        """File entries strictly below *relative_path*, sorted by path."""
        prefix = relative_path.rstrip("/") + "/"
        return [
            self.entries[p]
            for p in sorted(self.entries)
            if p.startswith(prefix) and not self.entries[p].is_dir
        ]

    def top_level(self) -> list[InventoryEntry]:
        """Root-level directories then root-level files, each sorted by name."""
        return [self.entries[n] for n in sorted(self.root_dir_names)] + [
            self.entries[n] for n in sorted(self.root_file_names)
        ]
