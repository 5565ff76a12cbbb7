"""Perform copies and classify each as an added or a modified file."""

from __future__ import annotations

import logging

from wumuc_core.distribution.models import Node
from wumuc_core.distribution.resolver import hash_matches, path_exists
from wumuc_core.output.staging import Stager
from wumuc_core.update.descriptor import ChangeKind, ChangeRecord, FileChanges
from wumuc_core.update.models import InventoryEntry

logger = logging.getLogger(__name__)


class ChangeClassifier:
    """Copies one file per call and records the outcome in *changes*.

    Directories are never recorded; only the files copied beneath them.
    """

    def __init__(
        self,
        tree: Node,
        stager: Stager,
        changes: FileChanges,
        check_hashes: bool = True,
    ) -> None:
        self.tree = tree
        self.stager = stager
        self.changes = changes
        self.check_hashes = check_hashes

    def place(
        self, entry: InventoryEntry, dest_rel: str, *, unambiguous: bool = False
    ) -> ChangeRecord | None:
        """Copy *entry* to *dest_rel* (relative to the distribution root).

        When *unambiguous* is set (the single-match path) and hash checking is
        on, a file identical to the baseline copy at *dest_rel* is skipped and
        ``None`` is returned.
        """
        if entry.is_dir:
            raise ValueError(f"cannot classify a directory: {entry.relative_path}")

        if unambiguous and self.check_hashes and entry.hash is not None:
            if hash_matches(self.tree, dest_rel, entry.hash):
                logger.debug("hash matches baseline, skipping %s", dest_rel)
                return None
            logger.debug("hash differs from baseline, copying %s", dest_rel)

        self.stager.copy(entry.relative_path, dest_rel)

        if path_exists(self.tree, dest_rel, is_dir=False):
            record = ChangeRecord(ChangeKind.modified, dest_rel)
        else:
            record = ChangeRecord(ChangeKind.added, dest_rel)
        self.changes.record(record)
        logger.info("%s %s", record.kind.value, dest_rel)
        return record
