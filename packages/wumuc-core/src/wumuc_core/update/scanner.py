"""Walk the update source directory into a hashed inventory."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from pathlib import Path
from types import MappingProxyType

from wumuc_core.errors import ReadError
from wumuc_core.hashing import compute_file_hash
from wumuc_core.logs import TRACE
from wumuc_core.update.models import Inventory, InventoryEntry

logger = logging.getLogger(__name__)


def _raise_read_error(err: OSError) -> None:
    raise ReadError("scan", err.strerror or str(err), path=err.filename, cause=err)


def scan(root: str | Path, ignored_names: Iterable[str] = ()) -> Inventory:
    """Visit every entry under *root* (not root itself).

    Entries whose base name is in *ignored_names* are skipped along with
    their whole subtree. Files are hashed; directories are not. Any unreadable
    directory or file aborts the scan with a ReadError, as does a symbolic
    link to a directory. Links to files are followed.
    """
    root = Path(root)
    if not root.is_dir():
        raise ReadError("scan", "not a directory", path=str(root))
    ignored = set(ignored_names)

    entries: dict[str, InventoryEntry] = {}
    root_dirs: set[str] = set()
    root_files: set[str] = set()

    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise_read_error):
        # Prune ignored directories in place so os.walk skips their subtrees
        dirnames[:] = sorted(d for d in dirnames if d not in ignored)
        base = Path(dirpath)
        at_root = base == root

        for dname in dirnames:
            rel = (base / dname).relative_to(root).as_posix()
            if (base / dname).is_symlink():
                # os.walk lists but never enters linked directories
                raise ReadError("scan", "symbolic links to directories are not supported", path=rel)
            entries[rel] = InventoryEntry(relative_path=rel, is_dir=True)
            if at_root:
                root_dirs.add(dname)
            logger.log(TRACE, "[walk] %s (dir)", rel)

        for fname in sorted(filenames):
            if fname in ignored:
                continue
            fpath = base / fname
            rel = fpath.relative_to(root).as_posix()
            try:
                digest = compute_file_hash(fpath)
            except OSError as e:
                raise ReadError("scan", e.strerror or str(e), path=str(fpath), cause=e) from e
            entries[rel] = InventoryEntry(relative_path=rel, is_dir=False, hash=digest)
            if at_root:
                root_files.add(fname)
            logger.log(TRACE, "[walk] %s = %s", rel, digest)

    logger.debug(
        "scanned %s: %d entries, %d top-level dirs, %d top-level files",
        root,
        len(entries),
        len(root_dirs),
        len(root_files),
    )
    return Inventory(
        entries=MappingProxyType(entries),
        root_dir_names=frozenset(root_dirs),
        root_file_names=frozenset(root_files),
    )
