"""Index a baseline distribution archive into an in-memory tree."""

from __future__ import annotations

import logging
import zipfile
import zlib
from collections.abc import Callable, Iterable
from pathlib import Path

from wumuc_core.distribution.models import Node, NodeKind
from wumuc_core.errors import ReadError
from wumuc_core.hashing import compute_hash
from wumuc_core.logs import TRACE

logger = logging.getLogger(__name__)

# (archive path, is_dir, payload or a zero-arg reader returning the payload)
ArchiveEntry = tuple[str, bool, bytes | Callable[[], bytes] | None]


def _strip_distribution_name(path: str) -> str:
    """Drop the leading distribution-name component and any trailing slash."""
    path = path.replace("\\", "/").strip("/")
    _, _, rest = path.partition("/")
    return rest


def _read_payload(path: str, content: bytes | Callable[[], bytes] | None) -> bytes:
    if content is None:
        return b""
    if callable(content):
        try:
            return content()
        except (OSError, zipfile.BadZipFile, RuntimeError, zlib.error) as e:
            raise ReadError("index", str(e), path=path, cause=e) from e
    return content


def build_tree(entries: Iterable[ArchiveEntry]) -> Node:
    """Build the baseline tree from archive entries.

    Paths are descended one segment at a time. Intermediate segments that have
    not been seen yet become directory placeholders; an entry that names a
    path explicitly overrides the placeholder's kind and hash while keeping
    any children already attached to it.
    """
    root = Node.root()
    for path, is_dir, content in entries:
        relative = _strip_distribution_name(path)
        if not relative:
            continue
        digest = None if is_dir else compute_hash(_read_payload(path, content))
        _insert(root, [s for s in relative.split("/") if s], is_dir, digest)
        logger.log(TRACE, "indexed %s (dir=%s)", relative, is_dir)
    return root


def _insert(root: Node, segments: list[str], is_dir: bool, digest: str | None) -> Node:
    current = root
    for segment in segments[:-1]:
        child = current.children.get(segment)
        if child is None:
            child = current.add_child(
                Node(
                    name=segment,
                    kind=NodeKind.directory,
                    relative_path=current.child_path(segment),
                )
            )
        current = child

    leaf_name = segments[-1]
    existing = current.children.get(leaf_name)
    if existing is not None:
        existing.kind = NodeKind.of(is_dir)
        existing.hash = digest
        return existing
    return current.add_child(
        Node(
            name=leaf_name,
            kind=NodeKind.of(is_dir),
            relative_path=current.child_path(leaf_name),
            hash=digest,
        )
    )


def distribution_name(archive_path: Path) -> str:
    """``wso2am-2.0.0.zip`` -> ``wso2am-2.0.0``."""
    return archive_path.name.removesuffix(".zip")


def index_archive(archive_path: str | Path) -> Node:
    """Open a distribution zip and index every member.

    Member payloads are read and hashed one at a time. Any failure to open
    or read the archive aborts indexing with a ReadError.
    """
    archive_path = Path(archive_path)
    logger.debug("reading distribution %s", archive_path)
    try:
        with zipfile.ZipFile(archive_path) as zf:
            root = build_tree(_iter_members(zf))
    except ReadError:
        raise
    except (OSError, zipfile.BadZipFile) as e:
        raise ReadError("index", str(e), path=str(archive_path), cause=e) from e
    logger.debug("indexed %d top-level entries", len(root.children))
    return root


def _iter_members(zf: zipfile.ZipFile):
    for info in zf.infolist():
        if info.is_dir():
            yield info.filename, True, None
        else:
            yield info.filename, False, _member_reader(zf, info)


def _member_reader(zf: zipfile.ZipFile, info: zipfile.ZipInfo) -> Callable[[], bytes]:
    def read() -> bytes:
        with zf.open(info) as f:
            return f.read()

    return read
