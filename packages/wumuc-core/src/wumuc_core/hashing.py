"""Content digests shared by the archive indexer and the directory scanner."""

from __future__ import annotations

import hashlib
from pathlib import Path
from typing import BinaryIO

_CHUNK_SIZE = 64 * 1024


def compute_hash(content: bytes) -> str:
    """MD5 hex digest (32 chars) of *content*."""
    return hashlib.md5(content).hexdigest()


def compute_stream_hash(stream: BinaryIO) -> str:
    """Hash a binary stream in chunks without loading it whole."""
    digest = hashlib.md5()
    for chunk in iter(lambda: stream.read(_CHUNK_SIZE), b""):
        digest.update(chunk)
    return digest.hexdigest()


def compute_file_hash(path: Path) -> str:
    """Read a file from disk and return its MD5 hex digest."""
    with open(path, "rb") as f:
        return compute_stream_hash(f)
