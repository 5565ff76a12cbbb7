"""The on-disk staging area an update is assembled in."""

from __future__ import annotations

import logging
import shutil
from collections.abc import Iterable
from pathlib import Path

from wumuc_core.context import RunContext
from wumuc_core.errors import CopyError

logger = logging.getLogger(__name__)


class Stager:
    """Copies update content and resource files into the staging directory."""

    def __init__(self, context: RunContext) -> None:
        self.context = context

    def prepare(self) -> Path:
        """Create the content directory. Safe to call repeatedly."""
        return self._mkdir(self.context.content_dir)

    def copy(self, source_rel: str, dest_rel: str) -> Path:
        """Copy ``<update_root>/<source_rel>`` to ``<content_dir>/<dest_rel>``."""
        source = self.context.update_root / source_rel
        dest = self.context.content_dir / dest_rel
        if not dest.resolve().is_relative_to(self.context.content_dir.resolve()):
            raise CopyError("copy", "destination is outside the staging area", path=dest_rel)
        self._mkdir(dest.parent)
        try:
            shutil.copy2(source, dest)
        except OSError as e:
            raise CopyError("copy", e.strerror or str(e), path=dest_rel, cause=e) from e
        logger.debug("[copy] %s -> %s", source_rel, dest_rel)
        return dest

    def copy_resources(
        self, resources: dict[str, bool], exclude: Iterable[str] = ()
    ) -> list[str]:
        """Copy resource files to the update root directory.

        *resources* maps a file name to whether it is mandatory. A missing
        mandatory file raises CopyError; a missing optional one is logged.
        Returns the names that were copied.
        """
        self._mkdir(self.context.update_dir)
        excluded = set(exclude)
        copied: list[str] = []
        for name, mandatory in sorted(resources.items()):
            if name in excluded:
                continue
            source = self.context.update_root / name
            if not source.is_file():
                if mandatory:
                    raise CopyError("copy resource", "mandatory file not found", path=name)
                logger.info("optional resource file '%s' not found", name)
                continue
            try:
                shutil.copy2(source, self.context.update_dir / name)
            except OSError as e:
                raise CopyError("copy resource", e.strerror or str(e), path=name, cause=e) from e
            copied.append(name)
        return copied

    def write_text(self, name: str, text: str) -> Path:
        """Write a generated file (e.g. the descriptor) next to the content dir."""
        dest = self._mkdir(self.context.update_dir) / name
        try:
            dest.write_text(text, encoding="utf-8")
        except OSError as e:
            raise CopyError("write", e.strerror or str(e), path=name, cause=e) from e
        return dest

    def discard(self) -> None:
        """Remove the whole staging root; it is never valid after a failure."""
        shutil.rmtree(self.context.staging_root, ignore_errors=True)

    @staticmethod
    def _mkdir(path: Path) -> Path:
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise CopyError("create directory", e.strerror or str(e), path=str(path), cause=e) from e
        return path
