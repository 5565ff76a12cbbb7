"""Zip the staged update into its final archive."""

from __future__ import annotations

import logging
import zipfile
from pathlib import Path

from wumuc_core.errors import CopyError

logger = logging.getLogger(__name__)


def build_archive(staging_root: Path, update_name: str, output_dir: Path) -> Path:
    """Write ``<output_dir>/<update_name>.zip`` from ``<staging_root>/<update_name>``.

    Archive members keep the ``<update_name>/`` prefix so the zip extracts
    into a single directory.
    """
    source = staging_root / update_name
    zip_path = output_dir / f"{update_name}.zip"
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        with zipfile.ZipFile(zip_path, "w", zipfile.ZIP_DEFLATED) as zf:
            for path in sorted(source.rglob("*")):
                arcname = path.relative_to(staging_root).as_posix()
                if path.is_dir():
                    zf.write(path, arcname + "/")
                else:
                    zf.write(path, arcname)
    except OSError as e:
        zip_path.unlink(missing_ok=True)
        raise CopyError("archive", e.strerror or str(e), path=str(zip_path), cause=e) from e
    logger.info("wrote %s", zip_path)
    return zip_path
