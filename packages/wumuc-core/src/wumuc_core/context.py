"""Run-scoped settings shared by every stage of one update build."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class RunContext:
    """Immutable values fixed at the start of a run.

    ``staging_root`` is the directory holding ``<update_name>/``; content is
    staged under ``<update_name>/<carbon_home>/``.
    """

    update_root: Path
    update_name: str
    product_name: str
    staging_root: Path
    carbon_home: str = "carbon.home"
    check_hashes: bool = True

    @property
    def update_dir(self) -> Path:
        return self.staging_root / self.update_name

    @property
    def content_dir(self) -> Path:
        return self.update_dir / self.carbon_home
