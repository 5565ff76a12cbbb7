"""End-to-end update creation: scan, index, place, classify, archive."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from wumuc_core.config.models import WumucConfig
from wumuc_core.context import RunContext
from wumuc_core.distribution.indexer import distribution_name, index_archive
from wumuc_core.distribution.models import Node
from wumuc_core.errors import CopyError, ReadError
from wumuc_core.output.archive import build_archive
from wumuc_core.output.classifier import ChangeClassifier
from wumuc_core.output.staging import Stager
from wumuc_core.placement.decider import PlacementDecider
from wumuc_core.placement.models import Placement
from wumuc_core.placement.prompter import Prompter
from wumuc_core.update.descriptor import (
    FileChanges,
    UpdateDescriptor,
    dump_descriptor,
    load_descriptor,
    update_name,
    validate_descriptor,
)
from wumuc_core.update.models import Inventory
from wumuc_core.update.scanner import scan

logger = logging.getLogger(__name__)


@dataclass
class BuildResult:
    """What a completed run produced."""

    update_name: str
    archive_path: Path
    descriptor: UpdateDescriptor
    placements: list[Placement] = field(default_factory=list)

    @property
    def added(self) -> list[str]:
        return self.descriptor.file_changes.added_files

    @property
    def modified(self) -> list[str]:
        return self.descriptor.file_changes.modified_files


class UpdateBuilder:
    """Builds one update archive from an update directory and a distribution zip."""

    def __init__(self, config: WumucConfig, prompter: Prompter) -> None:
        self.config = config
        self.prompter = prompter

    # ------------------------------------------------------------------
    # Pre-flight
    # ------------------------------------------------------------------

    def check_inputs(self, update_dir: Path, distribution: Path) -> UpdateDescriptor:
        """Validate the input locations and return the parsed descriptor."""
        if not update_dir.is_dir():
            raise ReadError("check update directory", "does not exist", path=str(update_dir))
        if not distribution.is_file():
            raise ReadError("check distribution", "does not exist", path=str(distribution))
        if distribution.suffix != ".zip":
            raise ReadError("check distribution", "does not have a 'zip' extension", path=str(distribution))

        descriptor = load_descriptor(update_dir / self.config.update.descriptor_file)
        validate_descriptor(descriptor)
        return descriptor

    # ------------------------------------------------------------------
    # Build
    # ------------------------------------------------------------------

    def build(
        self,
        update_dir: str | Path,
        distribution: str | Path,
        output_dir: str | Path = ".",
        check_hashes: bool | None = None,
    ) -> BuildResult:
        """Run the whole pipeline. The staging directory is removed either way."""
        update_dir = Path(update_dir)
        distribution = Path(distribution)
        output_dir = Path(output_dir)

        descriptor = self.check_inputs(update_dir, distribution)
        descriptor.file_changes = FileChanges(
            removed_files=list(descriptor.file_changes.removed_files)
        )
        name = update_name(descriptor, self.config.update.name_prefix)
        logger.debug("update name: %s", name)

        inventory = scan(update_dir, self.config.resources.ignored_names())
        self.prompter.notify(f"Reading {distribution_name(distribution)}. Please wait...")
        tree = index_archive(distribution)

        context = RunContext(
            update_root=update_dir,
            update_name=name,
            product_name=distribution_name(distribution),
            staging_root=output_dir / self.config.update.staging_dir,
            carbon_home=self.config.update.carbon_home,
            check_hashes=self.config.check_hashes if check_hashes is None else check_hashes,
        )
        if context.staging_root.exists():
            raise CopyError(
                "prepare staging", "directory already exists", path=str(context.staging_root)
            )

        stager = Stager(context)
        try:
            stager.prepare()
            placements = self.place_all(context, tree, inventory, stager, descriptor.file_changes)
            stager.copy_resources(
                self.config.resources.copied_names(),
                exclude={self.config.update.descriptor_file},
            )
            stager.write_text(self.config.update.descriptor_file, dump_descriptor(descriptor))
            archive_path = build_archive(context.staging_root, name, output_dir)
        finally:
            stager.discard()

        return BuildResult(
            update_name=name,
            archive_path=archive_path,
            descriptor=descriptor,
            placements=placements,
        )

    def place_all(
        self,
        context: RunContext,
        tree: Node,
        inventory: Inventory,
        stager: Stager,
        changes: FileChanges,
    ) -> list[Placement]:
        """Resolve every top-level entry in turn: directories first, then files."""
        classifier = ChangeClassifier(tree, stager, changes, check_hashes=context.check_hashes)
        decider = PlacementDecider(tree, inventory, classifier, self.prompter)
        placements = []
        for entry in inventory.top_level():
            logger.debug("placing %s (dir=%s)", entry.relative_path, entry.is_dir)
            placements.append(decider.place(entry))
        return placements
