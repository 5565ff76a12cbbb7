"""The update-descriptor.yaml manifest: model, loading, validation, saving."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import yaml
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from wumuc_core.errors import DescriptorError

logger = logging.getLogger(__name__)

UPDATE_NUMBER_RE = re.compile(r"^\d{4}$")
PLATFORM_VERSION_RE = re.compile(r"^\d+\.\d+\.\d+$")


class ChangeKind(str, Enum):
    added = "added"
    modified = "modified"


@dataclass(frozen=True)
class ChangeRecord:
    """Outcome of one physical copy into the staging area."""

    kind: ChangeKind
    path: str


class FileChanges(BaseModel):
    """Added/modified/removed paths, relative to the distribution root."""

    added_files: list[str] = Field(default_factory=list)
    removed_files: list[str] = Field(default_factory=list)
    modified_files: list[str] = Field(default_factory=list)

    def record(self, change: ChangeRecord) -> None:
        """Append one record. Never deduplicates."""
        if change.kind is ChangeKind.added:
            self.added_files.append(change.path)
        else:
            self.modified_files.append(change.path)


class UpdateDescriptor(BaseModel):
    """Contents of update-descriptor.yaml."""

    update_number: str = ""
    platform_version: str = ""
    platform_name: str = ""
    applies_to: str = ""
    bug_fixes: dict[str, str] = Field(default_factory=dict)
    description: str = ""
    file_changes: FileChanges = Field(default_factory=FileChanges)


def load_descriptor(path: str | Path) -> UpdateDescriptor:
    """Read and parse a descriptor file.

    Scalars are loaded as plain strings so that values such as ``0001`` keep
    their leading zeros.
    """
    path = Path(path)
    if not path.is_file():
        raise DescriptorError("load descriptor", "file not found", path=str(path))
    try:
        with open(path, encoding="utf-8") as f:
            raw = yaml.load(f, Loader=yaml.BaseLoader)
    except OSError as e:
        raise DescriptorError("load descriptor", str(e), path=str(path), cause=e) from e
    except yaml.YAMLError as e:
        raise DescriptorError("load descriptor", f"invalid YAML: {e}", path=str(path), cause=e) from e

    if raw is None or raw == "":
        raw = {}
    if not isinstance(raw, dict):
        raise DescriptorError("load descriptor", "expected a mapping at the top level", path=str(path))
    try:
        return UpdateDescriptor(**_drop_empty(raw))
    except PydanticValidationError as e:
        raise DescriptorError("load descriptor", str(e), path=str(path), cause=e) from e


def _drop_empty(raw: dict) -> dict:
    """BaseLoader yields ``""`` for blank nested sections; let defaults apply."""
    cleaned = {}
    for key, value in raw.items():
        if value == "" and key in ("bug_fixes", "file_changes"):
            continue
        if isinstance(value, dict):
            value = _drop_empty(value)
        if value == "" and key in ("added_files", "removed_files", "modified_files"):
            continue
        cleaned[key] = value
    return cleaned


def validate_descriptor(descriptor: UpdateDescriptor) -> None:
    """Check the fields that the update name is derived from."""
    if not UPDATE_NUMBER_RE.match(descriptor.update_number):
        raise DescriptorError(
            "validate descriptor",
            f"update_number {descriptor.update_number!r} must be exactly 4 digits",
        )
    if not PLATFORM_VERSION_RE.match(descriptor.platform_version):
        raise DescriptorError(
            "validate descriptor",
            f"platform_version {descriptor.platform_version!r} must look like X.Y.Z",
        )


def update_name(descriptor: UpdateDescriptor, prefix: str) -> str:
    """``WSO2-CARBON-UPDATE-4.4.0-0001`` style name for the zip and its root dir."""
    return f"{prefix}-{descriptor.platform_version}-{descriptor.update_number}"


def dump_descriptor(descriptor: UpdateDescriptor) -> str:
    return yaml.safe_dump(
        descriptor.model_dump(), default_flow_style=False, sort_keys=False
    )


def save_descriptor(descriptor: UpdateDescriptor, path: str | Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dump_descriptor(descriptor), encoding="utf-8")
    logger.debug("wrote descriptor %s", path)
    return path
