"""Shared test fixtures for wumuc."""

from __future__ import annotations

import zipfile
from pathlib import Path

import pytest

from wumuc_core.config.models import WumucConfig
from wumuc_core.context import RunContext
from wumuc_core.distribution import build_tree
from wumuc_core.errors import InputError
from wumuc_core.output.classifier import ChangeClassifier
from wumuc_core.output.staging import Stager
from wumuc_core.placement.decider import PlacementDecider
from wumuc_core.update.descriptor import FileChanges
from wumuc_core.update.scanner import scan

DIST_NAME = "wso2am-2.0.0"

# Baseline layout used across tests. ``None`` marks an explicit directory entry.
BASELINE_MEMBERS: dict[str, bytes | None] = {
    "bin/": None,
    "bin/wso2server.sh": b"#!/bin/sh\necho start\n",
    "repository/": None,
    "repository/conf/": None,
    "repository/conf/carbon.xml": b"<carbon/>",
    "repository/conf/a/logging-config.xml": b"<logging a/>",
    "repository/conf/b/logging-config.xml": b"<logging b/>",
    "repository/components/plugins/org.foo_1.0.0.jar": b"jar-v1",
}

DESCRIPTOR = """\
update_number: "0001"
platform_version: 4.4.0
platform_name: wilkes
applies_to: All the products based on carbon 4.4.0
bug_fixes:
  CARBON-15395: Upgrade Hazelcast version
description: |
  Fixes the clustering issue.
file_changes:
  added_files: []
  removed_files: []
  modified_files: []
"""


class ScriptedPrompter:
    """Prompter double that replays canned answers and records everything asked."""

    def __init__(self, answers=()) -> None:
        self.answers = list(answers)
        self.questions: list[str] = []
        self.notices: list[tuple[str, str]] = []
        self.tables: list[tuple[str, list[str]]] = []

    def ask(self, message: str) -> str:
        self.questions.append(message)
        if not self.answers:
            raise InputError("read input", "input stream closed")
        return self.answers.pop(0)

    def show_locations(self, name: str, locations: list[str]) -> None:
        self.tables.append((name, list(locations)))

    def notify(self, message: str, level: str = "info") -> None:
        self.notices.append((level, message))


def write_distribution(
    path: Path, members: dict[str, bytes | None], dist_name: str = DIST_NAME
) -> Path:
    """Write a distribution zip with every member rooted under *dist_name*/."""
    with zipfile.ZipFile(path, "w") as zf:
        zf.writestr(f"{dist_name}/", b"")
        for name, data in members.items():
            if data is None:
                zf.writestr(f"{dist_name}/{name.rstrip('/')}/", b"")
            else:
                zf.writestr(f"{dist_name}/{name}", data)
    return path


def write_tree(root: Path, files: dict[str, bytes]) -> Path:
    for rel, data in files.items():
        target = root / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)
    return root


@pytest.fixture
def make_prompter():
    return ScriptedPrompter


@pytest.fixture
def sample_config():
    return WumucConfig()


@pytest.fixture
def distribution_zip(tmp_path):
    return write_distribution(tmp_path / f"{DIST_NAME}.zip", BASELINE_MEMBERS)


@pytest.fixture
def baseline_tree():
    return build_tree(
        (f"{DIST_NAME}/{name}", data is None, data)
        for name, data in BASELINE_MEMBERS.items()
    )


@pytest.fixture
def make_update_dir(tmp_path):
    """Factory: an update directory with a descriptor, a license, and *files*."""

    def _make(files: dict[str, bytes], name: str = "update") -> Path:
        root = tmp_path / name
        root.mkdir()
        (root / "update-descriptor.yaml").write_text(DESCRIPTOR)
        (root / "LICENSE.txt").write_text("Apache License 2.0")
        return write_tree(root, files)

    return _make


@pytest.fixture
def placement_env(tmp_path, baseline_tree, sample_config):
    """Factory wiring scanner, stager, classifier and decider around an update dir."""

    def _make(update_root: Path, answers=(), check_hashes: bool = True):
        inventory = scan(update_root, sample_config.resources.ignored_names())
        context = RunContext(
            update_root=update_root,
            update_name="WSO2-CARBON-UPDATE-4.4.0-0001",
            product_name=DIST_NAME,
            staging_root=tmp_path / "staging",
            check_hashes=check_hashes,
        )
        stager = Stager(context)
        changes = FileChanges()
        classifier = ChangeClassifier(
            baseline_tree, stager, changes, check_hashes=check_hashes
        )
        prompter = ScriptedPrompter(answers)
        decider = PlacementDecider(baseline_tree, inventory, classifier, prompter)
        return decider, inventory, changes, prompter, context

    return _make
