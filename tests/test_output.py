"""Tests for staging, change classification and archive writing."""

from __future__ import annotations

import zipfile
from pathlib import Path

import pytest

from conftest import write_tree
from wumuc_core.context import RunContext
from wumuc_core.errors import CopyError
from wumuc_core.hashing import compute_hash
from wumuc_core.output.archive import build_archive
from wumuc_core.output.classifier import ChangeClassifier
from wumuc_core.output.staging import Stager
from wumuc_core.update.descriptor import ChangeKind, FileChanges
from wumuc_core.update.models import InventoryEntry

UPDATE_NAME = "WSO2-CARBON-UPDATE-4.4.0-0001"


@pytest.fixture
def context(tmp_path: Path) -> RunContext:
    root = write_tree(
        tmp_path / "update",
        {
            "carbon.xml": b"<carbon v2/>",
            "same.xml": b"<carbon/>",
            "foo.jar": b"foo",
            "LICENSE.txt": b"license",
            "README.txt": b"readme",
        },
    )
    return RunContext(
        update_root=root,
        update_name=UPDATE_NAME,
        product_name="wso2am-2.0.0",
        staging_root=tmp_path / "staging",
    )


@pytest.fixture
def stager(context) -> Stager:
    s = Stager(context)
    s.prepare()
    return s


def _file(rel: str, data: bytes) -> InventoryEntry:
    return InventoryEntry(relative_path=rel, is_dir=False, hash=compute_hash(data))


# ── RunContext ───────────────────────────────────────────────────────


def test_context_layout(context, tmp_path):
    assert context.update_dir == tmp_path / "staging" / UPDATE_NAME
    assert context.content_dir == tmp_path / "staging" / UPDATE_NAME / "carbon.home"


def test_context_is_frozen(context):
    with pytest.raises(AttributeError):
        context.update_name = "other"


# ── Stager ───────────────────────────────────────────────────────────


def test_copy_creates_parents(stager, context):
    dest = stager.copy("foo.jar", "lib/deep/foo.jar")
    assert dest == context.content_dir / "lib/deep/foo.jar"
    assert dest.read_bytes() == b"foo"


def test_copy_missing_source_raises(stager):
    with pytest.raises(CopyError) as exc_info:
        stager.copy("absent.jar", "lib/absent.jar")
    assert exc_info.value.path == "lib/absent.jar"
    assert isinstance(exc_info.value.__cause__, OSError)


def test_copy_resources(stager, context):
    copied = stager.copy_resources({"LICENSE.txt": True, "README.txt": False, "instructions.txt": False})
    assert copied == ["LICENSE.txt", "README.txt"]
    assert (context.update_dir / "LICENSE.txt").read_bytes() == b"license"
    assert not (context.update_dir / "instructions.txt").exists()


def test_copy_resources_missing_mandatory(stager):
    with pytest.raises(CopyError, match="mandatory"):
        stager.copy_resources({"NOTICE.txt": True})


def test_copy_resources_exclude(stager, context):
    stager.copy_resources({"LICENSE.txt": True, "README.txt": False}, exclude={"README.txt"})
    assert not (context.update_dir / "README.txt").exists()


def test_discard_removes_staging_root(stager, context):
    stager.copy("foo.jar", "foo.jar")
    stager.discard()
    assert not context.staging_root.exists()


# ── ChangeClassifier ─────────────────────────────────────────────────


def test_classify_modified(baseline_tree, stager):
    changes = FileChanges()
    record = ChangeClassifier(baseline_tree, stager, changes).place(
        _file("carbon.xml", b"<carbon v2/>"), "repository/conf/carbon.xml"
    )
    assert record.kind is ChangeKind.modified
    assert changes.modified_files == ["repository/conf/carbon.xml"]


def test_classify_added(baseline_tree, stager):
    changes = FileChanges()
    record = ChangeClassifier(baseline_tree, stager, changes).place(
        _file("foo.jar", b"foo"), "repository/components/plugins/foo.jar"
    )
    assert record.kind is ChangeKind.added
    assert changes.added_files == ["repository/components/plugins/foo.jar"]


def test_classify_added_when_destination_is_a_directory(baseline_tree, stager):
    changes = FileChanges()
    ChangeClassifier(baseline_tree, stager, changes).place(
        _file("foo.jar", b"foo"), "repository/conf/foo.jar"
    )
    assert changes.added_files == ["repository/conf/foo.jar"]


def test_unambiguous_identical_file_skipped(baseline_tree, stager, context):
    changes = FileChanges()
    classifier = ChangeClassifier(baseline_tree, stager, changes)
    entry = _file("same.xml", b"<carbon/>")
    assert classifier.place(entry, "repository/conf/carbon.xml", unambiguous=True) is None
    assert classifier.place(entry, "repository/conf/carbon.xml", unambiguous=True) is None
    assert changes == FileChanges()
    assert not (context.content_dir / "repository/conf/carbon.xml").exists()


def test_ambiguous_identical_file_copied(baseline_tree, stager):
    changes = FileChanges()
    ChangeClassifier(baseline_tree, stager, changes).place(
        _file("same.xml", b"<carbon/>"), "repository/conf/carbon.xml"
    )
    assert changes.modified_files == ["repository/conf/carbon.xml"]


def test_hash_check_disabled(baseline_tree, stager):
    changes = FileChanges()
    ChangeClassifier(baseline_tree, stager, changes, check_hashes=False).place(
        _file("same.xml", b"<carbon/>"), "repository/conf/carbon.xml", unambiguous=True
    )
    assert changes.modified_files == ["repository/conf/carbon.xml"]


def test_directories_rejected(baseline_tree, stager):
    classifier = ChangeClassifier(baseline_tree, stager, FileChanges())
    with pytest.raises(ValueError):
        classifier.place(InventoryEntry("conf", is_dir=True), "repository/conf")


# ── Archive ──────────────────────────────────────────────────────────


def test_build_archive(stager, context, tmp_path):
    stager.copy("foo.jar", "lib/foo.jar")
    stager.write_text("update-descriptor.yaml", "update_number: '0001'\n")
    out = tmp_path / "dist"
    zip_path = build_archive(context.staging_root, UPDATE_NAME, out)
    assert zip_path == out / f"{UPDATE_NAME}.zip"
    with zipfile.ZipFile(zip_path) as zf:
        names = zf.namelist()
        assert all(n.startswith(f"{UPDATE_NAME}/") for n in names)
        assert f"{UPDATE_NAME}/carbon.home/lib/foo.jar" in names
        assert zf.read(f"{UPDATE_NAME}/update-descriptor.yaml") == b"update_number: '0001'\n"


def test_copy_refuses_paths_outside_staging(stager, context, tmp_path):
    with pytest.raises(CopyError, match="outside the staging area"):
        stager.copy("foo.jar", "../../../escaped/foo.jar")
    assert not (tmp_path / "escaped").exists()
