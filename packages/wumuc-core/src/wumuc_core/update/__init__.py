"""Update source scanning and the update descriptor."""

from wumuc_core.update.descriptor import (
    ChangeKind,
    ChangeRecord,
    FileChanges,
    UpdateDescriptor,
    dump_descriptor,
    load_descriptor,
    save_descriptor,
    update_name,
    validate_descriptor,
)
from wumuc_core.update.models import Inventory, InventoryEntry
from wumuc_core.update.scanner import scan

__all__ = [
    "ChangeKind",
    "ChangeRecord",
    "FileChanges",
    "Inventory",
    "InventoryEntry",
    "UpdateDescriptor",
    "dump_descriptor",
    "load_descriptor",
    "save_descriptor",
    "scan",
    "update_name",
    "validate_descriptor",
]
