"""Staging area, change classification and the final update archive."""

from wumuc_core.output.archive import build_archive
from wumuc_core.output.classifier import ChangeClassifier
from wumuc_core.output.staging import Stager

__all__ = [
    "ChangeClassifier",
    "Stager",
    "build_archive",
]
