"""State and result types for the placement state machine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from wumuc_core.distribution.models import MatchSet
from wumuc_core.update.descriptor import ChangeRecord
from wumuc_core.update.models import InventoryEntry


class PlacementState(str, Enum):
    searching = "searching"
    no_match = "no_match"
    single_match = "single_match"
    multiple_match = "multiple_match"
    awaiting_add_confirmation = "awaiting_add_confirmation"
    awaiting_destination = "awaiting_destination"
    awaiting_confirmation = "awaiting_confirmation"
    awaiting_selection = "awaiting_selection"
    copying = "copying"
    done = "done"
    skipped = "skipped"

    @property
    def terminal(self) -> bool:
        return self in (PlacementState.done, PlacementState.skipped)


@dataclass
class Placement:
    """Working state and outcome for one top-level update entry."""

    entry: InventoryEntry
    state: PlacementState = PlacementState.searching
    matches: MatchSet = field(default_factory=dict, repr=False)
    locations: list[str] = field(default_factory=list)
    pending_destination: str = ""
    destinations: list[str] = field(default_factory=list)
    unambiguous: bool = False
    records: list[ChangeRecord] = field(default_factory=list)
    history: list[PlacementState] = field(default_factory=list)
