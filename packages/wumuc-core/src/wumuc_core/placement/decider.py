"""Per-entry placement state machine.

Each top-level update entry starts in ``searching`` and ends in ``done`` or
``skipped``. Transitions::

    searching ──> no_match ──> awaiting_add_confirmation ──(no)──> skipped
                                   │(yes)
                                   v
                  ┌────────> awaiting_destination ──(exists / empty)──> copying
                  │(re-enter)      │(unknown path)
                  │                v
                  └──────── awaiting_confirmation ──(yes)──> copying
                                   │(no)
                                   v
                                skipped

    searching ──> single_match ──> copying ──> done

    searching ──> multiple_match ──> awaiting_selection ──(indices)──> copying
                                           │(0)
                                           v
                                        skipped

Malformed answers keep the machine in its current awaiting state.
"""

from __future__ import annotations

import logging
import posixpath
from collections.abc import Callable

from wumuc_core.distribution.models import Node
from wumuc_core.distribution.resolver import find_matches, path_exists
from wumuc_core.errors import ValidationError
from wumuc_core.output.classifier import ChangeClassifier
from wumuc_core.placement.models import Placement, PlacementState
from wumuc_core.placement.prompter import Prompter
from wumuc_core.placement.selection import Choice, parse_choice, parse_selection
from wumuc_core.update.models import Inventory, InventoryEntry

logger = logging.getLogger(__name__)

ADD_PROMPT = "Do you want to add it as a new file? [y/N]: "
DESTINATION_PROMPT = "Enter destination directory relative to CARBON_HOME: "
CONFIRM_PROMPT = "Copy anyway? [y/n/R]: "
SELECTION_PROMPT = (
    "Enter preference(s)[Multiple selections separated by commas, 0 to skip copying]: "
)

_YES_NO = frozenset({Choice.yes, Choice.no})

State = PlacementState


def _normalize_destination(raw: str) -> str:
    return raw.strip().replace("\\", "/").strip("/")


def _leaves_root(destination: str) -> bool:
    return ".." in destination.split("/")


class PlacementDecider:
    """Decides where each top-level entry goes and hands copies to the classifier."""

    def __init__(
        self,
        tree: Node,
        inventory: Inventory,
        classifier: ChangeClassifier,
        prompter: Prompter,
    ) -> None:
        self.tree = tree
        self.inventory = inventory
        self.classifier = classifier
        self.prompter = prompter
        self._handlers: dict[PlacementState, Callable[[Placement], PlacementState]] = {
            State.searching: self._search,
            State.no_match: self._no_match,
            State.single_match: self._single_match,
            State.multiple_match: self._multiple_match,
            State.awaiting_add_confirmation: self._await_add_confirmation,
            State.awaiting_destination: self._await_destination,
            State.awaiting_confirmation: self._await_confirmation,
            State.awaiting_selection: self._await_selection,
            State.copying: self._copy,
        }

    def place(self, entry: InventoryEntry) -> Placement:
        """Drive *entry* from ``searching`` to a terminal state."""
        placement = Placement(entry=entry)
        state = State.searching
        while not state.terminal:
            placement.history.append(state)
            state = self._handlers[state](placement)
            logger.debug("[%s] -> %s", entry.relative_path, state.value)
        placement.history.append(state)
        placement.state = state
        return placement

    # ------------------------------------------------------------------
    # Match resolution
    # ------------------------------------------------------------------

    def _search(self, p: Placement) -> PlacementState:
        p.matches = find_matches(self.tree, p.entry.name, p.entry.is_dir)
        if not p.matches:
            return State.no_match
        if len(p.matches) == 1:
            return State.single_match
        return State.multiple_match

    # ------------------------------------------------------------------
    # Zero matches
    # ------------------------------------------------------------------

    def _no_match(self, p: Placement) -> PlacementState:
        self.prompter.notify(f"'{p.entry.name}' not found in distribution.")
        return State.awaiting_add_confirmation

    def _await_add_confirmation(self, p: Placement) -> PlacementState:
        choice = parse_choice(self.prompter.ask(ADD_PROMPT), Choice.no, _YES_NO)
        if choice is None:
            self.prompter.notify("Invalid preference. Enter Y for Yes or N for No.", "error")
            return State.awaiting_add_confirmation
        if choice is Choice.no:
            self.prompter.notify(f"Skipping copying: {p.entry.name}", "warning")
            return State.skipped
        return State.awaiting_destination

    def _await_destination(self, p: Placement) -> PlacementState:
        destination = _normalize_destination(self.prompter.ask(DESTINATION_PROMPT))
        if _leaves_root(destination):
            self.prompter.notify("Destination must stay inside CARBON_HOME.", "error")
            return State.awaiting_destination
        p.pending_destination = destination
        if self._destination_known(destination, p.entry):
            p.destinations = [destination]
            return State.copying
        if destination:
            self.prompter.notify("Entered relative path does not exist in the distribution.")
            return State.awaiting_confirmation
        # Empty answer: the distribution root itself
        p.destinations = [""]
        return State.copying

    def _await_confirmation(self, p: Placement) -> PlacementState:
        choice = parse_choice(self.prompter.ask(CONFIRM_PROMPT), Choice.reenter)
        if choice is None:
            self.prompter.notify(
                "Invalid preference. Enter Y for Yes or N for No or R for Re-enter.", "error"
            )
            return State.awaiting_confirmation
        if choice is Choice.yes:
            p.destinations = [p.pending_destination]
            return State.copying
        if choice is Choice.no:
            self.prompter.notify(f"Skipping copying: {p.entry.name}", "warning")
            return State.skipped
        return State.awaiting_destination

    def _destination_known(self, destination: str, entry: InventoryEntry) -> bool:
        """Whether *destination* already exists in the baseline for this entry.

        True if ``destination/<name>`` exists with the entry's kind, or, for a
        file entry, if *destination* itself is a baseline directory.
        """
        if path_exists(self.tree, posixpath.join(destination, entry.name), entry.is_dir):
            return True
        return bool(destination) and not entry.is_dir and path_exists(
            self.tree, destination, is_dir=True
        )

    # ------------------------------------------------------------------
    # One match
    # ------------------------------------------------------------------

    def _single_match(self, p: Placement) -> PlacementState:
        (location,) = p.matches
        p.destinations = [location]
        p.unambiguous = True
        return State.copying

    # ------------------------------------------------------------------
    # Several matches
    # ------------------------------------------------------------------

    def _multiple_match(self, p: Placement) -> PlacementState:
        p.locations = sorted(p.matches)
        self.prompter.notify(f"Multiple matches found for '{p.entry.name}' in the distribution.")
        self.prompter.show_locations(p.entry.name, p.locations)
        return State.awaiting_selection

    def _await_selection(self, p: Placement) -> PlacementState:
        raw = self.prompter.ask(SELECTION_PROMPT)
        try:
            indices = parse_selection(raw, len(p.locations))
        except ValidationError as e:
            logger.debug("rejected selection: %s", e)
            self.prompter.notify(
                f"Invalid preferences. Please select indices where 0 <= index <= {len(p.locations)}",
                "error",
            )
            return State.awaiting_selection
        if not indices:
            self.prompter.notify(f"0 entered. Skipping copying '{p.entry.name}'.", "warning")
            return State.skipped
        p.destinations = [p.locations[i - 1] for i in indices]
        return State.copying

    # ------------------------------------------------------------------
    # Copy
    # ------------------------------------------------------------------

    def _copy(self, p: Placement) -> PlacementState:
        files = self._files_for(p.entry)
        for destination in p.destinations:
            for item in files:
                dest_rel = posixpath.join(destination, item.relative_path)
                record = self.classifier.place(item, dest_rel, unambiguous=p.unambiguous)
                if record is not None:
                    p.records.append(record)
        return State.done

    def _files_for(self, entry: InventoryEntry) -> list[InventoryEntry]:
        if entry.is_dir:
            return self.inventory.files_under(entry.relative_path)
        return [entry]
