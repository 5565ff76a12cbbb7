"""Placement of update entries into the distribution layout."""

from wumuc_core.placement.decider import PlacementDecider
from wumuc_core.placement.models import Placement, PlacementState
from wumuc_core.placement.prompter import Prompter
from wumuc_core.placement.selection import Choice, parse_choice, parse_selection

__all__ = [
    "Choice",
    "Placement",
    "PlacementDecider",
    "PlacementState",
    "Prompter",
    "parse_choice",
    "parse_selection",
]
