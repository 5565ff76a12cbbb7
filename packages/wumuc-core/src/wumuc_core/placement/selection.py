"""Parsing of yes/no/re-enter answers and location index selections."""

from __future__ import annotations

from enum import Enum

from wumuc_core.errors import ValidationError


class Choice(str, Enum):
    yes = "yes"
    no = "no"
    reenter = "reenter"


_CHOICE_WORDS = {
    "y": Choice.yes,
    "yes": Choice.yes,
    "n": Choice.no,
    "no": Choice.no,
    "r": Choice.reenter,
    "re-enter": Choice.reenter,
    "reenter": Choice.reenter,
}


def parse_choice(
    raw: str, default: Choice, allowed: frozenset[Choice] = frozenset(Choice)
) -> Choice | None:
    """Map a trimmed, case-folded answer to a Choice.

    An empty answer yields *default*. Unrecognised or disallowed answers
    yield ``None`` so the caller can ask again.
    """
    answer = raw.strip().casefold()
    if not answer:
        return default
    choice = _CHOICE_WORDS.get(answer)
    if choice is None or choice not in allowed:
        return None
    return choice


def parse_selection(raw: str, count: int) -> tuple[int, ...]:
    """Parse a comma-separated list of 1-based indices into ``[1, count]``.

    Returns an empty tuple when the list contains ``0`` anywhere, meaning
    "skip this entry". Duplicates are collapsed, first occurrence wins.
    Raises ValidationError for empty, non-numeric, or out-of-range input.
    """
    tokens = [t.strip() for t in raw.strip().split(",")]
    if any(t.isdecimal() and int(t) == 0 for t in tokens):
        return ()

    selected: list[int] = []
    for token in tokens:
        if not token:
            raise ValidationError(raw, "empty index")
        try:
            index = int(token)
        except ValueError:
            raise ValidationError(raw, f"{token!r} is not a number") from None
        if not 1 <= index <= count:
            raise ValidationError(raw, f"{index} is not between 1 and {count}")
        if index not in selected:
            selected.append(index)
    return tuple(selected)
