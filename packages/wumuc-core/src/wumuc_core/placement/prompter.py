"""Interactive collaborator interface used when placement is ambiguous."""

from __future__ import annotations

from typing import Literal, Protocol, runtime_checkable

NoticeLevel = Literal["info", "warning", "error"]


@runtime_checkable
class Prompter(Protocol):
    """Line-oriented prompt/response boundary.

    ``ask`` returns the raw response line. Implementations raise
    ``wumuc_core.errors.InputError`` when the input stream is closed.
    """

    def ask(self, message: str) -> str: ...

    def show_locations(self, name: str, locations: list[str]) -> None: ...

    def notify(self, message: str, level: NoticeLevel = "info") -> None: ...
