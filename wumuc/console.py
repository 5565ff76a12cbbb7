"""Rich-backed terminal prompter for interactive placement."""

from __future__ import annotations

import posixpath

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from wumuc_core.errors import InputError
from wumuc_core.placement.prompter import NoticeLevel

_STYLES: dict[str, str] = {
    "info": "bold",
    "warning": "yellow",
    "error": "red",
}


class ConsolePrompter:
    """Asks questions on the terminal and renders location tables."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console(highlight=False)

    def ask(self, message: str) -> str:
        try:
            return self.console.input(f"[bold]{escape(message)}[/bold]")
        except EOFError as e:
            raise InputError("read input", "input stream closed", cause=e) from e

    def show_locations(self, name: str, locations: list[str]) -> None:
        table = Table(show_lines=False)
        table.add_column("Index", justify="left")
        table.add_column("Matching Location", style="cyan")
        for index, location in enumerate(locations, start=1):
            table.add_row(str(index), escape(posixpath.join("CARBON_HOME", location, name)))
        self.console.print(table)

    def notify(self, message: str, level: NoticeLevel = "info") -> None:
        style = _STYLES.get(level)
        self.console.print(escape(message), style=style)
