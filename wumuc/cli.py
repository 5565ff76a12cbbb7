"""CLI entry point for wumuc."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
import yaml
from rich import print as rprint
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from wumuc.console import ConsolePrompter
from wumuc_core.builder import BuildResult, UpdateBuilder
from wumuc_core.config import WumucConfig, load_config
from wumuc_core.config.loader import DEFAULT_CONFIG_TEMPLATE
from wumuc_core.errors import UpdateError
from wumuc_core.logs import configure_logging
from wumuc_core.update.descriptor import UpdateDescriptor, save_descriptor

app = typer.Typer(
    name="wumuc",
    help="Create update packages against a released product distribution.",
)

config_app = typer.Typer(help="Manage wumuc configuration.")
app.add_typer(config_app, name="config")

# Global state
_config: WumucConfig | None = None


def _get_config() -> WumucConfig:
    if _config is None:
        return load_config()
    return _config


def _fail(message: str) -> typer.Exit:
    rprint(f"[red]Error:[/red] {escape(message)}")
    return typer.Exit(1)


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to wumuc.yaml")
    ] = None,
) -> None:
    """Global options."""
    global _config
    try:
        _config = load_config(config)
    except ValueError as e:
        raise _fail(str(e))
    configure_logging(_config.log_level, _config.log_format)


def _display_summary(result: BuildResult) -> None:
    """Show the added/modified files recorded in the descriptor."""
    table = Table(title=f"File Changes ({len(result.added) + len(result.modified)})")
    table.add_column("Change", justify="center")
    table.add_column("Path", style="cyan")
    for path in result.added:
        table.add_row("[green]added[/green]", escape(path))
    for path in result.modified:
        table.add_row("[yellow]modified[/yellow]", escape(path))
    rprint(table)


@app.command()
def create(
    update_dir: str = typer.Argument(..., help="Directory holding the updated files"),
    distribution: str = typer.Argument(..., help="Product distribution zip file"),
    no_md5: Annotated[
        bool, typer.Option("--no-md5", "-m", help="Disable checking MD5 sum")
    ] = False,
    output: Annotated[
        str, typer.Option("--output", "-o", help="Directory to write the update zip to")
    ] = ".",
    debug: Annotated[bool, typer.Option("--debug", "-d", help="Enable debug logs")] = False,
    trace: Annotated[bool, typer.Option("--trace", "-t", help="Enable trace logs")] = False,
) -> None:
    """Create a new update zip from the files in UPDATE_DIR.

    The product distribution zip is used to work out where each file belongs.
    """
    cfg = _get_config()
    if trace:
        configure_logging("trace", cfg.log_format)
    elif debug:
        configure_logging("debug", cfg.log_format)

    builder = UpdateBuilder(cfg, ConsolePrompter())
    try:
        result = builder.build(
            update_dir,
            distribution,
            output_dir=output,
            check_hashes=False if no_md5 else None,
        )
    except UpdateError as e:
        raise _fail(str(e))

    _display_summary(result)
    rprint(
        Panel(
            f"[dim]Archive:[/dim]   {escape(str(result.archive_path))}\n"
            f"[dim]Added:[/dim]     {len(result.added)}\n"
            f"[dim]Modified:[/dim]  {len(result.modified)}",
            title="Update Created",
            border_style="green",
        )
    )


@app.command()
def init(
    directory: str = typer.Argument(".", help="Update directory to initialise"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing descriptor"),
) -> None:
    """Create an empty update descriptor in DIRECTORY."""
    cfg = _get_config()
    target = Path(directory) / cfg.update.descriptor_file
    if target.exists() and not force:
        rprint(f"[yellow]{escape(str(target))} already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    try:
        save_descriptor(UpdateDescriptor(), target)
    except OSError as e:
        raise _fail(f"could not write {target}: {e}")
    rprint(f"[green]Created[/green] {escape(str(target))}")


@config_app.command("show")
def config_show() -> None:
    """Show current resolved configuration."""
    cfg = _get_config()
    rprint(Syntax(yaml.dump(cfg.model_dump(), default_flow_style=False), "yaml"))


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
) -> None:
    """Create default wumuc.yaml in current directory."""
    target = Path("wumuc.yaml")
    if target.exists() and not force:
        rprint("[yellow]wumuc.yaml already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    try:
        target.write_text(DEFAULT_CONFIG_TEMPLATE)
    except OSError as e:
        raise _fail(f"could not write {target}: {e}")
    rprint(f"[green]Created[/green] {target}")


if __name__ == "__main__":
    app()
