"""Typer-based CLI entry point."""

from __future__ import annotations

import functools
from pathlib import Path
from typing import Optional

import typer
from rich import print
from rich.markup import escape
from rich.table import Table

from .core.path_resolver import normalize_path
from .errors import PinnedFolderError, RepositoryError
from .events.bus import EventBus
from .gui.viewmodels.folder_list_controller import FolderListController
from .infrastructure.repositories import FileSystemAssetRepository
from .utils.logging import configure_logging

app = typer.Typer(help="Single-folder file browser panel")


def _handle_errors(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except RepositoryError as exc:
            typer.echo(f"Error: {exc}", err=True)
            raise typer.Exit(1) from exc
        except PinnedFolderError as exc:
            typer.echo(f"Unexpected error: {exc}", err=True)
            raise typer.Exit(1) from exc

    return wrapper


@app.callback()
def _configure(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging")) -> None:
    configure_logging("DEBUG" if verbose else "WARNING")


@app.command("list")
@_handle_errors
def list_folder(
    path: Path = typer.Argument(..., help="Folder to list, or a file inside it"),
    show_hidden: bool = typer.Option(False, "--show-hidden", help="Include dot files"),
) -> None:
    """Print the folder-first listing of a folder."""

    bus = EventBus()
    repository = FileSystemAssetRepository(bus, include_hidden=show_hidden)
    with FolderListController(repository, bus) as controller:
        controller.set_folder(str(path.expanduser().absolute()))
        folder = controller.current_folder
        snapshot = controller.snapshot
        selected = controller.selected_entry
    if folder is None:
        typer.echo(f"Error: {path} is not a folder or inside one", err=True)
        raise typer.Exit(1)

    table = Table(title=escape(folder), show_header=True, header_style="bold")
    table.add_column("", width=1)
    table.add_column("Name")
    table.add_column("Kind")
    for entry in snapshot:
        if entry.is_folder:
            kind = "empty folder" if entry.is_empty_folder else "folder"
            name = f"[bold]{escape(entry.display_name)}/[/bold]"
        else:
            kind = "file"
            name = escape(entry.display_name)
        marker = "*" if selected is not None and entry.id == selected.id else ""
        table.add_row(marker, name, kind)
    print(table)
    print(f"[green]{len(snapshot)} entries, {snapshot.folder_count} folders")


@app.command()
def gui(path: Optional[Path] = typer.Argument(None, help="Folder or file to open")) -> None:
    """Launch the panel window."""

    from .gui.main import main as gui_main

    folder = normalize_path(str(path.expanduser().absolute())) if path is not None else None
    raise typer.Exit(gui_main(["pinnedfolder"], folder=folder))


if __name__ == "__main__":
    app()
