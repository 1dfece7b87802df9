"""Typer-based CLI entry point."""

from __future__ import annotations

import functools
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import typer
from rich import print
from rich.console import Console
from rich.table import Table
from rich.tree import Tree

from .application.commands import (
    CommandResult,
    CommandStatus,
    CreateFolder,
    DeleteFolder,
    MoveItemsByFolderName,
    PurgeOrphanedMetadata,
    SetFolderColor,
    SetPresetImage,
    ToggleFavorite,
)
from .application.dispatcher import MutationDispatcher
from .application.interfaces import DialogService
from .application.write_back import apply_preset
from .config import DEFAULT_FILTER_MODE, DEFAULT_SORT_MODE, ROOT_FOLDER_ID, ROOT_FOLDER_NAME
from .domain.models import Folder
from .errors import FolderNotFoundError, PresetNavError, PresetNotFoundError
from .events.bus import EventBus
from .gui.viewmodels.view_controller import ViewController
from .infrastructure.directory_host import DirectoryPresetHost
from .io.image_attachment import read_image_as_data_url
from .io.preset_import import PresetImporter
from .library.asset_index import AssetIndex
from .library.favorites import FavoritesRegistry
from .library.metadata_store import MetadataStore
from .storage.kv_store import JsonFileKeyValueStore
from .utils.logging import configure_logging

# Hidden, so the directory host never lists it as a preset.
DEFAULT_STORAGE_NAME = ".presetnav.json"

app = typer.Typer(help="Organize a directory of presets into folders, favorites and images")
err_console = Console(stderr=True)


class ConsoleDialogService(DialogService):
    """Terminal stand-ins for the navigator's modal dialogs."""

    def __init__(self, assume_yes: bool = False) -> None:
        self._assume_yes = assume_yes

    def confirm(self, message: str) -> bool:
        if self._assume_yes:
            return True
        return typer.confirm(message, default=False)

    def prompt(self, message: str, default: str = "") -> Optional[str]:
        answer = typer.prompt(message, default=default, show_default=bool(default))
        return answer or None

    def alert(self, message: str, level: str = "info") -> None:
        if level == "error":
            err_console.print(f"Error: {message}", style="red", markup=False, highlight=False)
        elif level == "success":
            print(f"[green]{message}")
        else:
            print(message)

    def pick_color(self, current: Optional[str], title: str) -> Optional[str]:
        return self.prompt(title, current or "")

    def display(self, title: str, content: str) -> None:
        print(f"[bold]{title}")
        print(content)


@dataclass
class Session:
    api_type: str
    host: DirectoryPresetHost
    store: MetadataStore
    favorites: FavoritesRegistry
    index: AssetIndex
    dialogs: ConsoleDialogService
    events: EventBus
    dispatcher: MutationDispatcher

    def folder_by_name(self, name: str) -> Folder:
        """Resolve a folder name case-insensitively; the first match wins."""

        wanted = name.casefold()
        for folder in self.store.state.folders.values():
            if folder.name.casefold() == wanted:
                return folder
        raise FolderNotFoundError(f'Folder "{name}" not found.')

    def folder_id(self, name: Optional[str]) -> str:
        if not name or name in (ROOT_FOLDER_ID, ROOT_FOLDER_NAME):
            return ROOT_FOLDER_ID
        return self.folder_by_name(name).id


def open_session(presets: Path, storage: Optional[Path], api_type: str, assume_yes: bool = False) -> Session:
    host = DirectoryPresetHost(presets)
    kv = JsonFileKeyValueStore(storage or presets / DEFAULT_STORAGE_NAME)
    store = MetadataStore(kv)
    store.load()
    favorites = FavoritesRegistry(kv)
    index = AssetIndex(host, api_type, store)
    index.refresh()
    index.stamp_missing_metadata()
    dialogs = ConsoleDialogService(assume_yes)
    events = EventBus()
    dispatcher = MutationDispatcher(
        api_type=api_type,
        store=store,
        favorites=favorites,
        index=index,
        dialogs=dialogs,
        event_bus=events,
    )
    return Session(api_type, host, store, favorites, index, dialogs, events, dispatcher)


def _handle_errors(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except PresetNavError as exc:
            typer.echo(f"Error: {exc}", err=True)
            raise typer.Exit(1) from exc

    return wrapper


def _finish(result: CommandResult, success: str) -> None:
    if result.applied:
        print(f"[green]{success}")
        return
    if result.status is CommandStatus.CANCELLED:
        print("Cancelled.")
        return
    # The dispatcher has already reported the reason.
    raise typer.Exit(1)


def _session(ctx: typer.Context, assume_yes: bool = False) -> Session:
    opts = ctx.obj
    return open_session(opts["presets"], opts["storage"], opts["api"], assume_yes)


@app.callback()
def main(
    ctx: typer.Context,
    presets: Path = typer.Option(Path.cwd(), "--presets", "-p", help="Directory holding preset .json files"),
    storage: Optional[Path] = typer.Option(None, "--storage", help="Navigator storage file"),
    api: str = typer.Option("openai", "--api", help="API type the presets belong to"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Logging level"),
) -> None:
    configure_logging(log_level)
    ctx.obj = {"presets": presets, "storage": storage, "api": api}


@app.command("ls")
@_handle_errors
def list_folder(
    ctx: typer.Context,
    folder: Optional[str] = typer.Argument(None, help="Folder name; the top level when omitted"),
    sort: str = typer.Option(DEFAULT_SORT_MODE, "--sort"),
    filter_mode: str = typer.Option(DEFAULT_FILTER_MODE, "--filter"),
    search: str = typer.Option("", "--search"),
) -> None:
    """List the folders and presets inside FOLDER."""

    session = _session(ctx)
    try:
        view = ViewController(session.favorites.list, sort_mode=sort, filter_mode=filter_mode)
    except ValueError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1) from exc
    view.set_search(search)
    items = view.apply(session.index.list_children(session.folder_id(folder)))
    if not items:
        print(f'No results for "{search.strip()}"' if search.strip() else "This folder is empty.")
        return

    favorites = set(session.favorites.list())
    table = Table(show_header=True, header_style="bold")
    table.add_column("")
    table.add_column("Name")
    table.add_column("Modified")
    table.add_column("Image")
    for item in items:
        if item.is_folder:
            marker = "[blue]dir"
        else:
            marker = "[yellow]★" if item.name in favorites else ""
        table.add_row(marker, item.display_name, item.last_modified or "-", "yes" if item.image_url else "")
    print(table)


@app.command()
@_handle_errors
def tree(ctx: typer.Context) -> None:
    """Print the whole folder tree with the presets filed in it."""

    session = _session(ctx)
    view = ViewController(session.favorites.list)
    root = Tree(f"[bold]{ROOT_FOLDER_NAME}")

    def _walk(node: Tree, folder_id: str, seen: set[str]) -> None:
        for item in view.apply(session.index.list_children(folder_id)):
            if item.is_folder:
                if item.id in seen:
                    continue
                child = node.add(f"[blue]{item.name}/")
                _walk(child, item.id, seen | {item.id})
            else:
                node.add(item.display_name)

    _walk(root, ROOT_FOLDER_ID, set())
    print(root)


@app.command()
@_handle_errors
def mkdir(
    ctx: typer.Context,
    name: str,
    parent: Optional[str] = typer.Option(None, "--parent", help="Parent folder name"),
) -> None:
    """Create a folder."""

    session = _session(ctx)
    result = session.dispatcher.dispatch(CreateFolder(name=name, parent_id=session.folder_id(parent)))
    _finish(result, f"Created folder {name}")


@app.command()
@_handle_errors
def mv(
    ctx: typer.Context,
    items: List[str] = typer.Argument(..., help="Preset or folder names"),
    to: str = typer.Option(..., "--to", help="Target folder name"),
    folders: bool = typer.Option(False, "--folders", help="Treat ITEMS as folder names only"),
) -> None:
    """Move presets or folders into the folder named TO.

    A name that is exactly a preset's moves the preset; otherwise it is looked
    up as a folder.  Pass --folders to move a folder that shares its name with
    a preset.
    """

    session = _session(ctx)
    identities = []
    for name in items:
        if folders:
            identities.append(session.folder_by_name(name).id)
            continue
        if session.index.contains(name):
            identities.append(name)
            continue
        try:
            identities.append(session.folder_by_name(name).id)
        except FolderNotFoundError:
            identities.append(name)
    result = session.dispatcher.dispatch(MoveItemsByFolderName(identities, typed_name=to))
    skipped = len(identities) - len(result.affected)
    suffix = f" ({skipped} skipped)" if result.applied and skipped else ""
    _finish(result, f"Moved {len(result.affected)} item(s) to {to}{suffix}")


@app.command()
@_handle_errors
def rmdir(
    ctx: typer.Context,
    name: str,
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
) -> None:
    """Delete a folder; its presets return to the parent level."""

    session = _session(ctx, assume_yes=yes)
    result = session.dispatcher.dispatch(DeleteFolder(session.folder_by_name(name).id))
    _finish(result, f"Deleted folder {name}")


@app.command()
@_handle_errors
def color(
    ctx: typer.Context,
    name: str,
    value: Optional[str] = typer.Argument(None, help="Color such as #ff8800; omit to clear"),
) -> None:
    """Set or clear the color of a folder."""

    session = _session(ctx)
    result = session.dispatcher.dispatch(SetFolderColor(session.folder_by_name(name).id, value))
    _finish(result, f"Updated color of {name}")


@app.command()
@_handle_errors
def fav(ctx: typer.Context, name: str) -> None:
    """Toggle the favorite mark of a preset."""

    session = _session(ctx)
    if not session.index.contains(name):
        raise PresetNotFoundError(f'Preset "{name}" not found.')
    result = session.dispatcher.dispatch(ToggleFavorite(name))
    _finish(result, f"{name} {'added to' if result.value else 'removed from'} favorites")


@app.command()
@_handle_errors
def favorites(ctx: typer.Context) -> None:
    """List favorite presets that exist in the preset directory."""

    session = _session(ctx)
    resolved = session.favorites.resolve(session.index.options)
    if not resolved:
        print("No favorites yet")
        return
    for option in resolved:
        print(f"[yellow]★[/] {option.name}")


@app.command()
@_handle_errors
def image(ctx: typer.Context, name: str, path: Path = typer.Argument(..., exists=True, dir_okay=False)) -> None:
    """Attach the image at PATH to a preset."""

    session = _session(ctx)
    if not session.index.contains(name):
        raise PresetNotFoundError(f'Preset "{name}" not found.')
    result = session.dispatcher.dispatch(SetPresetImage(name, read_image_as_data_url(path)))
    _finish(result, f"Attached {path.name} to {name}")


@app.command("import")
@_handle_errors
def import_file(
    ctx: typer.Context,
    path: Path = typer.Argument(..., exists=True, dir_okay=False),
    yes: bool = typer.Option(False, "--yes", "-y", help="Overwrite without asking"),
) -> None:
    """Copy a preset file into the preset directory."""

    session = _session(ctx, assume_yes=yes)
    importer = PresetImporter(session.host, session.api_type, session.dialogs, None, session.events)
    if importer.import_path(path) is None:
        raise typer.Exit(1)


@app.command()
@_handle_errors
def load(ctx: typer.Context, name: str) -> None:
    """Make NAME the active preset for the API type."""

    session = _session(ctx)
    option = session.index.find_option(name)
    if option is None:
        raise PresetNotFoundError(f'Preset "{name}" not found.')
    apply_preset(session.host, session.api_type, option, session.events)
    print(f"[green]Loaded {name}")


@app.command("purge-orphans")
@_handle_errors
def purge_orphans(
    ctx: typer.Context,
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
) -> None:
    """Forget saved folders and images of presets that no longer exist."""

    session = _session(ctx, assume_yes=yes)
    result = session.dispatcher.dispatch(PurgeOrphanedMetadata())
    _finish(result, f"Removed metadata for {len(result.affected)} preset(s)")


if __name__ == "__main__":  # pragma: no cover
    app()
