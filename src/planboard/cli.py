# src/planboard/cli.py
"""
planboard Command Line Interface (CLI).

This module implements the terminal front-end using `typer` and `rich`. It
does not draw boards in a browser; it shows the persisted board as tables and
lets you drive the undo/redo engine from a prompt.

Features
--------
- **Board view**: `show` renders every project and its tasks.
- **Scripted sessions**: `replay` runs a JSON list of actions and prints the
  resulting history list with its change descriptions.
- **Interactive shell**: `shell` keeps one workspace alive so undo/redo,
  history jumps and keyboard shortcuts can be tried by hand.

Usage
-----
    $ planboard show
    $ planboard replay samples/session.json --save
    $ planboard shell
"""

from __future__ import annotations

import shlex
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm
from rich.table import Table

from planboard.core.contracts.board import STATUSES, BoardSnapshot
from planboard.core.settings import Settings, load_settings
from planboard.core.state.storage import BoardStorage
from planboard.core.state.temporal import HistoryChange
from planboard.history.panel import HistoryPanel
from planboard.replay import ScriptRunner, load_script
from planboard.workspace import Workspace

load_dotenv()

app = typer.Typer(
    help="planboard: a project board with time-travel history.",
    rich_markup_mode="markdown",
)
console = Console()

StoreOption = Annotated[
    Path | None,
    typer.Option(
        "--store",
        "-s",
        help="Board JSON file (defaults to PLANBOARD_STORAGE_PATH).",
    ),
]


# --------------------------------------------------------------------------- #
# Helpers: Rendering
# --------------------------------------------------------------------------- #


def _settings(store: Path | None) -> Settings:
    cfg = load_settings()
    if store is not None:
        cfg = cfg.model_copy(update={"storage_path": store})
    return cfg


def _render_board(snapshot: BoardSnapshot) -> None:
    """Render every project as a table of its tasks."""
    if not snapshot.projects:
        console.print("[dim]No projects yet.[/dim]")
        return

    for project in snapshot.projects:
        table = Table(title=f"{project.name} [dim]({project.id[:8]})[/dim]", title_justify="left")
        table.add_column("Id", style="dim")
        table.add_column("Title")
        table.add_column("Status")
        table.add_column("Priority")
        table.add_column("★", justify="center")
        table.add_column("Due", style="cyan")
        for task in project.tasks:
            table.add_row(
                task.id[:8],
                task.title,
                task.status,
                task.priority,
                "★" if task.starred else "",
                task.due_date or "",
            )
        console.print(table)


def _render_history(panel: HistoryPanel) -> None:
    """Render the history list, oldest first, with the current row highlighted."""
    if panel.is_empty:
        console.print(Panel("No history yet.", title="History", border_style="dim"))
        return

    table = Table(title=f"History (↶ {panel.undo_count}  ↷ {panel.redo_count})")
    table.add_column("Step", justify="right")
    table.add_column("Change")
    for position, row in enumerate(panel.entries()):
        cursor = "›" if panel.is_open and position == panel.focus else " "
        style = "bold green" if row.kind == "current" else ("dim" if row.kind == "future" else "")
        table.add_row(f"{cursor} {row.offset:+d}", row.label, style=style)
    console.print(table)


def _confirm(prompt: str) -> bool:
    return Confirm.ask(prompt, default=False)


# --------------------------------------------------------------------------- #
# Commands
# --------------------------------------------------------------------------- #


@app.command()  # type: ignore[misc]
def show(store: StoreOption = None) -> None:
    """Show the saved board."""
    cfg = _settings(store)
    loaded = BoardStorage(cfg.storage_path).load()
    if loaded.is_err():
        console.print(f"[bold red]❌ Cannot load board:[/bold red] {loaded.unwrap_err()}")
        raise typer.Exit(code=1)
    _render_board(loaded.unwrap())


@app.command()  # type: ignore[misc]
def replay(
    script: Annotated[
        Path,
        typer.Argument(
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
            help="JSON list of steps to run.",
        ),
    ],
    store: StoreOption = None,
    save: Annotated[
        bool,
        typer.Option("--save/--no-save", help="Persist the resulting board."),
    ] = False,
) -> None:
    """
    Run a scripted session and print the resulting history.

    The script starts from the saved board. Without `--save` the board file
    is left untouched.
    """
    cfg = _settings(store)
    try:
        steps = load_script(script)
        if save:
            ws = Workspace.open(cfg)
        else:
            loaded = BoardStorage(cfg.storage_path).load()
            ws = Workspace.create(loaded.get_or(BoardSnapshot()), limit=cfg.history_limit)
        ScriptRunner(ws).run(steps)
    except ValueError as e:
        console.print(f"\n[bold red]❌ Replay Error:[/bold red] {e}")
        raise typer.Exit(code=1) from e

    _render_board(ws.log.current)
    _render_history(ws.panel)


_SHELL_HELP = """\
add-project NAME            add-task PROJECT TITLE
status PROJECT TASK STATUS  star PROJECT TASK
delete-task PROJECT TASK    delete-project PROJECT
undo [N]   redo [N]         jump OFFSET
history    board            clear
key COMBO  (e.g. ctrl+z, ctrl+shift+z, escape, delete)
open-history   close-history   help   quit"""


def _parse_combo(combo: str) -> tuple[str, dict[str, bool]]:
    """Turn ``"ctrl+shift+z"`` into ``("z", {"ctrl": True, "shift": True})``."""
    *mods, key = combo.split("+")
    names = {
        "escape": "Escape",
        "enter": "Enter",
        "delete": "Delete",
        "backspace": "Backspace",
        "up": "ArrowUp",
        "down": "ArrowDown",
    }
    flags = {m.lower(): True for m in mods if m.lower() in ("ctrl", "meta", "shift", "alt")}
    return names.get(key.lower(), key), flags


def _resolve(ws: Workspace, prefix: str, *, project: str | None = None) -> str:
    """Expand an id prefix (as shown by `board`) to a full id."""
    if project is None:
        ids = [p.id for p in ws.log.current.projects]
    else:
        found = ws.log.current.project(project)
        ids = [t.id for t in found.tasks] if found else []
    matches = [i for i in ids if i.startswith(prefix)]
    return matches[0] if len(matches) == 1 else prefix


def _shell_step(ws: Workspace, words: list[str]) -> bool:
    """Run one shell command; return False to leave the shell."""
    cmd, args = words[0], words[1:]
    actions = ws.actions

    if cmd in ("quit", "exit"):
        return False
    if cmd == "help":
        console.print(_SHELL_HELP)
    elif cmd == "add-project":
        actions.add_project(" ".join(args))
    elif cmd == "add-task":
        actions.add_task(_resolve(ws, args[0]), " ".join(args[1:]))
    elif cmd in ("status", "star", "delete-task"):
        pid = _resolve(ws, args[0])
        tid = _resolve(ws, args[1], project=pid)
        if cmd == "status":
            if args[2] not in STATUSES:
                console.print(f"[yellow]status must be one of {', '.join(STATUSES)}[/yellow]")
                return True
            actions.update_task_status(pid, tid, args[2])  # type: ignore[arg-type]
        elif cmd == "star":
            actions.toggle_star(pid, tid)
        else:
            actions.delete_task(pid, tid)
    elif cmd == "delete-project":
        actions.delete_project(_resolve(ws, args[0]))
    elif cmd == "undo":
        ws.log.undo(int(args[0]) if args else 1)
    elif cmd == "redo":
        ws.log.redo(int(args[0]) if args else 1)
    elif cmd == "jump":
        offset = int(args[0])
        if offset < 0:
            ws.log.jump_to_past(len(ws.log.past) + offset)
        elif offset > 0:
            ws.log.jump_to_future(offset - 1)
    elif cmd == "clear":
        ws.panel.request_clear(_confirm)
    elif cmd == "history":
        _render_history(ws.panel)
    elif cmd == "board":
        _render_board(ws.log.current)
    elif cmd == "open-history":
        ws.panel.open()
        _render_history(ws.panel)
    elif cmd == "close-history":
        ws.panel.close()
    elif cmd == "key":
        key, flags = _parse_combo(args[0])
        event = ws.press(key, **flags)
        if not event.default_prevented:
            console.print("[dim]not handled[/dim]")
        elif ws.panel.is_open:
            _render_history(ws.panel)
    else:
        console.print(f"[yellow]Unknown command {cmd!r}; try 'help'.[/yellow]")
    return True


@app.command()  # type: ignore[misc]
def shell(store: StoreOption = None) -> None:
    """
    Start an interactive session on the saved board.

    History lives only as long as the session; every change to the board is
    saved immediately.
    """
    cfg = _settings(store)
    ws = Workspace.open(
        cfg,
        confirm=_confirm,
        on_feedback=lambda label: console.print(f"[dim]{label}[/dim]"),
    )
    console.print(
        Panel.fit(
            f"[bold cyan]planboard shell[/bold cyan]\nBoard: [u]{cfg.storage_path}[/u]",
            border_style="cyan",
        )
    )

    def announce(change: HistoryChange[BoardSnapshot]) -> None:
        if change.action == "commit":
            console.print(f"[green]✓[/green] {ws.cache.label_for_past(len(change.past) - 1)}")

    ws.log.subscribe(announce)
    while True:
        try:
            line = console.input("[bold]planboard> [/bold]")
        except (EOFError, KeyboardInterrupt):
            break
        try:
            words = shlex.split(line)
        except ValueError as e:
            console.print(f"[yellow]{e}[/yellow]")
            continue
        if not words:
            continue
        try:
            if not _shell_step(ws, words):
                break
        except (IndexError, ValueError) as e:
            console.print(f"[bold red]❌ {words[0]}:[/bold red] {e}")


if __name__ == "__main__":
    app()
