"""
Frameset Display Module

Rich-formatted tables for stored framesets and restore results.
"""

import json
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .constants import ID_PARAM
from .minibuffer import mini_link
from .models import FrameAction, Frameset
from .restore import RestoreResult


ACTION_STYLES = {
    FrameAction.CREATED: "green",
    FrameAction.REUSED: "cyan",
    FrameAction.IGNORED: "yellow",
    FrameAction.REJECTED: "dim",
}


def display_frameset_list(framesets: List[Dict[str, Any]], console: Optional[Console] = None) -> None:
    """
    Display stored framesets as a table.

    Args:
        framesets: Metadata dictionaries from FramesetPersistence.list_framesets
        console: Rich console (optional, creates new if not provided)
    """
    if console is None:
        console = Console()

    if not framesets:
        console.print("[dim]No framesets saved[/dim]")
        return

    table = Table(title="Saved Framesets")
    table.add_column("App", style="cyan")
    table.add_column("Name", style="bold")
    table.add_column("Frames", justify="right")
    table.add_column("Saved")
    table.add_column("Description")

    for entry in framesets:
        name = entry["name"] if entry.get("valid", True) else f"[red]{entry['name']} (invalid)[/red]"
        table.add_row(
            entry.get("app", ""),
            name,
            str(entry.get("total_frames", 0)),
            entry.get("saved_at", "")[:19],
            entry.get("description") or "",
        )

    console.print(table)


def _describe_link(parameters: Dict[str, Any]) -> str:
    link = mini_link(parameters)
    if link is None:
        return "[dim]-[/dim]"
    if link.owns:
        text = "only" if parameters.get("minibuffer") == "only" else "own"
        return f"[green]{text} (default)[/green]" if link.default else text
    return f"uses {link.provider_id[:8]}"


def display_frameset(frameset: Frameset, console: Optional[Console] = None) -> None:
    """
    Display the properties and frame states of a frameset.

    Args:
        frameset: Frameset to show
        console: Rich console (optional, creates new if not provided)
    """
    if console is None:
        console = Console()

    title = frameset.name or "(unnamed)"
    console.print(f"\n[bold cyan]Frameset: {title}[/bold cyan]\n")

    props_table = Table(title="Properties", show_header=False)
    props_table.add_column("Property", style="dim")
    props_table.add_column("Value")
    props_table.add_row("Version", str(frameset.version))
    for key, value in frameset.properties.items():
        props_table.add_row(key, str(value))
    console.print(props_table)
    console.print()

    frames_table = Table(title=f"Frames ({len(frameset.states)})")
    frames_table.add_column("Id", style="cyan")
    frames_table.add_column("Display")
    frames_table.add_column("Position", justify="right")
    frames_table.add_column("Size", justify="right")
    frames_table.add_column("Minibuffer")
    frames_table.add_column("Visibility")

    for state in frameset.states:
        params = state.parameters
        fid = params.get(ID_PARAM) or ""
        frames_table.add_row(
            fid[:8],
            str(params.get("display") or "tty"),
            f"{params.get('left', '?')},{params.get('top', '?')}",
            f"{params.get('width', '?')}x{params.get('height', '?')}",
            _describe_link(params),
            str(params.get("visibility", "")),
        )

    console.print(frames_table)


def display_restore_result(result: RestoreResult, console: Optional[Console] = None) -> None:
    """
    Display what a restore did with each frame.

    Args:
        result: RestoreResult from FramesetRestore.restore
        console: Rich console (optional, creates new if not provided)
    """
    if console is None:
        console = Console()

    table = Table(title="Restore Result")
    table.add_column("Frame")
    table.add_column("Action")

    for frame, action in result.actions.items():
        style = ACTION_STYLES.get(action, "")
        deleted = " [red](deleted)[/red]" if frame in result.deleted else ""
        table.add_row(str(frame), f"[{style}]{action.value}[/{style}]{deleted}")

    console.print(table)

    summary = (
        f"{len(result.created)} created, {len(result.reused)} reused, "
        f"{len(result.deleted)} deleted, {result.skipped} skipped"
    )
    if result.errors:
        lines = "\n".join(f"[red]{error.get('message')}[/red]" for error in result.errors)
        console.print(Panel(f"{summary}\n{lines}", title="Errors", border_style="red"))
    else:
        console.print(f"[green]{summary}[/green]")


def format_restore_json(result: RestoreResult) -> str:
    """Format a RestoreResult as JSON"""
    data = {
        "success": result.success,
        "actions": [
            {"frame": str(frame), "action": action.value}
            for frame, action in result.actions.items()
        ],
        "deleted": [str(frame) for frame in result.deleted],
        "skipped": result.skipped,
        "errors": result.errors,
    }
    return json.dumps(data, indent=2)
