"""
Frameset CLI Tool

Inspect stored framesets and dry-run restores against an in-memory host.

Usage:
    frameset list [--app APP]
    frameset show NAME [--app APP] [--json]
    frameset validate FILE
    frameset delete NAME [--app APP]
    frameset simulate NAME [--app APP] [--reuse POLICY] [--display POLICY]
                           [--onscreen MODE] [--current-display DISPLAY] [--json]
"""

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console

from . import displays
from .config import FramesetConfig
from .errors import FramesetError, FramesetNotFoundError
from .logging_config import log_timing, setup_logging
from .models import DisplayPolicy, OnscreenMode, ReusePolicy, is_frameset
from .persistence import DEFAULT_APP, FramesetPersistence
from .restore import FramesetRestore
from .virtual_host import VirtualHost

logger = logging.getLogger(__name__)


def _print_error(console: Console, error: FramesetError) -> None:
    console.print(f"[red]Error: {error.message}[/red]")
    if error.suggestion:
        console.print(f"[dim]Tip: {error.suggestion}[/dim]")


def _load(persistence: FramesetPersistence, name: str, app: str):
    frameset = persistence.load_frameset(name, app)
    if frameset is None:
        raise FramesetNotFoundError(name, str(persistence.framesets_dir / app / f"{name}.json"))
    return frameset


@click.group()
@click.option('--dir', 'storage_dir', type=click.Path(path_type=Path),
              help='Frameset storage directory (default: $FRAMESET_DIR or ~/.local/share/frameset)')
@click.option('-v', '--verbose', is_flag=True, help='Enable verbose logging')
@click.option('--debug', is_flag=True, help='Enable debug logging')
@click.pass_context
def cli(ctx: click.Context, storage_dir: Optional[Path], verbose: bool, debug: bool):
    """Inspect saved framesets and simulate restoring them."""
    setup_logging(verbose=verbose, debug=debug)

    config = FramesetConfig.from_environment()
    if storage_dir is not None:
        config = config.model_copy(update={"storage_dir": storage_dir.expanduser().absolute()})

    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["persistence"] = FramesetPersistence(config.storage_dir)


@cli.command("list")
@click.option('--app', type=str, help='Only list framesets of this application')
@click.option('--json', 'output_json', is_flag=True, help='Output JSON instead of formatted tables')
@click.pass_context
def list_command(ctx: click.Context, app: Optional[str], output_json: bool):
    """List saved framesets."""
    console = Console()
    framesets = ctx.obj["persistence"].list_framesets(app)

    if output_json:
        click.echo(json.dumps(framesets, indent=2))
    else:
        displays.display_frameset_list(framesets, console)


@cli.command()
@click.argument('name')
@click.option('--app', type=str, default=DEFAULT_APP, show_default=True, help='Application directory')
@click.option('--json', 'output_json', is_flag=True, help='Output JSON instead of formatted tables')
@click.pass_context
def show(ctx: click.Context, name: str, app: str, output_json: bool):
    """Show the properties and frames of a saved frameset."""
    console = Console()

    try:
        frameset = _load(ctx.obj["persistence"], name, app)
    except FramesetError as e:
        _print_error(console, e)
        sys.exit(1)

    if output_json:
        click.echo(json.dumps(frameset.model_dump(mode='python'), indent=2, default=str))
    else:
        displays.display_frameset(frameset, console)


@cli.command()
@click.argument('file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
def validate(file: Path):
    """
    Check that FILE holds a valid frameset.

    Exit codes:
      0 - Valid frameset
      1 - Not a frameset
    """
    console = Console()

    try:
        data = json.loads(file.read_text())
    except (OSError, json.JSONDecodeError) as e:
        console.print(f"[red]Error: Failed to read {file}: {e}[/red]")
        sys.exit(1)

    version = is_frameset(data)
    if version is None:
        console.print(f"[red]✗ Not a valid frameset:[/red] {file}")
        sys.exit(1)

    console.print(f"[green]✓ Valid frameset (version {version}, {len(data['states'])} frame(s)):[/green] {file}")


@cli.command()
@click.argument('name')
@click.option('--app', type=str, default=DEFAULT_APP, show_default=True, help='Application directory')
@click.pass_context
def delete(ctx: click.Context, name: str, app: str):
    """Delete a saved frameset."""
    console = Console()

    if not ctx.obj["persistence"].delete_frameset(name, app):
        console.print(f"[red]Error: Frameset not found: {name}[/red]")
        sys.exit(1)

    console.print(f"[green]Deleted frameset {app}/{name}[/green]")


@cli.command()
@click.argument('name')
@click.option('--app', type=str, default=DEFAULT_APP, show_default=True, help='Application directory')
@click.option('--reuse', type=click.Choice([p.value for p in ReusePolicy]),
              help='Reuse policy (default: from config)')
@click.option('--display', 'display_policy', type=click.Choice([p.value for p in DisplayPolicy]),
              help='Display policy (default: from config)')
@click.option('--onscreen', type=click.Choice([m.value for m in OnscreenMode]),
              help='Onscreen mode (default: from config)')
@click.option('--current-display', default=":0", show_default=True,
              help='Display of the simulated session ("tty" for a text terminal)')
@click.option('--json', 'output_json', is_flag=True, help='Output JSON instead of formatted tables')
@click.pass_context
def simulate(
    ctx: click.Context,
    name: str,
    app: str,
    reuse: Optional[str],
    display_policy: Optional[str],
    onscreen: Optional[str],
    current_display: str,
    output_json: bool,
):
    """
    Restore a saved frameset onto an empty in-memory session.

    Shows which frames would be created and which frame states would be
    skipped or fail, without touching any real display.
    """
    console = Console()
    config: FramesetConfig = ctx.obj["config"]

    try:
        frameset = _load(ctx.obj["persistence"], name, app)
    except FramesetError as e:
        _print_error(console, e)
        sys.exit(1)

    session_display = None if current_display == "tty" else current_display
    host = VirtualHost(current_display=session_display)

    with log_timing(f"Simulated restore of {app}/{name}", logger):
        result = FramesetRestore(host).restore(
            frameset,
            filters=config.filter_table(),
            reuse=ReusePolicy(reuse) if reuse else config.reuse,
            display=DisplayPolicy(display_policy) if display_policy else config.display,
            onscreen=OnscreenMode(onscreen) if onscreen else config.onscreen,
        )

    if output_json:
        click.echo(displays.format_restore_json(result))
    else:
        displays.display_restore_result(result, console)

    sys.exit(0 if result.success else 1)
