"""UI helpers for CLI interaction.

This module provides reusable UI components and helpers for the CLI,
keeping the presentation logic separate from business logic.
"""

from collections.abc import Callable
import functools
import json
from typing import Any, ParamSpec, TypeVar

import attrs
from rich.console import Console
from rich.table import Table
import typer

from src.config import get_logger
from src.domain.entities import Track
from src.domain.exceptions import HydrationError
from src.domain.lookup import CandidateRecording, CandidateRelease

console = Console()
logger = get_logger(__name__)

P = ParamSpec("P")
R = TypeVar("R")


def command_error_handler(func: Callable[P, R]) -> Callable[P, R]:
    """Decorator to standardize error handling for CLI commands.

    This decorator wraps a command function to:
    1. Provide consistent error handling using Typer's Exit mechanism
    2. Log errors using Loguru with proper context
    3. Display user-friendly error messages with Rich
    """

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        operation = func.__name__.replace("_", " ")

        with logger.contextualize(operation=operation):
            try:
                logger.debug(f"Executing {operation}")
                return func(*args, **kwargs)

            except typer.Exit:
                raise

            except typer.Abort:
                logger.info(f"Operation {operation} aborted by user")
                raise

            except HydrationError as e:
                # Expected lookup failures: no traceback
                logger.info(f"{operation} failed: {e}", error_type=type(e).__name__)
                console.print(f"[bold red]✗ {type(e).__name__}:[/bold red] {e}")
                raise typer.Exit(code=1) from e

            except Exception as e:
                logger.exception(f"Error during {operation}")
                console.print(f"\n[bold red]✗ Error during {operation}:[/bold red] {e}")
                raise typer.Exit(code=1) from e

    return wrapper


def _to_jsonable(value: Any) -> Any:
    return attrs.asdict(
        value,
        value_serializer=lambda _inst, _field, v: v.isoformat()
        if hasattr(v, "isoformat")
        else v,
    )


def print_json(value: Any) -> None:
    """Print an attrs instance (or a list of them) as indented JSON."""
    if isinstance(value, list):
        payload = [_to_jsonable(item) for item in value]
    else:
        payload = _to_jsonable(value)
    console.print_json(json.dumps(payload))


def render_recordings(
    recordings: list[CandidateRecording],
    best_release: CandidateRelease | None,
) -> None:
    """Display candidate recordings and the release picked for the first one."""
    if not recordings:
        console.print("[yellow]No recordings found[/yellow]")
        return

    table = Table(title="MusicBrainz recordings")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Title", style="bold")
    table.add_column("Artists")
    table.add_column("Length", justify="right")
    table.add_column("ISRC")
    table.add_column("Releases", justify="right")
    table.add_column("MBID", style="dim")

    for index, recording in enumerate(recordings, start=1):
        artists = "".join(
            f"{credit.artist_name}{credit.join_phrase}"
            for credit in recording.artist_credits
        )
        length = (
            f"{recording.length_ms // 60000}:{recording.length_ms // 1000 % 60:02d}"
            if recording.length_ms
            else "-"
        )
        table.add_row(
            str(index),
            recording.title,
            artists,
            length,
            recording.isrcs[0] if recording.isrcs else "-",
            str(len(recording.releases)),
            recording.id,
        )
    console.print(table)

    if best_release is not None:
        console.print(
            f"Best release: [bold]{best_release.title}[/bold] "
            f"({best_release.date or 'undated'}, {best_release.country or '??'}) "
            f"[dim]{best_release.id}[/dim]"
        )


def render_track(track: Track) -> None:
    """Display a hydrated track."""
    table = Table(title=track.title, show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")

    table.add_row("Artists", ", ".join(track.artist_names) or "-")
    table.add_row("Album", track.album or "-")
    table.add_row("Recording MBID", track.recording_mbid or "-")
    table.add_row("Release MBID", track.release_mbid or "-")
    table.add_row("ISRC", track.isrc or "-")
    table.add_row(
        "Duration", f"{track.duration_ms} ms" if track.duration_ms is not None else "-"
    )
    console.print(table)
