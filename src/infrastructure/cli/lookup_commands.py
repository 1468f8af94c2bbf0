"""MusicBrainz lookup and hydration commands."""

import asyncio
from typing import Annotated

import typer

from src.config import get_logger
from src.domain.entities import Artist, Track
from src.domain.lookup import CandidateRecording, SearchParams, select_best_release
from src.infrastructure.cli.ui import (
    command_error_handler,
    print_json,
    render_recordings,
    render_track,
)
from src.infrastructure.services.factories import (
    create_hydrate_use_case,
    create_lookup_service,
    create_musicbrainz_connector,
)

logger = get_logger(__name__)


def register_lookup_commands(app: typer.Typer) -> None:
    """Register lookup commands with the Typer app."""
    app.command(
        name="search",
        help="Search MusicBrainz recordings",
        rich_help_panel="🔎 Lookup",
    )(search)
    app.command(
        name="hydrate",
        help="Hydrate a track with MusicBrainz metadata",
        rich_help_panel="🔎 Lookup",
    )(hydrate)


async def _run_search(params: SearchParams) -> list[CandidateRecording]:
    async with create_musicbrainz_connector() as connector:
        service = create_lookup_service(connector=connector)
        return await service.search(params)


async def _run_hydrate(track: Track) -> Track:
    async with create_musicbrainz_connector() as connector:
        use_case = create_hydrate_use_case(
            lookup=create_lookup_service(connector=connector)
        )
        return await use_case.execute(track)


@command_error_handler
def search(
    track: Annotated[str, typer.Option("--track", "-t", help="Track title")] = "",
    artist: Annotated[str, typer.Option("--artist", "-a", help="Artist name")] = "",
    release: Annotated[
        str, typer.Option("--release", "-r", help="Release (album) title")
    ] = "",
    as_json: Annotated[
        bool, typer.Option("--json", help="Print raw results as JSON")
    ] = False,
) -> None:
    """Search MusicBrainz recordings by track, artist and release."""
    params = SearchParams(track=track, artist=artist, release=release).validate()
    recordings = asyncio.run(_run_search(params))

    if as_json:
        print_json(recordings)
        return

    best = (
        select_best_release(recordings[0].releases, recordings[0].title)
        if recordings
        else None
    )
    render_recordings(recordings, best)


@command_error_handler
def hydrate(
    track: Annotated[str, typer.Option("--track", "-t", help="Track title")],
    artist: Annotated[
        list[str] | None,
        typer.Option("--artist", "-a", help="Artist name (repeat for several)"),
    ] = None,
    album: Annotated[
        str | None, typer.Option("--album", help="Album title as reported")
    ] = None,
    isrc: Annotated[
        str | None, typer.Option("--isrc", help="ISRC to keep if MusicBrainz has none")
    ] = None,
    as_json: Annotated[
        bool, typer.Option("--json", help="Print the hydrated track as JSON")
    ] = False,
) -> None:
    """Hydrate a track record with MusicBrainz identifiers."""
    played = Track(
        title=track,
        artists=[Artist(name=name) for name in artist or []],
        album=album,
        isrc=isrc,
    )
    hydrated = asyncio.run(_run_hydrate(played))

    if as_json:
        print_json(hydrated)
        return
    render_track(hydrated)
