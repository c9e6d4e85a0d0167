"""
Brawl Stars Command Line Interface.

Built with Typer for a modern, type-safe CLI experience.
"""

from typing import Any

import typer
from rich.console import Console
from rich.table import Table

from .api import BrawlStarsError, SyncBrawlStarsClient
from .config import get_settings
from .logging_setup import configure_logging

app = typer.Typer(
    name="brawlstars",
    help="Query the Brawl Stars API from the command line",
    add_completion=True,
    rich_markup_mode="rich",
)

console = Console()


@app.callback()
def main_callback(
    ctx: typer.Context,
    token: str = typer.Option(
        None, "--token", "-t", help="API token (default: BRAWLSTARS_TOKEN)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """
    Brawl Stars API client.

    Look up players, clubs, rankings, brawlers and the event rotation.
    """
    settings = get_settings()
    configure_logging("DEBUG" if verbose else settings.app.log_level)
    ctx.obj = {"token": token, "settings": settings}


def _make_client(ctx: typer.Context) -> SyncBrawlStarsClient:
    """Create a client from the CLI options and settings."""
    settings = ctx.obj["settings"]
    token = ctx.obj["token"] or settings.api.token.get_secret_value()
    if not token:
        console.print(
            "[red]No API token. Pass --token or set BRAWLSTARS_TOKEN.[/red]"
        )
        raise typer.Exit(1)
    return SyncBrawlStarsClient(token, settings.client_options())


def _run(ctx: typer.Context, fetch) -> Any:
    """Call fetch(client), turning client errors into a clean exit."""
    client = _make_client(ctx)
    try:
        return fetch(client)
    except BrawlStarsError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)
    finally:
        client.close()


def _print_rows(title: str, columns: list[str], rows: list[list[Any]]) -> None:
    table = Table(title=title)
    for column in columns:
        table.add_column(column)
    for row in rows:
        table.add_row(*("" if v is None else str(v) for v in row))
    console.print(table)


def _print_pairs(title: str, pairs: list[tuple[str, Any]]) -> None:
    table = Table(title=title, show_header=False)
    table.add_column("Item", style="cyan")
    table.add_column("Value", style="white")
    for name, value in pairs:
        table.add_row(name, "" if value is None else str(value))
    console.print(table)


def _items(data: Any) -> list[dict[str, Any]]:
    # List endpoints wrap results as {"items": [...], "paging": {...}}
    if isinstance(data, dict):
        return data.get("items", [])
    return data


# =============================================================================
# Commands
# =============================================================================


@app.command()
def player(
    ctx: typer.Context,
    tag: str = typer.Argument(..., help="Player tag, e.g. #2Q0VVCJ2"),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON"),
) -> None:
    """Show a player's profile."""
    data = _run(ctx, lambda c: c.get_player(tag))
    if as_json:
        console.print_json(data=data)
        return

    club = data.get("club") or {}
    _print_pairs(
        f"{data.get('name')} ({data.get('tag')})",
        [
            ("Trophies", data.get("trophies")),
            ("Highest Trophies", data.get("highestTrophies")),
            ("Level", data.get("expLevel")),
            ("Club", club.get("name")),
            ("3v3 Victories", data.get("x3vs3Victories")),
            ("Solo Victories", data.get("soloVictories")),
            ("Duo Victories", data.get("duoVictories")),
            ("Brawlers", len(data.get("brawlers", []))),
        ],
    )


@app.command()
def battlelog(
    ctx: typer.Context,
    tag: str = typer.Argument(..., help="Player tag"),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON"),
) -> None:
    """Show a player's recent battles."""
    data = _run(ctx, lambda c: c.get_player_battlelog(tag))
    if as_json:
        console.print_json(data=data)
        return

    rows = []
    for item in _items(data):
        event = item.get("event", {})
        battle = item.get("battle", {})
        rows.append(
            [item.get("battleTime"), event.get("mode"), event.get("map"), battle.get("result")]
        )
    _print_rows("Battle Log", ["Time", "Mode", "Map", "Result"], rows)


@app.command()
def club(
    ctx: typer.Context,
    tag: str = typer.Argument(..., help="Club tag"),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON"),
) -> None:
    """Show club information."""
    data = _run(ctx, lambda c: c.get_club(tag))
    if as_json:
        console.print_json(data=data)
        return

    _print_pairs(
        f"{data.get('name')} ({data.get('tag')})",
        [
            ("Type", data.get("type")),
            ("Trophies", data.get("trophies")),
            ("Required Trophies", data.get("requiredTrophies")),
            ("Members", len(data.get("members", []))),
            ("Description", data.get("description")),
        ],
    )


@app.command()
def members(
    ctx: typer.Context,
    tag: str = typer.Argument(..., help="Club tag"),
    before: str = typer.Option(None, "--before", help="Paging cursor"),
    after: str = typer.Option(None, "--after", help="Paging cursor"),
    limit: int = typer.Option(None, "--limit", min=1, help="Maximum items"),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON"),
) -> None:
    """List a club's members."""
    data = _run(
        ctx,
        lambda c: c.get_club_members(tag, before=before, after=after, limit=limit),
    )
    if as_json:
        console.print_json(data=data)
        return

    rows = [
        [m.get("name"), m.get("tag"), m.get("role"), m.get("trophies")]
        for m in _items(data)
    ]
    _print_rows("Club Members", ["Name", "Tag", "Role", "Trophies"], rows)


@app.command()
def rankings(
    ctx: typer.Context,
    country: str = typer.Argument("global", help="Country code or 'global'"),
    kind: str = typer.Option(
        "players", "--kind", "-k", help="players, clubs or brawler"
    ),
    brawler_id: str = typer.Option(None, "--brawler", "-b", help="Brawler ID"),
    before: str = typer.Option(None, "--before", help="Paging cursor"),
    after: str = typer.Option(None, "--after", help="Paging cursor"),
    limit: int = typer.Option(None, "--limit", min=1, help="Maximum items"),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON"),
) -> None:
    """Show player, club or brawler rankings."""
    page = {"before": before, "after": after, "limit": limit}

    if kind == "players":
        data = _run(ctx, lambda c: c.get_player_rankings(country, **page))
    elif kind == "clubs":
        data = _run(ctx, lambda c: c.get_club_rankings(country, **page))
    elif kind == "brawler":
        if not brawler_id:
            console.print("[red]--brawler is required with --kind brawler[/red]")
            raise typer.Exit(1)
        data = _run(
            ctx, lambda c: c.get_brawler_rankings(country, brawler_id, **page)
        )
    else:
        console.print(f"[red]Unknown ranking kind: {kind}[/red]")
        raise typer.Exit(1)

    if as_json:
        console.print_json(data=data)
        return

    rows = [
        [r.get("rank"), r.get("name"), r.get("tag"), r.get("trophies")]
        for r in _items(data)
    ]
    _print_rows(
        f"{kind.title()} Rankings ({country})", ["#", "Name", "Tag", "Trophies"], rows
    )


@app.command()
def brawlers(
    ctx: typer.Context,
    before: str = typer.Option(None, "--before", help="Paging cursor"),
    after: str = typer.Option(None, "--after", help="Paging cursor"),
    limit: int = typer.Option(None, "--limit", min=1, help="Maximum items"),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON"),
) -> None:
    """List every brawler."""
    data = _run(
        ctx, lambda c: c.get_brawlers(before=before, after=after, limit=limit)
    )
    if as_json:
        console.print_json(data=data)
        return

    rows = [
        [b.get("id"), b.get("name"), len(b.get("starPowers", [])), len(b.get("gadgets", []))]
        for b in _items(data)
    ]
    _print_rows("Brawlers", ["ID", "Name", "Star Powers", "Gadgets"], rows)


@app.command()
def brawler(
    ctx: typer.Context,
    brawler_id: str = typer.Argument(..., help="Brawler ID"),
) -> None:
    """Show a single brawler."""
    data = _run(ctx, lambda c: c.get_brawler(brawler_id))
    console.print_json(data=data)


@app.command()
def rotation(
    ctx: typer.Context,
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON"),
) -> None:
    """Show the current event rotation."""
    data = _run(ctx, lambda c: c.get_event_rotation())
    if as_json:
        console.print_json(data=data)
        return

    rows = []
    for slot in data:
        event = slot.get("event", {})
        rows.append([event.get("mode"), event.get("map"), slot.get("endTime")])
    _print_rows("Event Rotation", ["Mode", "Map", "Ends"], rows)


@app.command()
def version() -> None:
    """Show version information."""
    from . import __version__

    console.print(f"brawlstars version {__version__}")


if __name__ == "__main__":
    app()
