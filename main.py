"""pytoa command line: look up FTC teams and events on The Orange Alliance."""

import sys
from typing import Optional

import typer
from typing_extensions import Annotated

from pytoa.logging.setup import setup_logging

setup_logging()

from loguru import logger
from rich import print
from rich.panel import Panel
from rich.table import Table

from pytoa.api.client import Client
from pytoa.errors import TOAError
from pytoa.models.enums import Season

app = typer.Typer(help="Query The Orange Alliance FTC statistics API")


def _client() -> Client:
    return Client.from_settings()


def _season(code: str) -> Season:
    try:
        return Season.value_of(code)
    except TOAError as e:
        raise typer.BadParameter(str(e)) from e


def _fail(e: TOAError) -> None:
    logger.debug(f"Command failed: {e!r}")
    print(f"[bold red]Error:[/bold red] {e}")
    raise typer.Exit(1)


@app.command()
def version():
    """Print the API version."""
    try:
        print(f"The Orange Alliance API [bold]{_client().api_version()}[/bold]")
    except TOAError as e:
        _fail(e)


@app.command()
def team(
    number: Annotated[int, typer.Argument(help="FTC team number")],
    season: Annotated[Optional[str], typer.Option(help="Season code, e.g. 1920")] = None,
):
    """Print a team's record, details and (optionally) season totals."""
    try:
        toa_team = _client().team(number)
        record = f"{toa_team.wins()}-{toa_team.losses()}-{toa_team.ties()}"
        print(Panel(f"W-L-T: [bold]{record}[/bold]", title=f"Team {number}"))

        table = Table("Property", "Value")
        for key, value in sorted(toa_team.properties().items()):
            table.add_row(key, value)
        print(table)

        if season:
            toa_season = _season(season)
            totals = Table("Statistic", "Total", title=f"{toa_season} ({toa_season.code})")
            totals.add_row("Wins", str(toa_team.season_wins(toa_season)))
            totals.add_row("Losses", str(toa_team.season_losses(toa_season)))
            totals.add_row("Ties", str(toa_team.season_ties(toa_season)))
            totals.add_row("OPR", str(toa_team.opr(toa_season)))
            totals.add_row("NP OPR", str(toa_team.np_opr(toa_season)))
            print(totals)
    except TOAError as e:
        _fail(e)


@app.command()
def events(
    number: Annotated[int, typer.Argument(help="FTC team number")],
    season: Annotated[str, typer.Option(help="Season code, e.g. 1920")],
):
    """Print the events a team attended in a season."""
    toa_season = _season(season)
    try:
        event_map = _client().team(number).events(toa_season)
    except TOAError as e:
        _fail(e)
        return

    table = Table("Name", "Event key", title=f"Team {number} events, {toa_season}")
    for name, event in sorted(event_map.items()):
        table.add_row(name, event.event_key)
    print(table)


@app.command()
def ranking(
    event_key: Annotated[str, typer.Argument(help="Event key, e.g. 1920-CMP-HOU1")],
    number: Annotated[int, typer.Argument(help="FTC team number")],
    field: Annotated[str, typer.Option(help="Ranking field to show")] = "rank",
):
    """Print one field of a team's ranking at an event."""
    try:
        value = _client().event(event_key).team_ranking(number, field)
    except TOAError as e:
        _fail(e)
        return
    print(f"Team {number} at {event_key}: {field} = [bold]{value}[/bold]")


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        logger.info("Execution interrupted by user (KeyboardInterrupt).")
        sys.exit(0)
