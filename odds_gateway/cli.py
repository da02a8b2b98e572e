"""CLI for local parlay pricing and quick odds scans.

Usage:
    odds-gateway parlay --legs=-110,-110
    odds-gateway parlay --format decimal --legs 1.5,2.1
    odds-gateway scan --sport mlb --preset f5 --limit 5
    odds-gateway aliases
    odds-gateway presets
"""

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from odds_gateway.config import settings
from odds_gateway.exceptions import OddsGatewayError, UnknownSport
from odds_gateway.services.cache import TTLCache
from odds_gateway.services.market_presets import MARKET_PRESETS, resolve_markets
from odds_gateway.services.normalizer import normalize_events
from odds_gateway.services.odds_client import OddsAPIClient
from odds_gateway.services.parlay import price_parlay
from odds_gateway.services.sport_alias import SPORT_ALIASES, resolve_sport

app = typer.Typer(help="Odds gateway tools")
console = Console()


@app.command("parlay")
def parlay(
    legs: str = typer.Option(..., "--legs", "-l", help="Comma-separated leg odds, e.g. --legs=-110,+150"),
    odds_format: str = typer.Option("american", "--format", "-f", help="american or decimal"),
):
    """Price a parlay locally."""
    try:
        result = price_parlay(odds_format, legs.split(","))
    except OddsGatewayError as e:
        console.print(f"\n[red]✗[/red] {e.message}\n")
        raise typer.Exit(code=1)

    table = Table(title=f"{result.legs}-Leg Parlay")
    table.add_column("Decimal", style="cyan")
    table.add_column("American", style="green")
    table.add_column("Implied %", style="magenta")
    table.add_row(
        f"{result.decimal_odds:.6f}",
        f"{result.american_odds:+d}",
        f"{result.implied_probability:.4f}",
    )
    console.print()
    console.print(table)
    console.print()


async def _scan(sport_key: str, markets: list[str], regions: str, limit: int) -> None:
    client = OddsAPIClient(TTLCache(settings.cache_ttl))
    listing = await client.fetch_listing(sport_key, markets, regions=regions)
    events = normalize_events(listing.events[:limit])

    if not events:
        console.print("\n[yellow]No events found.[/yellow]\n")
        return

    table = Table(title=f"{sport_key} ({', '.join(markets)})")
    table.add_column("ID", style="dim")
    table.add_column("Commence", style="blue")
    table.add_column("Away", style="cyan")
    table.add_column("Home", style="cyan")
    table.add_column("Books", style="magenta")

    for event in events:
        table.add_row(
            event.id or "-",
            str(event.commence_time or "-"),
            event.away or "-",
            event.home or "-",
            str(len(event.bookmakers)),
        )

    console.print()
    console.print(table)
    telemetry = listing.telemetry
    console.print(
        f"[dim]requests used={telemetry.requests_used} "
        f"remaining={telemetry.requests_remaining} last={telemetry.requests_last}[/dim]\n"
    )


@app.command("scan")
def scan(
    sport: str = typer.Option(..., "--sport", "-s", help="Alias (mlb, nfl, ...) or sport key"),
    preset: str | None = typer.Option(None, "--preset", "-p", help="Market preset"),
    markets: str | None = typer.Option(None, "--markets", "-m", help="Comma-separated market keys"),
    regions: str = typer.Option(settings.default_regions, "--regions", "-r"),
    limit: int = typer.Option(settings.default_scan_limit, "--limit", "-n"),
):
    """Fetch and print normalized events for a sport."""
    try:
        sport_key = resolve_sport(sport)
        if sport_key is None:
            raise UnknownSport(sport)
        market_keys = resolve_markets(sport_key, preset=preset, markets=markets, default=settings.default_markets)
        asyncio.run(_scan(sport_key, market_keys, regions, limit))
    except OddsGatewayError as e:
        console.print(f"\n[red]✗[/red] {e.message}\n")
        raise typer.Exit(code=1)


@app.command("aliases")
def aliases():
    """List sport aliases."""
    table = Table(title="Sport Aliases")
    table.add_column("Alias", style="cyan")
    table.add_column("Sport key", style="green")
    for alias, key in SPORT_ALIASES.items():
        table.add_row(alias, key)
    console.print()
    console.print(table)
    console.print()


@app.command("presets")
def presets():
    """List market presets."""
    table = Table(title="Market Presets")
    table.add_column("Preset", style="cyan")
    table.add_column("Markets", style="green")
    table.add_column("Sports", style="magenta")
    for name, preset in MARKET_PRESETS.items():
        table.add_row(name, ",".join(preset.markets), f"{preset.sport_prefix}*" if preset.sport_prefix else "all")
    console.print()
    console.print(table)
    console.print()


if __name__ == "__main__":
    app()
