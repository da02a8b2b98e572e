from fastapi import APIRouter, Depends, Query

from odds_gateway.api.deps import get_odds_client
from odds_gateway.config import settings
from odds_gateway.exceptions import UnknownSport
from odds_gateway.schemas import DateFormat, OddsFormat, ScanResponse
from odds_gateway.services.market_presets import resolve_markets
from odds_gateway.services.normalizer import normalize_events
from odds_gateway.services.odds_client import OddsAPIClient
from odds_gateway.services.sport_alias import resolve_sport

router = APIRouter()


@router.get("", response_model=ScanResponse)
async def scan(
    sport: str = Query(..., min_length=2, description="Alias (mlb, nfl, ...) or sport key"),
    preset: str | None = Query(None, description="Market preset (ml, spread, total, game, 1h, f5, props)"),
    markets: str | None = Query(None, description="Comma-separated market keys, ignored when preset is set"),
    regions: str = Query(settings.default_regions),
    odds_format: OddsFormat = Query(OddsFormat(settings.default_odds_format), alias="oddsFormat"),
    date_format: DateFormat = Query(DateFormat(settings.default_date_format), alias="dateFormat"),
    limit: int = Query(settings.default_scan_limit, ge=1, le=100),
    client: OddsAPIClient = Depends(get_odds_client),
):
    """Normalized events and markets for a sport.

    Only the first `limit` events are normalized and returned.
    """
    sport_key = resolve_sport(sport)
    if sport_key is None:
        raise UnknownSport(sport)
    market_keys = resolve_markets(
        sport_key,
        preset=preset,
        markets=markets,
        default=settings.default_markets,
    )

    listing = await client.fetch_listing(
        sport_key,
        market_keys,
        regions=regions,
        odds_format=odds_format.value,
        date_format=date_format.value,
    )
    events = normalize_events(listing.events[:limit])

    return ScanResponse(
        pulled=len(events),
        sport_key=sport_key,
        markets=market_keys,
        events=events,
        telemetry=listing.telemetry,
    )
