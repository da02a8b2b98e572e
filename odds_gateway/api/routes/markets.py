from fastapi import APIRouter, Depends, Query

from odds_gateway.api.deps import get_odds_client
from odds_gateway.config import settings
from odds_gateway.exceptions import UnknownSport
from odds_gateway.schemas import DateFormat, EventMarketsResponse, OddsFormat
from odds_gateway.services.market_presets import resolve_markets
from odds_gateway.services.odds_client import OddsAPIClient
from odds_gateway.services.sport_alias import resolve_sport

router = APIRouter()


@router.get("", response_model=EventMarketsResponse)
async def get_event_markets(
    sport: str = Query(..., min_length=2),
    event_id: str = Query(..., alias="eventId", min_length=3),
    preset: str | None = None,
    markets: str | None = Query(None, description="Comma-separated market keys, ignored when preset is set"),
    regions: str = Query(settings.default_regions),
    odds_format: OddsFormat = Query(OddsFormat(settings.default_odds_format), alias="oddsFormat"),
    date_format: DateFormat = Query(DateFormat(settings.default_date_format), alias="dateFormat"),
    client: OddsAPIClient = Depends(get_odds_client),
):
    """Markets for a single event, passed through as the provider returns them."""
    sport_key = resolve_sport(sport)
    if sport_key is None:
        raise UnknownSport(sport)
    market_keys = resolve_markets(sport_key, preset=preset, markets=markets, default=settings.default_markets)

    result = await client.fetch_event_markets(
        sport_key,
        event_id,
        market_keys,
        regions=regions,
        odds_format=odds_format.value,
        date_format=date_format.value,
    )
    return EventMarketsResponse(
        event_id=event_id,
        sport_key=sport_key,
        markets=market_keys,
        data=result.data,
        telemetry=result.telemetry,
    )
