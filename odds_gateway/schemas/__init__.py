from odds_gateway.schemas.common import (
    DateFormat,
    EventMarketsResult,
    ListingResult,
    OddsFormat,
    Telemetry,
    UpstreamResult,
)
from odds_gateway.schemas.events import Bookmaker, Event, Market, Outcome
from odds_gateway.schemas.parlay import ParlayResponse, ParlayResult
from odds_gateway.schemas.responses import (
    EventMarketsResponse,
    PresetResponse,
    ScanResponse,
    SportAliasResponse,
)

__all__ = [
    "Bookmaker",
    "DateFormat",
    "Event",
    "EventMarketsResponse",
    "EventMarketsResult",
    "ListingResult",
    "Market",
    "OddsFormat",
    "Outcome",
    "ParlayResponse",
    "ParlayResult",
    "PresetResponse",
    "ScanResponse",
    "SportAliasResponse",
    "Telemetry",
    "UpstreamResult",
]
