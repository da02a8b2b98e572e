from typing import Any

from pydantic import BaseModel

from odds_gateway.schemas.common import Telemetry
from odds_gateway.schemas.events import Event


class ScanResponse(BaseModel):
    pulled: int
    sport_key: str
    markets: list[str]
    events: list[Event]
    telemetry: Telemetry


class EventMarketsResponse(BaseModel):
    event_id: str
    sport_key: str
    markets: list[str]
    data: Any
    telemetry: Telemetry


class SportAliasResponse(BaseModel):
    alias: str
    sport_key: str


class PresetResponse(BaseModel):
    name: str
    markets: list[str]
    sport_prefix: str | None = None
