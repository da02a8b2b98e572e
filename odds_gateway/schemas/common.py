from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel


class OddsFormat(str, Enum):
    """Odds representations understood by the provider and the parlay engine."""

    AMERICAN = "american"
    DECIMAL = "decimal"


class DateFormat(str, Enum):
    ISO = "iso"
    UNIX = "unix"


class Telemetry(BaseModel):
    """Usage counters reported by the provider for one call.

    Never cached. ``source`` says where the payload came from: a fresh
    upstream call, the local cache, or a pure local computation.
    """

    requests_used: int | None = None
    requests_remaining: int | None = None
    requests_last: int | None = None
    source: Literal["upstream", "cache", "local"] = "upstream"

    @classmethod
    def local(cls) -> "Telemetry":
        return cls(requests_used=0, requests_remaining=None, requests_last=0, source="local")

    @classmethod
    def cached(cls) -> "Telemetry":
        return cls(requests_last=0, source="cache")


class UpstreamResult(BaseModel):
    """Raw payload of one logical request plus its telemetry."""

    payload: Any
    telemetry: Telemetry


class ListingResult(BaseModel):
    events: list[Any]
    telemetry: Telemetry


class EventMarketsResult(BaseModel):
    data: Any
    telemetry: Telemetry
