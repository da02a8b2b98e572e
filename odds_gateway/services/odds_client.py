import logging
from collections.abc import Mapping, Sequence
from typing import Any
from urllib.parse import quote

import httpx

from odds_gateway.config import settings
from odds_gateway.exceptions import (
    ConfigurationError,
    InvalidInput,
    UpstreamError,
    UpstreamMalformedResponse,
    UpstreamTimeout,
    UpstreamUnavailable,
)
from odds_gateway.schemas import (
    EventMarketsResult,
    ListingResult,
    Telemetry,
    UpstreamResult,
)
from odds_gateway.services.cache import TTLCache, canonical_params, make_cache_key
from odds_gateway.services.metrics import MetricsService

logger = logging.getLogger(__name__)

# Usage headers sent by The Odds API on every successful response
HEADER_REQUESTS_USED = "x-requests-used"
HEADER_REQUESTS_REMAINING = "x-requests-remaining"
HEADER_REQUESTS_LAST = "x-requests-last"


def _header_int(headers: Mapping[str, str], name: str) -> int | None:
    value = headers.get(name)
    if value is None:
        return None
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return None


def parse_telemetry(headers: Mapping[str, str]) -> Telemetry:
    """Pull usage counters out of response headers; missing ones stay None."""
    return Telemetry(
        requests_used=_header_int(headers, HEADER_REQUESTS_USED),
        requests_remaining=_header_int(headers, HEADER_REQUESTS_REMAINING),
        requests_last=_header_int(headers, HEADER_REQUESTS_LAST),
        source="upstream",
    )


class OddsAPIClient:
    """HTTP client for The Odds API with caching.

    The cache is injected so every process (or test) decides its lifetime.
    """

    def __init__(
        self,
        cache: TTLCache,
        *,
        base_url: str | None = None,
        api_key: str | None = None,
        key_location: str | None = None,
        key_header: str | None = None,
        key_param: str | None = None,
        timeout: float | None = None,
        body_limit: int | None = None,
        metrics: MetricsService | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.cache = cache
        self.base_url = settings.odds_api_base_url if base_url is None else base_url
        self.api_key = settings.odds_api_key if api_key is None else api_key
        self.key_location = key_location or settings.odds_api_key_location
        self.key_header = key_header or settings.odds_api_key_header
        self.key_param = key_param or settings.odds_api_key_param
        self.timeout = settings.request_timeout if timeout is None else timeout
        self.body_limit = settings.upstream_body_limit if body_limit is None else body_limit
        self.metrics = metrics
        self._transport = transport

    def _check_config(self) -> None:
        if not self.api_key:
            raise ConfigurationError("ODDS_API_KEY is not configured", setting="odds_api_key")
        if not self.base_url:
            raise ConfigurationError("ODDS_API_BASE_URL is not configured", setting="odds_api_base_url")
        if self.key_location not in ("query", "header"):
            raise ConfigurationError(
                f"Invalid credential location: {self.key_location!r}",
                setting="odds_api_key_location",
            )

    def _track(self, name: str) -> None:
        if self.metrics is not None:
            getattr(self.metrics, name)()

    async def _request(
        self,
        endpoint: str,
        params: Mapping[str, Any] | None = None,
        *,
        expect_list: bool = False,
    ) -> UpstreamResult:
        """GET an endpoint, serving from cache when the logical request is fresh.

        With expect_list, a 2xx body that is not a JSON array raises
        UpstreamMalformedResponse and is not cached.
        """
        self._check_config()

        cache_key = make_cache_key(endpoint, params, exclude=[self.key_param])
        cached = await self.cache.get(cache_key)
        if cached is not None:
            logger.debug(f"Cache hit for {cache_key}")
            self._track("track_cache_hit")
            return UpstreamResult(payload=cached, telemetry=Telemetry.cached())
        self._track("track_cache_miss")

        # Build request
        url = f"{self.base_url.rstrip('/')}/{endpoint.strip().lstrip('/')}"
        request_params = canonical_params(params, exclude=[self.key_param])
        headers = {"Accept": "application/json"}
        if self.key_location == "header":
            headers[self.key_header] = self.api_key
        else:
            request_params[self.key_param] = self.api_key

        logger.info(f"Upstream GET {cache_key}")
        self._track("track_api_call")

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(url, params=request_params, headers=headers)
        except httpx.TimeoutException:
            raise UpstreamTimeout(
                f"Request to {endpoint} timed out",
                timeout_seconds=self.timeout,
                endpoint=endpoint,
            )
        except httpx.RequestError as e:
            raise UpstreamUnavailable(
                f"Network error calling {endpoint}: {type(e).__name__}",
                endpoint=endpoint,
            )

        if not response.is_success:
            logger.warning(f"Upstream returned HTTP {response.status_code} for {cache_key}")
            raise UpstreamError(
                f"HTTP {response.status_code} from The Odds API",
                status_code=response.status_code,
                response_body=response.text,
                endpoint=endpoint,
                body_limit=self.body_limit,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamMalformedResponse(
                f"Invalid JSON from The Odds API: {e}",
                endpoint=endpoint,
            )

        if expect_list and not isinstance(data, list):
            raise UpstreamMalformedResponse(
                f"Expected a list, got {type(data).__name__}",
                endpoint=endpoint,
            )

        telemetry = parse_telemetry(response.headers)
        await self.cache.set(cache_key, data)
        return UpstreamResult(payload=data, telemetry=telemetry)

    async def fetch_listing(
        self,
        sport_key: str,
        markets: Sequence[str] | str,
        regions: str | None = None,
        odds_format: str | None = None,
        date_format: str | None = None,
    ) -> ListingResult:
        """GET /sports/{sport}/odds - Upcoming and live events with odds."""
        if not sport_key:
            raise InvalidInput("A sport key is required", field="sport")

        result = await self._request(
            f"/sports/{quote(sport_key, safe='')}/odds",
            params=self._query(markets, regions, odds_format, date_format),
            expect_list=True,
        )
        return ListingResult(events=result.payload, telemetry=result.telemetry)

    async def fetch_event_markets(
        self,
        sport_key: str,
        event_id: str,
        markets: Sequence[str] | str,
        regions: str | None = None,
        odds_format: str | None = None,
        date_format: str | None = None,
    ) -> EventMarketsResult:
        """GET /sports/{sport}/events/{id}/odds - All requested markets for one event."""
        if not sport_key:
            raise InvalidInput("A sport key is required", field="sport")
        event_id = (event_id or "").strip()
        if not event_id:
            raise InvalidInput("An event id is required", field="eventId")

        result = await self._request(
            f"/sports/{quote(sport_key, safe='')}/events/{quote(event_id, safe='')}/odds",
            params=self._query(markets, regions, odds_format, date_format),
        )
        return EventMarketsResult(data=result.payload, telemetry=result.telemetry)

    @staticmethod
    def _query(
        markets: Sequence[str] | str,
        regions: str | None,
        odds_format: str | None,
        date_format: str | None,
    ) -> dict[str, Any]:
        return {
            "regions": regions or settings.default_regions,
            "markets": markets,
            "oddsFormat": odds_format or settings.default_odds_format,
            "dateFormat": date_format or settings.default_date_format,
        }
