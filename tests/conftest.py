"""Global fixtures for odds-gateway tests."""

from typing import Any
from unittest.mock import patch

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from odds_gateway.config import settings
from odds_gateway.main import app
from odds_gateway.services.cache import TTLCache
from odds_gateway.services.metrics import MetricsService
from odds_gateway.services.odds_client import OddsAPIClient

TEST_API_KEY = "test_api_key"
TEST_BASE_URL = "https://api.test.com/v4"


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeUpstream:
    """Stand-in for The Odds API behind httpx.MockTransport."""

    def __init__(self, payload: Any):
        self.payload = payload
        self.status_code = 200
        self.text: str | None = None
        self.headers = {
            "x-requests-used": "10",
            "x-requests-remaining": "490",
            "x-requests-last": "1",
        }
        self.error: Exception | None = None
        self.requests: list[httpx.Request] = []

    @property
    def calls(self) -> int:
        return len(self.requests)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.text is not None:
            return httpx.Response(self.status_code, text=self.text, headers=self.headers)
        return httpx.Response(self.status_code, json=self.payload, headers=self.headers)


@pytest.fixture
def sample_raw_event() -> dict[str, Any]:
    """Event as returned by /sports/{sport}/odds."""
    return {
        "id": "e912304de2b2ce35b473ce2ecd3d1502",
        "sport_key": "baseball_mlb",
        "sport_title": "MLB",
        "commence_time": "2026-10-18T23:05:00Z",
        "home_team": "New York Yankees",
        "away_team": "Boston Red Sox",
        "bookmakers": [
            {
                "key": "draftkings",
                "title": "DraftKings",
                "last_update": "2026-10-18T12:00:00Z",
                "markets": [
                    {
                        "key": "h2h",
                        "outcomes": [
                            {"name": "Boston Red Sox", "price": 125},
                            {"name": "New York Yankees", "price": -145},
                        ],
                    },
                    {
                        "key": "spreads",
                        "outcomes": [
                            {"name": "Boston Red Sox", "price": -160, "point": 1.5},
                            {"name": "New York Yankees", "price": 135, "point": -1.5},
                        ],
                    },
                ],
            },
            {
                "key": "fanduel",
                "title": "FanDuel",
                "markets": [
                    {
                        "key": "totals",
                        "outcomes": [
                            {"name": "Over", "price": -110, "point": 8.5},
                            {"name": "Under", "price": -110, "point": 8.5},
                        ],
                    }
                ],
            },
        ],
    }


@pytest.fixture
def sample_listing(sample_raw_event) -> list[dict[str, Any]]:
    """Two events, the second in the alternate field naming."""
    return [
        sample_raw_event,
        {
            "game_id": "evt_2",
            "sportKey": "baseball_mlb",
            "commence_time": "2026-10-19T00:10:00Z",
            "homeTeam": "Los Angeles Dodgers",
            "awayTeam": "San Diego Padres",
        },
    ]


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock) -> TTLCache:
    return TTLCache(30, clock=clock)


@pytest.fixture
def metrics() -> MetricsService:
    return MetricsService()


@pytest.fixture
def upstream(sample_listing) -> FakeUpstream:
    return FakeUpstream(sample_listing)


@pytest.fixture
def make_client(cache, metrics, upstream):
    """Build an OddsAPIClient wired to the fake upstream."""

    def _make(**kwargs) -> OddsAPIClient:
        options = {
            "base_url": TEST_BASE_URL,
            "api_key": TEST_API_KEY,
            "key_location": "query",
            "metrics": metrics,
            "transport": httpx.MockTransport(upstream.handler),
        }
        options.update(kwargs)
        return OddsAPIClient(cache, **options)

    return _make


@pytest.fixture
def odds_client(make_client) -> OddsAPIClient:
    return make_client()


@pytest_asyncio.fixture
async def test_client(odds_client, metrics):
    """Async test client for FastAPI with a fresh cache per test."""
    with patch.object(settings, "api_key", ""):
        app.state.odds_client = odds_client
        app.state.metrics = metrics
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
