from fastapi import Request

from odds_gateway.services.metrics import MetricsService
from odds_gateway.services.odds_client import OddsAPIClient


def get_odds_client(request: Request) -> OddsAPIClient:
    """Client built once at startup (see lifespan in odds_gateway.main)."""
    return request.app.state.odds_client


def get_metrics(request: Request) -> MetricsService:
    return request.app.state.metrics
