from fastapi import APIRouter, Query

from odds_gateway.schemas import ParlayResponse, Telemetry
from odds_gateway.services.parlay import price_parlay

router = APIRouter()


@router.get("", response_model=ParlayResponse)
async def get_parlay_price(
    format: str = Query("american", description="american or decimal"),
    legs: str = Query("", description="Comma-separated leg odds, e.g. -110,+150"),
):
    """Price a parlay locally. No upstream call, so telemetry is always local."""
    result = price_parlay(format, legs.split(","))
    return ParlayResponse(result=result, telemetry=Telemetry.local())
