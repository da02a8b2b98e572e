from pydantic import BaseModel

from odds_gateway.schemas.common import OddsFormat, Telemetry


class ParlayResult(BaseModel):
    """Combined price of independent legs.

    decimal_odds is rounded to 6 places, implied_probability (a percentage)
    to 4 places.
    """

    format: OddsFormat
    legs: int
    decimal_odds: float
    american_odds: int
    implied_probability: float


class ParlayResponse(BaseModel):
    result: ParlayResult
    telemetry: Telemetry
