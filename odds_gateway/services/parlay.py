"""Parlay pricing from American or decimal legs.

Legs are treated as statistically independent, so the combined decimal
price is the product of the leg prices. Pure functions, no I/O.
"""

import math
from collections.abc import Iterable

from odds_gateway.exceptions import InvalidLeg, NoLegs, OddsGatewayError, UnknownFormat
from odds_gateway.schemas import OddsFormat, ParlayResult

DECIMAL_PLACES = 6
PROBABILITY_PLACES = 4


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def american_to_decimal(american: float) -> float:
    """Convert American odds to decimal odds (+150 -> 2.5, -200 -> 1.5)."""
    if american == 0:
        raise InvalidLeg("American odds cannot be 0", value=american)
    if american > 0:
        return 1 + american / 100
    return 1 + 100 / abs(american)


def decimal_to_american(decimal_odds: float) -> int:
    """Convert decimal odds to American odds, rounded half away from zero."""
    if decimal_odds <= 1:
        raise InvalidLeg("Decimal odds must be greater than 1", value=decimal_odds)
    american = (decimal_odds - 1) * 100 if decimal_odds >= 2 else -100 / (decimal_odds - 1)
    if not math.isfinite(american):
        raise InvalidLeg("Decimal odds are too large to express as American odds", value=decimal_odds)
    return _round_half_away(american)


def implied_probability(decimal_odds: float) -> float:
    """Implied probability in percent, clamped to [0, 100]."""
    probability = min(max(1 / decimal_odds, 0.0), 1.0)
    return round(probability * 100, PROBABILITY_PLACES)


def _parse_number(raw: str, index: int) -> float:
    try:
        value = float(raw)
    except ValueError:
        raise InvalidLeg(f"Leg {index} is not a number: {raw!r}", value=raw, index=index) from None
    if not math.isfinite(value):
        raise InvalidLeg(f"Leg {index} is not a finite number: {raw!r}", value=raw, index=index)
    return value


def parse_leg(raw: str, odds_format: OddsFormat, index: int = 0) -> float:
    """Parse one leg in the declared format and return its decimal price."""
    value = _parse_number(raw, index)
    if odds_format is OddsFormat.AMERICAN:
        if value == 0:
            raise InvalidLeg(f"Leg {index}: American odds cannot be 0", value=raw, index=index)
        decimal_odds = american_to_decimal(value)
    else:
        decimal_odds = value
    if decimal_odds <= 1:
        raise InvalidLeg(f"Leg {index}: decimal odds must be greater than 1", value=raw, index=index)
    return decimal_odds


def price_parlay(odds_format: str | OddsFormat, legs: Iterable[str | int | float]) -> ParlayResult:
    """Combine independent legs into one price.

    Every leg is parsed in the declared format; there is no per-leg
    auto-detection. Blank legs are ignored.

    Raises:
        UnknownFormat: format is neither "american" nor "decimal"
        NoLegs: nothing left after dropping blanks
        InvalidLeg: a leg is not a number or does not price above 1.0 in
            decimal, or the combined price overflows
    """
    try:
        fmt = OddsFormat(odds_format.strip().lower() if isinstance(odds_format, str) else odds_format)
    except ValueError:
        raise UnknownFormat(odds_format) from None

    cleaned = [str(leg).strip() for leg in legs if leg is not None and str(leg).strip()]
    if not cleaned:
        raise NoLegs()

    combined = 1.0
    for index, raw in enumerate(cleaned):
        combined *= parse_leg(raw, fmt, index)

    if not math.isfinite(combined):
        raise InvalidLeg("Combined decimal odds overflow", value=",".join(cleaned))
    if combined <= 1:
        # Unreachable once every leg is > 1
        raise OddsGatewayError(f"Combined decimal odds {combined} <= 1", code="INVARIANT_VIOLATION")

    return ParlayResult(
        format=fmt,
        legs=len(cleaned),
        decimal_odds=round(combined, DECIMAL_PLACES),
        american_odds=decimal_to_american(combined),
        implied_probability=implied_probability(combined),
    )
