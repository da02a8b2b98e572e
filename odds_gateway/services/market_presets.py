"""Named market bundles expanded to The Odds API market keys."""

from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict

from odds_gateway.exceptions import DomainMismatch, InvalidInput, UnknownPreset


class MarketPreset(BaseModel):
    model_config = ConfigDict(frozen=True)

    markets: tuple[str, ...]
    sport_prefix: str | None = None  # only valid for sport keys starting with this


MARKET_PRESETS: dict[str, MarketPreset] = {
    "ml": MarketPreset(markets=("h2h",)),
    "spread": MarketPreset(markets=("spreads",)),
    "total": MarketPreset(markets=("totals",)),
    "game": MarketPreset(markets=("h2h", "spreads", "totals")),
    "1h": MarketPreset(markets=("h2h_h1", "spreads_h1", "totals_h1")),
    "f5": MarketPreset(
        markets=("h2h_1st_5_innings", "spreads_1st_5_innings", "totals_1st_5_innings"),
        sport_prefix="baseball_",
    ),
    "props": MarketPreset(
        markets=("player_points", "player_rebounds", "player_assists"),
        sport_prefix="basketball_",
    ),
}


def resolve_preset(name: str, sport_key: str) -> list[str]:
    """Expand a preset name into its ordered market keys.

    Raises:
        UnknownPreset: name is not in MARKET_PRESETS
        DomainMismatch: preset is restricted to another sport family
    """
    key = name.strip().lower() if isinstance(name, str) else ""
    preset = MARKET_PRESETS.get(key)
    if preset is None:
        raise UnknownPreset(name)
    if preset.sport_prefix and not (sport_key or "").startswith(preset.sport_prefix):
        raise DomainMismatch(key, sport_key, preset.sport_prefix)
    return list(preset.markets)


def parse_markets(markets: str | Sequence[str]) -> list[str]:
    """Split a comma-delimited selector into tokens, dropping blanks and repeats."""
    if isinstance(markets, str):
        raw = markets.split(",")
    else:
        raw = [str(m) for m in markets]

    tokens: list[str] = []
    for token in raw:
        token = token.strip()
        if token and token not in tokens:
            tokens.append(token)
    if not tokens:
        raise InvalidInput("At least one market is required", field="markets", value=markets)
    return tokens


def resolve_markets(
    sport_key: str,
    *,
    preset: str | None = None,
    markets: str | Sequence[str] | None = None,
    default: str | Sequence[str] = "h2h,spreads,totals",
) -> list[str]:
    """Pick the market selector for a request: preset wins, then explicit markets."""
    if preset:
        return resolve_preset(preset, sport_key)
    if markets:
        return parse_markets(markets)
    return parse_markets(default)
