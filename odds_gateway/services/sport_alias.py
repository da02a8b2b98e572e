"""Short sport aliases mapped to The Odds API sport keys."""

SPORT_KEY_DELIMITER = "_"

SPORT_ALIASES: dict[str, str] = {
    "mlb": "baseball_mlb",
    "ncaabase": "baseball_ncaa",
    "nfl": "americanfootball_nfl",
    "ncaaf": "americanfootball_ncaaf",
    "cfl": "americanfootball_cfl",
    "nba": "basketball_nba",
    "ncaab": "basketball_ncaab",
    "wnba": "basketball_wnba",
    "nhl": "icehockey_nhl",
    "mls": "soccer_usa_mls",
    "epl": "soccer_epl",
    "ucl": "soccer_uefa_champs_league",
    "mma": "mma_mixed_martial_arts",
    "ufc": "mma_mixed_martial_arts",
}


def resolve_sport(value: str | None) -> str | None:
    """Resolve an alias or sport key to a canonical sport key.

    Anything already containing the delimiter is trusted as a sport key.
    Returns None for empty input and unknown aliases; never raises.
    """
    if not isinstance(value, str):
        return None
    token = value.strip().lower()
    if not token:
        return None
    if SPORT_KEY_DELIMITER in token:
        return token
    return SPORT_ALIASES.get(token)
