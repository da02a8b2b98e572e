"""Reshape raw provider events into the canonical Event schema.

Each logical field has an ordered tuple of candidate keys; the first one
present with a non-null value wins. Collections default to empty lists and
scalars to None, so every output has the same shape.
"""

from collections.abc import Mapping, Sequence
from numbers import Number
from typing import Any

from odds_gateway.exceptions import MalformedEvent
from odds_gateway.schemas import Bookmaker, Event, Market, Outcome

EVENT_FIELDS: dict[str, tuple[str, ...]] = {
    "id": ("id", "game_id", "event_id", "eventId"),
    "sport_key": ("sport_key", "sportKey"),
    "commence_time": ("commence_time", "commenceTime", "start_time"),
    "home": ("home_team", "homeTeam", "home"),
    "away": ("away_team", "awayTeam", "away"),
    "bookmakers": ("bookmakers", "books"),
}

BOOKMAKER_FIELDS: dict[str, tuple[str, ...]] = {
    "key": ("key", "bookmaker_key", "bookmaker"),
    "title": ("title", "name"),
    "markets": ("markets",),
}

MARKET_FIELDS: dict[str, tuple[str, ...]] = {
    "key": ("key", "market_key", "market"),
    "outcomes": ("outcomes",),
}

OUTCOME_FIELDS: dict[str, tuple[str, ...]] = {
    "name": ("name", "outcome"),
    "price": ("price", "odds"),
    "point": ("point", "line", "handicap"),
}


def pick(raw: Mapping[str, Any], candidates: Sequence[str]) -> Any:
    """Return the first non-null value among candidate keys, else None."""
    for key in candidates:
        value = raw.get(key)
        if value is not None:
            return value
    return None


def _text(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)


def _number(value: Any, field: str) -> int | float | None:
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"{field} must be numeric, got a boolean")
    if isinstance(value, Number):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            return float(text)
        except ValueError:
            raise ValueError(f"{field} must be numeric, got {value!r}") from None
    raise ValueError(f"{field} must be numeric, got {type(value).__name__}")


def _items(value: Any, field: str) -> list[Mapping[str, Any]]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"{field} must be a list, got {type(value).__name__}")
    for i, item in enumerate(value):
        if not isinstance(item, Mapping):
            raise ValueError(f"{field}[{i}] must be an object, got {type(item).__name__}")
    return value


def _outcome(raw: Mapping[str, Any]) -> Outcome:
    return Outcome(
        name=_text(pick(raw, OUTCOME_FIELDS["name"])),
        price=_number(pick(raw, OUTCOME_FIELDS["price"]), "price"),
        point=_number(pick(raw, OUTCOME_FIELDS["point"]), "point"),
    )


def _market(raw: Mapping[str, Any]) -> Market:
    return Market(
        key=_text(pick(raw, MARKET_FIELDS["key"])),
        outcomes=[_outcome(o) for o in _items(pick(raw, MARKET_FIELDS["outcomes"]), "outcomes")],
    )


def _bookmaker(raw: Mapping[str, Any]) -> Bookmaker:
    return Bookmaker(
        key=_text(pick(raw, BOOKMAKER_FIELDS["key"])),
        title=_text(pick(raw, BOOKMAKER_FIELDS["title"])),
        markets=[_market(m) for m in _items(pick(raw, BOOKMAKER_FIELDS["markets"]), "markets")],
    )


def normalize_event(raw: Any, index: int = 0) -> Event:
    """Normalize one raw event; structural problems raise MalformedEvent."""
    if not isinstance(raw, Mapping):
        raise MalformedEvent(
            f"Event {index} must be an object, got {type(raw).__name__}",
            index=index,
        )
    try:
        commence_time = pick(raw, EVENT_FIELDS["commence_time"])
        return Event(
            id=_text(pick(raw, EVENT_FIELDS["id"])),
            sport_key=_text(pick(raw, EVENT_FIELDS["sport_key"])),
            commence_time=commence_time if isinstance(commence_time, int) else _text(commence_time),
            home=_text(pick(raw, EVENT_FIELDS["home"])),
            away=_text(pick(raw, EVENT_FIELDS["away"])),
            bookmakers=[_bookmaker(b) for b in _items(pick(raw, EVENT_FIELDS["bookmakers"]), "bookmakers")],
        )
    except ValueError as e:
        raise MalformedEvent(f"Event {index} is malformed: {e}", index=index) from e


def normalize_events(raw_events: Any) -> list[Event]:
    """Normalize a listing payload, preserving the provider's order."""
    if not isinstance(raw_events, list):
        raise MalformedEvent(f"Expected a list of events, got {type(raw_events).__name__}")
    return [normalize_event(raw, index) for index, raw in enumerate(raw_events)]
