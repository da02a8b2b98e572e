"""Tests for the event normalizer."""

import copy

import pytest

from odds_gateway.exceptions import MalformedEvent
from odds_gateway.services.normalizer import normalize_event, normalize_events, pick


def test_normalize_full_event(sample_raw_event):
    event = normalize_event(sample_raw_event)

    assert event.id == "e912304de2b2ce35b473ce2ecd3d1502"
    assert event.sport_key == "baseball_mlb"
    assert event.commence_time == "2026-10-18T23:05:00Z"
    assert event.home == "New York Yankees"
    assert event.away == "Boston Red Sox"
    assert [b.key for b in event.bookmakers] == ["draftkings", "fanduel"]
    assert event.bookmakers[0].title == "DraftKings"

    h2h, spreads = event.bookmakers[0].markets
    assert h2h.key == "h2h"
    assert [(o.name, o.price, o.point) for o in h2h.outcomes] == [
        ("Boston Red Sox", 125, None),
        ("New York Yankees", -145, None),
    ]
    assert spreads.outcomes[1].point == -1.5


def test_alternate_field_names(sample_listing):
    event = normalize_events(sample_listing)[1]

    assert event.id == "evt_2"
    assert event.sport_key == "baseball_mlb"
    assert event.home == "Los Angeles Dodgers"
    assert event.away == "San Diego Padres"


def test_first_non_null_candidate_wins():
    event = normalize_event({"id": None, "game_id": "g1", "event_id": "e1"})
    assert event.id == "g1"


def test_absent_fields_become_explicit_nulls_and_empty_lists():
    events = normalize_events([
        {"id": "a"},
        {"id": "b", "bookmakers": [{"key": "bk"}]},
        {"id": "c", "bookmakers": [{"key": "bk", "markets": [{"key": "totals"}]}]},
        {"id": "d", "bookmakers": [{"markets": [{"outcomes": [{"name": "Over", "price": -110}]}]}]},
    ])
    dumped = [e.model_dump() for e in events]

    assert dumped[0] == {
        "id": "a",
        "sport_key": None,
        "commence_time": None,
        "home": None,
        "away": None,
        "bookmakers": [],
    }
    assert dumped[1]["bookmakers"][0] == {"key": "bk", "title": None, "markets": []}
    assert dumped[2]["bookmakers"][0]["markets"][0] == {"key": "totals", "outcomes": []}
    assert dumped[3]["bookmakers"][0]["markets"][0]["outcomes"][0] == {
        "name": "Over",
        "price": -110,
        "point": None,
    }


def test_null_collections_become_empty():
    event = normalize_event({"id": "a", "bookmakers": None})
    assert event.bookmakers == []


def test_numeric_strings_coerced():
    event = normalize_event({
        "id": 42,
        "bookmakers": [{"key": "b", "markets": [{"key": "spreads", "outcomes": [
            {"name": "Home", "odds": "1.91", "line": "-3.5"},
            {"name": "Away", "price": "-110"},
        ]}]}],
    })
    outcomes = event.bookmakers[0].markets[0].outcomes

    assert event.id == "42"
    assert outcomes[0].price == 1.91
    assert outcomes[0].point == -3.5
    assert outcomes[1].price == -110


def test_unix_commence_time_kept():
    event = normalize_event({"id": "a", "commence_time": 1792364700})
    assert event.commence_time == 1792364700


def test_order_preserved():
    raw = [{"id": str(i)} for i in (3, 1, 2)]
    assert [e.id for e in normalize_events(raw)] == ["3", "1", "2"]


def test_input_not_mutated(sample_listing):
    before = copy.deepcopy(sample_listing)
    normalize_events(sample_listing)
    assert sample_listing == before


def test_empty_listing():
    assert normalize_events([]) == []


def test_non_object_event_reports_index():
    with pytest.raises(MalformedEvent) as exc:
        normalize_events([{"id": "a"}, "oops"])
    assert exc.value.index == 1
    assert exc.value.details["index"] == 1


def test_bookmakers_must_be_a_list():
    with pytest.raises(MalformedEvent) as exc:
        normalize_events([{"id": "a"}, {"id": "b"}, {"id": "c", "bookmakers": {"DraftKings": []}}])
    assert exc.value.index == 2


def test_nested_item_must_be_an_object():
    with pytest.raises(MalformedEvent):
        normalize_event({"id": "a", "bookmakers": [{"key": "b", "markets": ["h2h"]}]})


def test_non_numeric_price_is_malformed():
    with pytest.raises(MalformedEvent):
        normalize_event({"bookmakers": [{"markets": [{"outcomes": [{"name": "X", "price": "evens"}]}]}]})


def test_listing_must_be_a_list():
    with pytest.raises(MalformedEvent):
        normalize_events({"id": "a"})


def test_pick():
    assert pick({"b": 0, "a": None}, ("a", "b")) == 0
    assert pick({}, ("a", "b")) is None
