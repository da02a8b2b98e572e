"""Tests for market preset expansion."""

import pytest

from odds_gateway.exceptions import DomainMismatch, InvalidInput, UnknownPreset
from odds_gateway.services.market_presets import (
    MARKET_PRESETS,
    parse_markets,
    resolve_markets,
    resolve_preset,
)


class TestResolvePreset:
    """Tests for resolve_preset function."""

    @pytest.mark.parametrize(
        "name,sport_key,expected",
        [
            ("ml", "americanfootball_nfl", ["h2h"]),
            ("spread", "americanfootball_nfl", ["spreads"]),
            ("total", "icehockey_nhl", ["totals"]),
            ("game", "baseball_mlb", ["h2h", "spreads", "totals"]),
            ("1h", "basketball_nba", ["h2h_h1", "spreads_h1", "totals_h1"]),
            (
                "f5",
                "baseball_mlb",
                ["h2h_1st_5_innings", "spreads_1st_5_innings", "totals_1st_5_innings"],
            ),
            ("props", "basketball_nba", ["player_points", "player_rebounds", "player_assists"]),
        ],
    )
    def test_documented_presets(self, name, sport_key, expected):
        assert resolve_preset(name, sport_key) == expected

    def test_every_preset_is_non_empty(self):
        for preset in MARKET_PRESETS.values():
            assert len(preset.markets) > 0

    def test_name_is_case_insensitive(self):
        assert resolve_preset(" GAME ", "baseball_mlb") == ["h2h", "spreads", "totals"]

    def test_returns_a_copy(self):
        """Callers cannot mutate the static table."""
        markets = resolve_preset("game", "baseball_mlb")
        markets.append("outrights")
        assert resolve_preset("game", "baseball_mlb") == ["h2h", "spreads", "totals"]

    def test_unknown_preset(self):
        with pytest.raises(UnknownPreset) as exc:
            resolve_preset("second_half_props", "baseball_mlb")
        assert exc.value.code == "UNKNOWN_PRESET"
        assert isinstance(exc.value, InvalidInput)

    def test_innings_preset_rejected_outside_baseball(self):
        with pytest.raises(DomainMismatch) as exc:
            resolve_preset("f5", "basketball_nba")
        assert exc.value.details["required_prefix"] == "baseball_"
        assert exc.value.details["sport_key"] == "basketball_nba"

    def test_props_preset_rejected_outside_basketball(self):
        with pytest.raises(DomainMismatch):
            resolve_preset("props", "americanfootball_nfl")


class TestParseMarkets:
    """Tests for parse_markets function."""

    def test_comma_delimited_string(self):
        assert parse_markets("h2h, spreads ,totals") == ["h2h", "spreads", "totals"]

    def test_blanks_and_repeats_dropped(self):
        assert parse_markets("h2h,,spreads,h2h,") == ["h2h", "spreads"]

    def test_list_input(self):
        assert parse_markets(["totals", "h2h"]) == ["totals", "h2h"]

    def test_empty_selector_rejected(self):
        with pytest.raises(InvalidInput):
            parse_markets(" , ")


class TestResolveMarkets:
    """Tests for resolve_markets function."""

    def test_preset_wins_over_markets(self):
        result = resolve_markets("baseball_mlb", preset="ml", markets="totals")
        assert result == ["h2h"]

    def test_explicit_markets_pass_through(self):
        assert resolve_markets("baseball_mlb", markets="h2h,totals") == ["h2h", "totals"]

    def test_default_used_when_nothing_given(self):
        assert resolve_markets("baseball_mlb", default="h2h") == ["h2h"]
