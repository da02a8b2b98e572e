"""Tests for the sport alias resolver."""

import pytest

from odds_gateway.services.sport_alias import SPORT_ALIASES, resolve_sport


class TestResolveSport:
    """Tests for resolve_sport function."""

    @pytest.mark.parametrize(
        "alias,expected",
        [
            ("mlb", "baseball_mlb"),
            ("nfl", "americanfootball_nfl"),
            ("ncaaf", "americanfootball_ncaaf"),
            ("nba", "basketball_nba"),
            ("nhl", "icehockey_nhl"),
            ("epl", "soccer_epl"),
        ],
    )
    def test_known_aliases(self, alias, expected):
        """Documented aliases map to their sport keys."""
        assert resolve_sport(alias) == expected

    def test_every_alias_resolves_to_table_value(self):
        for alias, key in SPORT_ALIASES.items():
            assert resolve_sport(alias) == key

    def test_input_is_trimmed_and_lowercased(self):
        assert resolve_sport("  MLB ") == "baseball_mlb"

    def test_sport_key_passes_through(self):
        """Anything containing the delimiter is trusted as a sport key."""
        assert resolve_sport("basketball_euroleague") == "basketball_euroleague"
        assert resolve_sport("baseball_mlb") == "baseball_mlb"

    def test_unknown_alias_returns_none(self):
        assert resolve_sport("curling") is None
        assert resolve_sport("xyz") is None

    @pytest.mark.parametrize("value", ["", "   ", None])
    def test_empty_input_returns_none(self, value):
        assert resolve_sport(value) is None
