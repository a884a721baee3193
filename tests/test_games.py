# Area: Catalog Tests
"""Tests for the game, role and format catalog."""

import pytest

from escrims import (
    COUNTER_STRIKE,
    GAME_CATALOG,
    GAMES,
    LEAGUE_OF_LEGENDS,
    VALORANT,
    NotFoundError,
    Role,
    ScrimFormat,
    ValidationError,
    get_game,
    get_game_by_number,
)


class TestGameLookup:
    """Tests for the module-level game registry."""

    def test_registration_order(self):
        """Test the games are numbered LoL, Valorant, Counter-Strike."""
        assert [g.name for g in GAMES] == ["League of Legends", "Valorant", "Counter-Strike"]
        assert get_game_by_number(3) is COUNTER_STRIKE

    def test_get_game_case_insensitive(self):
        """Test name lookup ignores case and surrounding spaces."""
        assert get_game("  valorant ") is VALORANT

    def test_unknown_game(self):
        """Test unknown names and numbers raise."""
        with pytest.raises(NotFoundError):
            get_game("Chess")
        with pytest.raises(ValidationError):
            get_game_by_number(4)


class TestGame:
    """Tests for role and format tables."""

    def test_roles(self):
        """Test each game's role table."""
        assert [r.name for r in LEAGUE_OF_LEGENDS.roles] == ["Top", "Jungle", "Mid", "ADC", "Support"]
        assert [r.name for r in VALORANT.roles] == ["Duelist", "Initiator", "Controller", "Sentinel"]

    def test_role_belongs_to_one_game(self):
        """Test a same-named role of another game is not valid."""
        cs_support = COUNTER_STRIKE.find_role("support")
        lol_support = LEAGUE_OF_LEGENDS.find_role("Support")
        assert cs_support != lol_support
        assert COUNTER_STRIKE.is_valid_role(cs_support)
        assert not COUNTER_STRIKE.is_valid_role(lol_support)
        assert not COUNTER_STRIKE.is_valid_role(None)

    def test_default_formats(self):
        """Test default formats and their player counts."""
        assert VALORANT.default_format.name == "5v5 Casual"
        assert COUNTER_STRIKE.default_format.total_players == 10
        assert COUNTER_STRIKE.find_format("2v2 wingman").total_players == 4

    def test_find_unknown_role_raises(self):
        """Test looking up a missing role raises NotFoundError."""
        with pytest.raises(NotFoundError):
            VALORANT.find_role("AWPer")

    def test_format_validity(self):
        """Test formats must match the game's table."""
        assert VALORANT.is_valid_format(ScrimFormat("5v5 Swift", 5))
        assert not VALORANT.is_valid_format(ScrimFormat("5v5 Swift", 4))
        assert not ScrimFormat("", 5).is_valid()


class TestStaticGameCatalog:
    """Tests for the GameCatalog implementation."""

    def test_roles_and_formats(self):
        """Test catalog queries by game name."""
        assert len(GAME_CATALOG.roles_for("Counter-Strike")) == 5
        assert len(GAME_CATALOG.formats_for("Valorant")) == 3
        assert GAME_CATALOG.get("League of Legends") is LEAGUE_OF_LEGENDS

    def test_is_valid_role(self):
        """Test role validity, including unknown games."""
        duelist = Role("Valorant", "Duelist")
        assert GAME_CATALOG.is_valid_role("Valorant", duelist) is True
        assert GAME_CATALOG.is_valid_role("Counter-Strike", duelist) is False
        assert GAME_CATALOG.is_valid_role("Chess", duelist) is False
