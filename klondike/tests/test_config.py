"""
Tests for configuration, diagnostics and the CLI.
"""

import pytest

from ..cli import main
from ..config import Settings, load_settings, parse_mode
from ..engine_core.diagnostics import format_stack, format_state, render_stack
from ..engine_core.moves import GameMode
from ..engine_core.state import Card, CardStack, GameState, Rank, Suit, UNKNOWN_CARD


class TestSettings:
    def test_defaults(self):
        settings = load_settings({})
        assert settings == Settings()
        assert settings.mode == GameMode.CLASSIC
        assert settings.seed is None
        assert settings.allowed_origins == ["*"]

    def test_reads_environment(self):
        settings = load_settings({
            "KLONDIKE_ENV": "production",
            "KLONDIKE_MODE": "draw_three",
            "KLONDIKE_SEED": "17",
            "KLONDIKE_LOG_LEVEL": "debug",
            "KLONDIKE_SESSION_TTL": "60",
            "ALLOWED_ORIGINS": "https://a.example, https://b.example",
        })
        assert settings.env == "production"
        assert settings.mode == GameMode.DRAW_THREE
        assert settings.seed == 17
        assert settings.log_level == "DEBUG"
        assert settings.session_ttl == 60
        assert settings.allowed_origins == ["https://a.example", "https://b.example"]

    @pytest.mark.parametrize("env", [
        {"KLONDIKE_SEED": "abc"},
        {"KLONDIKE_MODE": "spider"},
        {"KLONDIKE_LOG_LEVEL": "LOUD"},
        {"KLONDIKE_SESSION_TTL": "soon"},
        {"KLONDIKE_SESSION_TTL": "0"},
        {"KLONDIKE_SESSION_TTL": "-30"},
    ])
    def test_bad_values_raise(self, env):
        with pytest.raises(ValueError):
            load_settings(env)

    def test_parse_mode(self):
        assert parse_mode(" Classic ") == GameMode.CLASSIC
        assert parse_mode("draw_three") == GameMode.DRAW_THREE


class TestDiagnostics:
    def test_format_stack(self):
        stack = CardStack("tableau:1", 19, hideable=True, last_modified=3)
        stack.load([Card.dealt(Suit.SPADES, Rank.TEN), Card.dealt(Suit.HEARTS, Rank.ACE, face_up=True)], 3)
        assert format_stack(stack) == "(3, 2): 02 10 0  01 01 1"

    def test_format_unknown_and_empty(self):
        stack = CardStack("deck", 24, hideable=True, last_modified=0)
        assert format_stack(stack) == "(0, 0):"
        stack.load([UNKNOWN_CARD], 1)
        assert format_stack(stack) == "(1, 1): 99 99 0"

    def test_format_state_lines(self):
        state = GameState.create(last_modified=2)
        lines = format_state(state).splitlines()
        assert lines[0] == "(2) ---"
        assert lines[1].startswith("deck (2, 0)")
        assert lines[3].startswith("foundation #0 ")
        assert lines[-1].startswith("tableau #6 ")
        assert len(lines) == 14

    def test_render_stack(self):
        stack = CardStack("tableau:2", 19, hideable=True)
        stack.load([UNKNOWN_CARD, Card.dealt(Suit.HEARTS, Rank.SEVEN, face_up=True)], 0)
        assert render_stack(stack) == "tableau #2: ?? 7♥"


class TestCLI:
    def test_deal(self, capsys, monkeypatch):
        monkeypatch.delenv("KLONDIKE_SEED", raising=False)
        main(["deal", "--seed", "3"])
        out = capsys.readouterr().out
        assert "Player view:" in out
        assert "tableau #6: ?? ?? ?? ?? ?? ??" in out

    def test_demo_runs_to_recycle(self, capsys):
        main(["demo", "--seed", "3", "--mode", "classic"])
        out = capsys.readouterr().out
        assert "Deck recycled after 24 draw(s) in classic mode" in out
        assert out.count("--- client") == 26

    def test_demo_draw_three(self, capsys):
        main(["demo", "--seed", "3", "--mode", "draw_three"])
        assert "after 8 draw(s)" in capsys.readouterr().out

    def test_no_command_exits(self):
        with pytest.raises(SystemExit):
            main([])
