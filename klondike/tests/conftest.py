"""
Pytest fixtures for Klondike tests.
"""

import random

import pytest

from ..engine_core.setup import build_deck, init_game
from ..engine_core.state import GameState
from ..session import SessionManager

SEED = 20160501


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for reproducible deals."""
    return random.Random(SEED)


@pytest.fixture
def empty_states() -> tuple[GameState, GameState]:
    """Fresh shadow and client states, every clock at -1."""
    return GameState.create(), GameState.create()


@pytest.fixture
def dealt_game(rng) -> tuple[GameState, GameState]:
    """(shadow, client) right after init_game at generation 0."""
    shadow = GameState.create()
    client = GameState.create()
    init_game(shadow, client, 0, rng)
    return shadow, client


@pytest.fixture
def known_deck_state() -> GameState:
    """
    Shadow state whose deck holds the first 24 cards of an unshuffled set,
    face down, with everything else empty. Clocks at generation 0.
    """
    shadow = GameState.create(last_modified=0)
    shadow.deck.load(build_deck()[:24], 0)
    return shadow


@pytest.fixture
def session_manager() -> SessionManager:
    return SessionManager()
