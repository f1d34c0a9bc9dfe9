"""
Game Setup - Builds, shuffles and deals a fresh Klondike game.

This module handles:
- Creating the 52-card set
- Fisher-Yates shuffling from an injectable random source
- Dealing tableaus 1..7 and the remaining deck
- The first client synchronization
"""

from __future__ import annotations
import logging
import random

from .state import Card, GameState, Rank, Suit, TABLEAU_COUNT
from .redaction import SyncReport, update_client_data
from .diagnostics import format_state

logger = logging.getLogger(__name__)


def build_deck() -> list[Card]:
    """Unshuffled 52 cards, face down, suit by suit from ace to king."""
    return [Card.dealt(suit, rank) for suit in Suit for rank in Rank]


def shuffle_cards(cards: list[Card], rng: random.Random) -> None:
    """Shuffle in place: for i from the end down to 1, swap with j in [0, i]."""
    for i in range(len(cards) - 1, 0, -1):
        j = rng.randint(0, i)
        cards[i], cards[j] = cards[j], cards[i]


def deal(shadow: GameState, generation: int, rng: random.Random | None = None) -> None:
    """
    Deal a new game into the shadow state.

    Tableau k receives k cards taken from the end of the shuffled set,
    with only its top card face up. The 24 cards left over form the deck.
    Every stack and the top-level clock are stamped with `generation`.
    """
    rng = rng or random.SystemRandom()
    cards = build_deck()
    shuffle_cards(cards, rng)

    end = len(cards)
    for k, tableau in enumerate(shadow.tableaus, start=1):
        dealt = cards[end - k:end]
        dealt[-1] = dealt[-1].turned(face_up=True)
        tableau.load(dealt, generation)
        end -= k

    for foundation in shadow.foundations:
        foundation.clear(generation)
    shadow.waste.clear(generation)
    shadow.deck.load(cards[:end], generation)

    shadow.last_modified = generation
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Dealt shadow state:\n%s", format_state(shadow))


def init_game(
    shadow: GameState,
    client: GameState,
    generation: int,
    rng: random.Random | None = None,
) -> SyncReport:
    """
    Start a game: deal the shadow state and populate the client view.

    The client clocks, top-level and per stack, must all be behind
    `generation` so the first synchronization copies every stack.
    """
    if client.last_modified >= generation:
        raise ValueError(
            f"Client clock {client.last_modified} must be behind generation {generation}"
        )
    for stack in client.stacks():
        if stack.last_modified >= generation:
            raise ValueError(
                f"Client stack {stack.name} clock {stack.last_modified} "
                f"must be behind generation {generation}"
            )
    if len(shadow.tableaus) != TABLEAU_COUNT:
        raise ValueError(f"Expected {TABLEAU_COUNT} tableaus, got {len(shadow.tableaus)}")

    deal(shadow, generation, rng)
    return update_client_data(client, shadow)
