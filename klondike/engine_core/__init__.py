"""
Engine Core - Authoritative solitaire state and its redacted projection.

The engine:
1. Deals a shadow (full-information) state
2. Applies actions to the shadow state via the reducer
3. Projects the shadow state into a client state, hiding face-down cards
"""

from .state import (
    Card,
    CardKind,
    CardStack,
    GameState,
    Rank,
    Suit,
    EMPTY_CARD,
    UNKNOWN_CARD,
)
from .errors import CapacityError, KlondikeError, SessionNotFoundError, UnknownStackError
from .redaction import SyncReport, plain_copy, redacted_copy, update_client_data
from .setup import build_deck, deal, init_game, shuffle_cards
from .moves import DECK_RECYCLED, GameMode, move_card, pull_from_deck, turn_top_card
from .action import Action, ActionType, ActionResult
from .reducer import Reducer, apply_action
from .diagnostics import format_stack, format_state

__all__ = [
    "Card",
    "CardKind",
    "CardStack",
    "GameState",
    "Rank",
    "Suit",
    "EMPTY_CARD",
    "UNKNOWN_CARD",
    "CapacityError",
    "KlondikeError",
    "SessionNotFoundError",
    "UnknownStackError",
    "SyncReport",
    "plain_copy",
    "redacted_copy",
    "update_client_data",
    "build_deck",
    "deal",
    "init_game",
    "shuffle_cards",
    "DECK_RECYCLED",
    "GameMode",
    "move_card",
    "pull_from_deck",
    "turn_top_card",
    "Action",
    "ActionType",
    "ActionResult",
    "Reducer",
    "apply_action",
    "format_stack",
    "format_state",
]
