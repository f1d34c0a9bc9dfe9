"""
Moves - The card transfer primitive and the deck/waste cycle.

Nothing here checks Klondike placement rules. `move_card` is a
mechanical transfer; legality belongs to whoever calls it.
"""

from __future__ import annotations
from enum import Enum

from .state import CardStack, GameState

# Returned by pull_from_deck when the waste was turned back into the deck.
DECK_RECYCLED = -1


class GameMode(Enum):
    """Draw variants. The value selects the batch size: 1 + 2 * value."""
    CLASSIC = 0
    DRAW_THREE = 1

    @property
    def draw_count(self) -> int:
        return 1 + 2 * self.value


def move_card(destination: CardStack, source: CardStack, generation: int) -> bool:
    """
    Move the top card of source onto destination.

    Returns False, touching nothing, when source is empty. On success both
    stacks are stamped with `generation`. Raises CapacityError, touching
    nothing, when destination is full.
    """
    if source.is_empty:
        return False

    destination.push(source.top_card)
    source.pop()
    destination.last_modified = generation
    source.last_modified = generation
    return True


def pull_from_deck(shadow: GameState, mode: GameMode, generation: int) -> int:
    """
    Draw from the deck into the waste, or recycle the waste.

    Returns the number of cards drawn (0 when deck and waste are both
    empty), or DECK_RECYCLED when the deck was empty and the waste has
    been turned back over into it. Recycling reverses the pile order.
    """
    if shadow.deck.is_empty and not shadow.waste.is_empty:
        while not shadow.waste.is_empty:
            move_card(shadow.deck, shadow.waste, generation)
            shadow.deck.turn_top(face_up=False)
        shadow.last_modified = generation
        return DECK_RECYCLED

    drawn = 0
    for _ in range(mode.draw_count):
        if not move_card(shadow.waste, shadow.deck, generation):
            break
        shadow.waste.turn_top(face_up=True)
        shadow.last_modified = generation
        drawn += 1

    return drawn


def turn_top_card(stack: CardStack, generation: int) -> bool:
    """
    Turn the top card of a stack face up.

    Returns False when the stack is empty or its top card is already
    face up.
    """
    top = stack.top_card
    if top is None or top.face_up:
        return False
    stack.turn_top(face_up=True)
    stack.last_modified = generation
    return True
