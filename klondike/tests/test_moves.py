"""
Tests for the move primitive and the draw/recycle engine.
"""

import pytest

from ..engine_core.errors import CapacityError
from ..engine_core.moves import (
    DECK_RECYCLED,
    GameMode,
    move_card,
    pull_from_deck,
    turn_top_card,
)
from ..engine_core.state import Card, CardStack, GameState, Rank, Suit


class TestMoveCard:
    """Tests for move_card."""

    def test_moves_top_card(self):
        src = CardStack("tableau:0", 19, hideable=True, last_modified=0)
        dst = CardStack("foundation:0", 13, last_modified=0)
        bottom = Card.dealt(Suit.CLUBS, Rank.TWO)
        top = Card.dealt(Suit.HEARTS, Rank.ACE, face_up=True)
        src.load([bottom, top], 0)

        assert move_card(dst, src, 3)

        assert dst.cards == [top]
        assert src.cards == [bottom]
        assert dst.last_modified == 3
        assert src.last_modified == 3

    def test_empty_source_fails_without_side_effects(self):
        src = CardStack("waste", 24, last_modified=2)
        dst = CardStack("deck", 24, hideable=True, last_modified=1)
        dst.push(Card.dealt(Suit.SPADES, Rank.NINE))

        assert not move_card(dst, src, 7)

        assert src.count == 0
        assert dst.count == 1
        assert src.last_modified == 2
        assert dst.last_modified == 1

    def test_full_destination_raises_without_side_effects(self):
        dst = CardStack("foundation:0", 1, last_modified=0)
        dst.push(Card.dealt(Suit.HEARTS, Rank.ACE, face_up=True))
        src = CardStack("waste", 24, last_modified=0)
        src.push(Card.dealt(Suit.HEARTS, Rank.TWO, face_up=True))

        with pytest.raises(CapacityError):
            move_card(dst, src, 1)

        assert src.count == 1
        assert dst.count == 1
        assert src.last_modified == 0


class TestClassicDraw:
    """Classic draw scenario over a known 24-card deck."""

    def test_each_draw_moves_one_face_up(self, known_deck_state):
        shadow = known_deck_state
        expected_order = list(reversed(shadow.deck.cards))

        for generation in range(1, 25):
            assert pull_from_deck(shadow, GameMode.CLASSIC, generation) == 1
            assert shadow.waste.count == generation
            assert shadow.waste.top_card.face_up
            assert shadow.last_modified == generation

        assert shadow.deck.is_empty
        assert [c.turned(False) for c in shadow.waste.cards] == expected_order

    def test_recycle_after_deck_exhausted(self, known_deck_state):
        shadow = known_deck_state
        for generation in range(1, 25):
            pull_from_deck(shadow, GameMode.CLASSIC, generation)
        waste_before = list(shadow.waste.cards)

        assert pull_from_deck(shadow, GameMode.CLASSIC, 25) == DECK_RECYCLED

        assert shadow.waste.is_empty
        assert shadow.deck.count == 24
        assert not any(c.face_up for c in shadow.deck.cards)
        assert shadow.deck.cards == [c.turned(False) for c in reversed(waste_before)]
        assert shadow.last_modified == 25
        assert shadow.deck.last_modified == 25
        assert shadow.waste.last_modified == 25

    def test_recycle_restores_original_deck_order(self, known_deck_state):
        """Drawing everything then recycling gives the deck back as dealt."""
        shadow = known_deck_state
        original = list(shadow.deck.cards)
        for generation in range(1, 26):
            pull_from_deck(shadow, GameMode.CLASSIC, generation)
        assert shadow.deck.cards == original

    def test_recycled_is_distinct_from_counts(self):
        assert DECK_RECYCLED < 0
        assert DECK_RECYCLED not in range(0, GameMode.DRAW_THREE.draw_count + 1)


class TestDrawThree:
    def test_draws_three(self, known_deck_state):
        shadow = known_deck_state
        assert pull_from_deck(shadow, GameMode.DRAW_THREE, 1) == 3
        assert shadow.waste.count == 3
        assert all(c.face_up for c in shadow.waste.cards)
        assert shadow.deck.count == 21

    def test_partial_draw_when_deck_runs_out(self, known_deck_state):
        shadow = known_deck_state
        shadow.deck.load(shadow.deck.cards[:2], 0)

        assert pull_from_deck(shadow, GameMode.DRAW_THREE, 1) == 2
        assert shadow.deck.is_empty
        assert shadow.waste.count == 2

    def test_draw_count(self):
        assert GameMode.CLASSIC.draw_count == 1
        assert GameMode.DRAW_THREE.draw_count == 3


class TestEmptyDraw:
    def test_nothing_to_draw(self):
        shadow = GameState.create(last_modified=4)
        assert pull_from_deck(shadow, GameMode.CLASSIC, 5) == 0
        assert shadow.last_modified == 4
        assert shadow.deck.last_modified == 4
        assert shadow.waste.last_modified == 4


class TestTurnTopCard:
    def test_turns_face_down_top(self):
        stack = CardStack("tableau:2", 19, hideable=True, last_modified=0)
        stack.push(Card.dealt(Suit.DIAMONDS, Rank.SIX))

        assert turn_top_card(stack, 4)
        assert stack.top_card.face_up
        assert stack.last_modified == 4

    def test_already_face_up_or_empty(self):
        stack = CardStack("tableau:2", 19, hideable=True, last_modified=0)
        assert not turn_top_card(stack, 1)
        stack.push(Card.dealt(Suit.DIAMONDS, Rank.SIX, face_up=True))
        assert not turn_top_card(stack, 1)
        assert stack.last_modified == 0
