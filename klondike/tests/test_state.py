"""
Tests for cards, stacks and the aggregate state.

Tests:
- Card variants and structural equality
- Stack push/pop and capacity
- Stack references
"""

import pytest

from ..engine_core.errors import CapacityError, UnknownStackError
from ..engine_core.setup import build_deck
from ..engine_core.state import (
    Card,
    CardKind,
    CardStack,
    GameState,
    Rank,
    Suit,
    EMPTY_CARD,
    UNKNOWN_CARD,
    CARDS_IN_PLAY,
    DECK_CAPACITY,
    FOUNDATION_CAPACITY,
    TABLEAU_CAPACITY,
    TABLEAU_COUNT,
)


class TestCard:
    """Tests for card values."""

    def test_sentinels_compare_by_variant(self):
        assert EMPTY_CARD == Card(kind=CardKind.EMPTY)
        assert UNKNOWN_CARD == Card(kind=CardKind.UNKNOWN)
        assert EMPTY_CARD != UNKNOWN_CARD

    def test_sentinels_are_face_down_without_identity(self):
        for card in (EMPTY_CARD, UNKNOWN_CARD):
            assert card.suit is None
            assert card.rank is None
            assert not card.face_up
            assert not card.is_real

    def test_dealt_card_needs_identity(self):
        with pytest.raises(ValueError):
            Card(kind=CardKind.DEALT, suit=Suit.HEARTS)

    def test_sentinel_cannot_carry_identity(self):
        with pytest.raises(ValueError):
            Card(kind=CardKind.UNKNOWN, suit=Suit.CLUBS, rank=Rank.ACE)
        with pytest.raises(ValueError):
            Card(kind=CardKind.EMPTY, face_up=True)

    def test_equality_includes_orientation(self):
        down = Card.dealt(Suit.SPADES, Rank.QUEEN)
        up = down.turned(face_up=True)
        assert down != up
        assert up.turned(face_up=False) == down

    def test_cannot_turn_sentinel(self):
        with pytest.raises(ValueError):
            UNKNOWN_CARD.turned(face_up=True)

    def test_str(self):
        assert str(Card.dealt(Suit.SPADES, Rank.QUEEN, face_up=True)) == "Q♠"
        assert str(Card.dealt(Suit.HEARTS, Rank.TEN)) == "[10♥]"
        assert str(UNKNOWN_CARD) == "??"
        assert str(EMPTY_CARD) == "--"

    def test_suit_colors(self):
        assert Suit.HEARTS.color == "red"
        assert Suit.DIAMONDS.color == "red"
        assert Suit.SPADES.color == "black"
        assert Suit.CLUBS.color == "black"


class TestCardStack:
    """Tests for stack operations."""

    def test_push_and_pop(self):
        stack = CardStack("tableau:0", TABLEAU_CAPACITY)
        card = Card.dealt(Suit.CLUBS, Rank.SEVEN, face_up=True)
        stack.push(card)

        assert stack.count == 1
        assert stack.top_card == card
        assert stack.pop() == card
        assert stack.is_empty

    def test_pop_empty_returns_none(self):
        stack = CardStack("waste", 24)
        assert stack.pop() is None
        assert stack.count == 0

    def test_push_beyond_capacity_raises(self):
        stack = CardStack("foundation:0", FOUNDATION_CAPACITY)
        for rank in Rank:
            stack.push(Card.dealt(Suit.HEARTS, rank, face_up=True))

        with pytest.raises(CapacityError):
            stack.push(Card.dealt(Suit.SPADES, Rank.ACE, face_up=True))
        assert stack.count == FOUNDATION_CAPACITY

    def test_push_empty_slot_rejected(self):
        stack = CardStack("waste", 24)
        with pytest.raises(ValueError):
            stack.push(EMPTY_CARD)

    def test_slot_past_top_is_empty(self):
        stack = CardStack("deck", DECK_CAPACITY)
        stack.push(Card.dealt(Suit.DIAMONDS, Rank.TWO))
        assert stack.slot(0).is_real
        assert stack.slot(1) == EMPTY_CARD
        with pytest.raises(IndexError):
            stack.slot(DECK_CAPACITY)

    def test_load_respects_capacity(self):
        stack = CardStack("foundation:1", FOUNDATION_CAPACITY)
        with pytest.raises(CapacityError):
            stack.load(build_deck()[:14], 3)


class TestGameState:
    """Tests for the aggregate state."""

    def test_create_layout(self):
        state = GameState.create()
        assert len(state.foundations) == 4
        assert len(state.tableaus) == TABLEAU_COUNT
        assert len(state.stacks()) == 13
        assert all(stack.last_modified == -1 for stack in state.stacks())

    def test_hideable_flags(self):
        state = GameState.create()
        assert state.deck.hideable
        assert all(t.hideable for t in state.tableaus)
        assert not state.waste.hideable
        assert not any(f.hideable for f in state.foundations)

    def test_resolve(self):
        state = GameState.create()
        assert state.resolve("deck") is state.deck
        assert state.resolve("waste") is state.waste
        assert state.resolve("foundation:3") is state.foundations[3]
        assert state.resolve("tableau:6") is state.tableaus[6]

    def test_resolve_unknown(self):
        state = GameState.create()
        with pytest.raises(UnknownStackError):
            state.resolve("tableau:7")

    def test_capacities_cover_worst_case(self):
        """Every stack can hold the most cards the game can ever put there."""
        state = GameState.create()
        deck_and_waste = CARDS_IN_PLAY - sum(range(1, TABLEAU_COUNT + 1))
        assert state.deck.capacity >= deck_and_waste
        assert state.waste.capacity >= deck_and_waste
        # Six face-down cards under a full king-to-ace run.
        assert state.tableaus[-1].capacity >= (TABLEAU_COUNT - 1) + len(Rank)
        assert all(f.capacity >= len(Rank) for f in state.foundations)

    def test_clone_is_independent(self):
        state = GameState.create()
        copy = state.clone()
        copy.deck.push(Card.dealt(Suit.HEARTS, Rank.ACE))
        assert state.deck.is_empty
