"""
Game State - Cards, stacks and the aggregate solitaire state.

Design principles:
- Cards are tagged values: a dealt card, an empty slot, or an unknown card
- Stacks carry an explicit length, a fixed capacity and a logical clock
- Two GameState instances never share storage (shadow vs. client)
"""

from __future__ import annotations
from copy import deepcopy
from dataclasses import dataclass, field, replace
from enum import Enum

from .errors import CapacityError, UnknownStackError


class Suit(Enum):
    """Card suits, in dealing order."""
    HEARTS = 1
    SPADES = 2
    DIAMONDS = 3
    CLUBS = 4

    @property
    def color(self) -> str:
        if self in (Suit.HEARTS, Suit.DIAMONDS):
            return "red"
        return "black"

    @property
    def symbol(self) -> str:
        return {
            Suit.HEARTS: "♥",
            Suit.SPADES: "♠",
            Suit.DIAMONDS: "♦",
            Suit.CLUBS: "♣",
        }[self]


class Rank(Enum):
    """Card ranks, ace low."""
    ACE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13

    @property
    def label(self) -> str:
        return {1: "A", 11: "J", 12: "Q", 13: "K"}.get(self.value, str(self.value))


class CardKind(Enum):
    """What a card value stands for."""
    DEALT = "dealt"  # A real card with known suit and rank
    EMPTY = "empty"  # No card at all
    UNKNOWN = "unknown"  # A face-down card as seen by the player


@dataclass(frozen=True)
class Card:
    """
    A card value.

    Equality is structural: two cards are equal when kind, suit, rank
    and orientation all match. The EMPTY_CARD and UNKNOWN_CARD sentinels
    carry no suit or rank and are always face down.
    """
    kind: CardKind
    suit: Suit | None = None
    rank: Rank | None = None
    face_up: bool = False

    def __post_init__(self):
        if self.kind == CardKind.DEALT:
            if self.suit is None or self.rank is None:
                raise ValueError("A dealt card needs a suit and a rank")
        elif self.suit is not None or self.rank is not None or self.face_up:
            raise ValueError(f"{self.kind.value} card cannot carry identity or face up")

    @classmethod
    def dealt(cls, suit: Suit, rank: Rank, face_up: bool = False) -> Card:
        """Factory for a real card."""
        return cls(kind=CardKind.DEALT, suit=suit, rank=rank, face_up=face_up)

    @property
    def is_real(self) -> bool:
        return self.kind == CardKind.DEALT

    @property
    def is_empty_slot(self) -> bool:
        return self.kind == CardKind.EMPTY

    @property
    def is_unknown(self) -> bool:
        return self.kind == CardKind.UNKNOWN

    def turned(self, face_up: bool) -> Card:
        """Return the same card with the given orientation."""
        if not self.is_real:
            raise ValueError(f"Cannot turn an {self.kind.value} card")
        return replace(self, face_up=face_up)

    def __str__(self):
        if self.is_empty_slot:
            return "--"
        if self.is_unknown:
            return "??"
        text = f"{self.rank.label}{self.suit.symbol}"
        return text if self.face_up else f"[{text}]"


EMPTY_CARD = Card(kind=CardKind.EMPTY)
UNKNOWN_CARD = Card(kind=CardKind.UNKNOWN)


# Capacities: 52 cards minus the 28 dealt to the tableaus leaves 24 for
# deck/waste; a tableau holds at most 6 face-down cards plus a full suit run.
DECK_CAPACITY = 24
WASTE_CAPACITY = 24
FOUNDATION_CAPACITY = 13
TABLEAU_CAPACITY = 19

FOUNDATION_COUNT = 4
TABLEAU_COUNT = 7
CARDS_IN_PLAY = 52


@dataclass
class CardStack:
    """
    An ordered pile of cards; the last element is the top.

    The length of `cards` is the only source of truth for the count.
    `last_modified` is the generation at which this stack last changed.
    `hideable` marks stacks that may hold face-down cards and therefore
    must be redacted when projected to the client.
    """
    name: str
    capacity: int
    hideable: bool = False
    cards: list[Card] = field(default_factory=list)
    last_modified: int = -1

    @property
    def count(self) -> int:
        return len(self.cards)

    @property
    def is_empty(self) -> bool:
        return len(self.cards) == 0

    @property
    def is_full(self) -> bool:
        return len(self.cards) >= self.capacity

    @property
    def top_card(self) -> Card | None:
        """Get the top card of the stack."""
        return self.cards[-1] if self.cards else None

    def push(self, card: Card) -> None:
        """Put a card on top. Raises CapacityError when full."""
        if card.is_empty_slot:
            raise ValueError("Cannot push an empty slot onto a stack")
        if self.is_full:
            raise CapacityError(self.name, self.capacity)
        self.cards.append(card)

    def pop(self) -> Card | None:
        """Take the top card, or None if the stack is empty."""
        if not self.cards:
            return None
        return self.cards.pop()

    def turn_top(self, face_up: bool) -> None:
        self.cards[-1] = self.cards[-1].turned(face_up)

    def load(self, cards: list[Card], last_modified: int) -> None:
        """Replace the whole content and clock."""
        if len(cards) > self.capacity:
            raise CapacityError(self.name, self.capacity)
        self.cards = list(cards)
        self.last_modified = last_modified

    def clear(self, last_modified: int) -> None:
        self.cards = []
        self.last_modified = last_modified

    def copy(self) -> CardStack:
        """Detached copy; later pushes and pops on self do not show through."""
        return replace(self, cards=list(self.cards))

    def slot(self, index: int) -> Card:
        """Card at a position of the fixed-capacity layout; EMPTY_CARD past the top."""
        if index < 0 or index >= self.capacity:
            raise IndexError(f"Slot {index} outside capacity {self.capacity}")
        if index < len(self.cards):
            return self.cards[index]
        return EMPTY_CARD


@dataclass
class GameState:
    """
    Complete solitaire state at a point in time.

    Used both for the authoritative shadow state and for the redacted
    client projection. Stacks are addressed by reference strings:
    "deck", "waste", "foundation:<i>", "tableau:<i>".
    """
    deck: CardStack
    waste: CardStack
    foundations: list[CardStack]
    tableaus: list[CardStack]
    last_modified: int = -1

    @classmethod
    def create(cls, last_modified: int = -1) -> GameState:
        """Create an empty state with every clock at `last_modified`."""
        return cls(
            deck=CardStack("deck", DECK_CAPACITY, hideable=True, last_modified=last_modified),
            waste=CardStack("waste", WASTE_CAPACITY, last_modified=last_modified),
            foundations=[
                CardStack(f"foundation:{i}", FOUNDATION_CAPACITY, last_modified=last_modified)
                for i in range(FOUNDATION_COUNT)
            ],
            tableaus=[
                CardStack(f"tableau:{i}", TABLEAU_CAPACITY, hideable=True, last_modified=last_modified)
                for i in range(TABLEAU_COUNT)
            ],
            last_modified=last_modified,
        )

    def stacks(self) -> list[CardStack]:
        """All stacks in a fixed order: deck, waste, foundations, tableaus."""
        return [self.deck, self.waste, *self.foundations, *self.tableaus]

    def resolve(self, ref: str) -> CardStack:
        """Look up a stack by reference string."""
        for stack in self.stacks():
            if stack.name == ref:
                return stack
        raise UnknownStackError(ref)

    @property
    def total_cards(self) -> int:
        return sum(stack.count for stack in self.stacks())

    def clone(self) -> GameState:
        """Deep copy the state."""
        return deepcopy(self)
