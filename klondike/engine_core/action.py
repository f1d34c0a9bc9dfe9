"""
Action System - Actions and results.

All shadow-state mutations outside of setup flow through actions:
1. NEW_GAME re-deals the shadow state
2. DRAW pulls from the deck (or recycles the waste)
3. MOVE transfers the top card between two stacks
4. REVEAL turns a face-down top card face up
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum


class ActionType(Enum):
    """Types of actions in the system."""
    NEW_GAME = "new_game"
    DRAW = "draw"
    MOVE = "move"
    REVEAL = "reveal"


@dataclass
class Action:
    """
    A complete action to be applied to the shadow state.

    Stack references use the GameState naming: "deck", "waste",
    "foundation:<i>", "tableau:<i>".
    """
    action_type: ActionType
    source: str | None = None
    destination: str | None = None

    @classmethod
    def new_game(cls) -> Action:
        return cls(action_type=ActionType.NEW_GAME)

    @classmethod
    def draw(cls) -> Action:
        return cls(action_type=ActionType.DRAW)

    @classmethod
    def move(cls, source: str, destination: str) -> Action:
        """Factory for a move action."""
        return cls(action_type=ActionType.MOVE, source=source, destination=destination)

    @classmethod
    def reveal(cls, stack: str) -> Action:
        return cls(action_type=ActionType.REVEAL, source=stack)


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - Whether the action succeeded
    - The generation it was stamped with (if it changed anything)
    - Errors (if failed)
    - Draw details and human-readable changes
    """
    success: bool
    generation: int | None = None
    error: str | None = None
    error_code: str | None = None

    moved: int = 0
    recycled: bool = False
    state_changes: list[str] = field(default_factory=list)

    @classmethod
    def failure(cls, error: str, error_code: str | None = None) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def succeeded(
        cls,
        generation: int | None,
        changes: list[str] | None = None,
        moved: int = 0,
        recycled: bool = False,
    ) -> ActionResult:
        return cls(
            success=True,
            generation=generation,
            moved=moved,
            recycled=recycled,
            state_changes=changes or [],
        )
