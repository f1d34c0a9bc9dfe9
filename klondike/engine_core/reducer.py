"""
Reducer - Applies actions to the shadow state.

The reducer is the single point of shadow mutation after setup.
All gameplay changes go through apply_action().

Design principles:
- Owns the generation counter: one increment per action that changed state
- Validates before applying
- Returns ActionResult with success/failure, never raises for bad input
- Never touches the client state; synchronization is the caller's job
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging
import random

from .state import GameState
from .action import Action, ActionType, ActionResult
from .errors import CapacityError, UnknownStackError
from .moves import DECK_RECYCLED, GameMode, move_card, pull_from_deck, turn_top_card
from .setup import deal

logger = logging.getLogger(__name__)

# Cards only enter these stacks through draw and recycle.
DRAW_ONLY_STACKS = {"deck", "waste"}


@dataclass
class Reducer:
    """
    Reducer applies actions to a shadow state.

    `generation` is the last generation handed out. Actions that change
    nothing (a failed move, an empty draw) do not consume one.
    """
    mode: GameMode = GameMode.CLASSIC
    rng: random.Random | None = None
    generation: int = 0
    action_history: list[Action] = field(default_factory=list)

    def apply(self, shadow: GameState, action: Action) -> ActionResult:
        """
        Apply an action to the shadow state.

        Returns ActionResult describing the change or the error.
        """
        validation_error = self._validate_action(shadow, action)
        if validation_error:
            return ActionResult.failure(validation_error, error_code="INVALID_ACTION")

        handler = self._get_handler(action.action_type)
        if not handler:
            return ActionResult.failure(
                f"No handler for action type: {action.action_type}",
                error_code="NO_HANDLER",
            )

        try:
            result = handler(shadow, action, self.next_generation(shadow))
        except UnknownStackError as e:
            return ActionResult.failure(str(e), error_code="UNKNOWN_STACK")
        except CapacityError as e:
            return ActionResult.failure(str(e), error_code="CAPACITY_EXCEEDED")

        if result.success:
            self.action_history.append(action)
            if result.generation is not None:
                self.generation = result.generation
        logger.debug("%s -> %s", action.action_type.value, result)
        return result

    def next_generation(self, shadow: GameState) -> int:
        """Generation for the next change; never behind the shadow clock."""
        return max(self.generation, shadow.last_modified) + 1

    def _validate_action(self, shadow: GameState, action: Action) -> str | None:
        """
        Validate that an action is well formed for the current state.

        Returns error message if invalid, None if valid.
        """
        if action.action_type == ActionType.MOVE:
            if not action.source or not action.destination:
                return "Move needs a source and a destination"
            if action.source == action.destination:
                return "Source and destination are the same stack"
            if action.destination in DRAW_ONLY_STACKS:
                return f"Cards cannot be moved onto the {action.destination}"
            if action.source == "deck":
                return "Cards leave the deck only by drawing"

        if action.action_type == ActionType.REVEAL:
            if not action.source or not action.source.startswith("tableau:"):
                return "Only a tableau top card can be revealed"

        return None

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.NEW_GAME: self._handle_new_game,
            ActionType.DRAW: self._handle_draw,
            ActionType.MOVE: self._handle_move,
            ActionType.REVEAL: self._handle_reveal,
        }
        return handlers.get(action_type)

    def _handle_new_game(self, shadow: GameState, action: Action, generation: int) -> ActionResult:
        deal(shadow, generation, self.rng)
        return ActionResult.succeeded(generation, changes=["Dealt a new game"])

    def _handle_draw(self, shadow: GameState, action: Action, generation: int) -> ActionResult:
        """Handle draw action."""
        outcome = pull_from_deck(shadow, self.mode, generation)

        if outcome == DECK_RECYCLED:
            return ActionResult.succeeded(
                generation,
                changes=[f"Turned the waste over into a {shadow.deck.count}-card deck"],
                recycled=True,
            )
        if outcome == 0:
            return ActionResult.succeeded(None, changes=["Nothing left to draw"])
        return ActionResult.succeeded(
            generation,
            changes=[f"Drew {outcome} card(s) onto the waste"],
            moved=outcome,
        )

    def _handle_move(self, shadow: GameState, action: Action, generation: int) -> ActionResult:
        """Handle move action."""
        source = shadow.resolve(action.source)
        destination = shadow.resolve(action.destination)

        top = source.top_card
        if top is not None and not top.face_up:
            return ActionResult.failure(
                f"Top card of {source.name} is face down",
                error_code="INVALID_ACTION",
            )

        if not move_card(destination, source, generation):
            return ActionResult.failure(
                f"No card to move from {source.name}",
                error_code="EMPTY_SOURCE",
            )

        shadow.last_modified = generation
        return ActionResult.succeeded(
            generation,
            changes=[f"Moved {top} from {source.name} to {destination.name}"],
            moved=1,
        )

    def _handle_reveal(self, shadow: GameState, action: Action, generation: int) -> ActionResult:
        stack = shadow.resolve(action.source)
        if not turn_top_card(stack, generation):
            return ActionResult.failure(
                f"No face-down card on top of {stack.name}",
                error_code="INVALID_ACTION",
            )

        shadow.last_modified = generation
        return ActionResult.succeeded(
            generation,
            changes=[f"Revealed {stack.top_card} on {stack.name}"],
        )


def apply_action(
    shadow: GameState,
    action: Action,
    reducer: Reducer | None = None,
) -> ActionResult:
    """Convenience function to apply an action."""
    reducer = reducer or Reducer()
    return reducer.apply(shadow, action)
