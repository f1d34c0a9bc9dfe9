"""
Diagnostics - Human-readable dumps of stacks and states.

One line per stack: clock, count, then suit/rank/orientation codes for
each card. Meant for debugging and logs, not as a protocol.
"""

from __future__ import annotations

from .state import Card, CardStack, GameState

UNKNOWN_CODE = 99


def _card_code(card: Card) -> str:
    if card.is_real:
        suit, rank = card.suit.value, card.rank.value
    elif card.is_unknown:
        suit = rank = UNKNOWN_CODE
    else:
        suit = rank = 0
    return f"{suit:02d} {rank:02d} {int(card.face_up)}"


def format_stack(stack: CardStack) -> str:
    """'(clock, count): SS RR F  SS RR F ...'"""
    body = "  ".join(_card_code(card) for card in stack.cards)
    return f"({stack.last_modified}, {stack.count}): {body}".rstrip()


def _label(stack: CardStack) -> str:
    kind, _, index = stack.name.partition(":")
    return f"{kind} #{index}" if index else kind


def format_state(state: GameState) -> str:
    lines = [f"({state.last_modified}) ---"]
    for stack in state.stacks():
        lines.append(f"{_label(stack)} {format_stack(stack)}")
    return "\n".join(lines)


def render_stack(stack: CardStack) -> str:
    """Compact card faces, e.g. 'tableau #2: ?? ?? 7♥'."""
    faces = " ".join(str(card) for card in stack.cards) or "(empty)"
    return f"{_label(stack)}: {faces}"


def render_state(state: GameState) -> str:
    return "\n".join(render_stack(stack) for stack in state.stacks())
