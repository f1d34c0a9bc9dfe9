"""
Redaction - Projects the shadow state into the client state.

Every stack carries its own logical clock. A client stack is refreshed
only when it is behind the matching shadow stack, so a synchronization
costs as much as the stacks that changed since the previous one, and a
repeated call with no intervening mutation does nothing.

Stacks flagged `hideable` are copied through `redacted_copy`: every
face-down card becomes UNKNOWN_CARD before it reaches the client.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging

from .state import CardStack, GameState, UNKNOWN_CARD

logger = logging.getLogger(__name__)


@dataclass
class SyncReport:
    """Outcome of one update_client_data call."""
    generation: int
    copied: list[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.copied)


def plain_copy(dst: CardStack, src: CardStack) -> bool:
    """Copy src into dst verbatim if dst is stale. Returns True if copied."""
    if dst.last_modified < src.last_modified:
        dst.load(src.cards, src.last_modified)
        return True
    return False


def redacted_copy(dst: CardStack, src: CardStack) -> bool:
    """Copy src into dst if dst is stale, hiding every face-down card."""
    if dst.last_modified < src.last_modified:
        dst.load(
            [card if card.face_up else UNKNOWN_CARD for card in src.cards],
            src.last_modified,
        )
        return True
    return False


def copy_stack(dst: CardStack, src: CardStack) -> bool:
    """Copy with the strategy the stack is configured for."""
    if src.hideable or dst.hideable:
        return redacted_copy(dst, src)
    return plain_copy(dst, src)


def update_client_data(client: GameState, shadow: GameState) -> SyncReport:
    """
    Bring the client state up to date with the shadow state.

    Stale stacks are picked from one read of the shadow clocks before
    anything is copied. Safe to call at any time, including redundantly.
    """
    report = SyncReport(generation=shadow.last_modified)
    if client.last_modified >= shadow.last_modified:
        return report

    stale = [
        (dst, src)
        for dst, src in zip(client.stacks(), shadow.stacks())
        if dst.last_modified < src.last_modified
    ]

    client.last_modified = shadow.last_modified
    for dst, src in stale:
        if copy_stack(dst, src):
            report.copied.append(src.name)

    logger.debug(
        "Synchronized client to generation %d: %s",
        report.generation,
        ", ".join(report.copied) or "no stack changed",
    )
    return report


def stacks_modified_since(state: GameState, generation: int) -> list[CardStack]:
    """Stacks whose clock is newer than `generation`."""
    return [stack for stack in state.stacks() if stack.last_modified > generation]
