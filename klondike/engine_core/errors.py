"""
Engine errors.

Gameplay outcomes (empty source, partial draw, recycle) are return values,
not exceptions. The exceptions here mark precondition violations and bad
references coming from outside the engine.
"""


class KlondikeError(Exception):
    """Base class for engine errors."""


class CapacityError(KlondikeError):
    """A stack was asked to hold more cards than its capacity."""

    def __init__(self, stack_name: str, capacity: int):
        super().__init__(f"Stack '{stack_name}' is full (capacity {capacity})")
        self.stack_name = stack_name
        self.capacity = capacity


class UnknownStackError(KlondikeError):
    """A stack reference did not name a stack of the game state."""

    def __init__(self, ref: str):
        super().__init__(f"Unknown stack reference: {ref!r}")
        self.ref = ref


class SessionNotFoundError(KlondikeError):
    """No live session has the given ID."""

    def __init__(self, session_id: str):
        super().__init__(f"Session not found: {session_id}")
        self.session_id = session_id
