"""
Session Manager - Creates and manages game sessions.

LIFECYCLE:
1. create_session deals a shadow state and populates its client view
2. Each action is applied to the shadow state, then the client is synced
3. end_session drops both states together

Sessions are in-memory only. The client state is the only thing a
session ever hands out for display.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
import logging
import random
import threading
import time
import uuid

from ..engine_core.action import Action, ActionResult
from ..engine_core.errors import SessionNotFoundError
from ..engine_core.moves import GameMode
from ..engine_core.reducer import Reducer
from ..engine_core.redaction import SyncReport, stacks_modified_since, update_client_data
from ..engine_core.setup import init_game
from ..engine_core.state import CardStack, GameState

logger = logging.getLogger(__name__)

INITIAL_GENERATION = 0


class SessionState(Enum):
    """State of a game session."""
    ACTIVE = "active"
    GAME_OVER = "game_over"
    ABANDONED = "abandoned"


@dataclass
class ClientSnapshot:
    """Detached copies of client stacks, all from one generation."""
    generation: int
    stacks: list[CardStack] = field(default_factory=list)
    won: bool = False

    def find(self, name: str) -> CardStack | None:
        for stack in self.stacks:
            if stack.name == name:
                return stack
        return None


@dataclass
class Session:
    """
    One game: the shadow state, its client projection and the reducer.

    The lock serializes apply(), perform(), sync() and snapshot() so a
    synchronization never observes a half-applied action. Callers that
    serialize client stacks read them from a ClientSnapshot.
    """
    session_id: str
    shadow: GameState
    client: GameState
    reducer: Reducer
    created_at: float
    state: SessionState = SessionState.ACTIVE
    seed: int | None = None
    last_activity: float = 0.0
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    @property
    def mode(self) -> GameMode:
        return self.reducer.mode

    @property
    def generation(self) -> int:
        return self.shadow.last_modified

    def is_active(self) -> bool:
        return self.state == SessionState.ACTIVE

    def apply(self, action: Action) -> tuple[ActionResult, SyncReport]:
        """Apply an action to the shadow state and refresh the client."""
        with self._lock:
            return self._apply_locked(action)

    def perform(self, action: Action) -> tuple[ActionResult, ClientSnapshot]:
        """
        Apply an action and capture the client stacks it changed.

        The snapshot is taken before the lock is released, so it belongs to
        exactly the generation the action produced.
        """
        with self._lock:
            result, report = self._apply_locked(action)
            changed = [self.client.resolve(name) for name in report.copied]
            return result, self._snapshot_locked(changed)

    def sync(self) -> SyncReport:
        with self._lock:
            self.last_activity = time.time()
            return update_client_data(self.client, self.shadow)

    def snapshot(self, since: int | None = None) -> ClientSnapshot:
        """
        Sync the client and copy its stacks in one critical section.

        With `since`, only stacks changed after that generation are copied.
        """
        with self._lock:
            self.last_activity = time.time()
            update_client_data(self.client, self.shadow)
            if since is None:
                stacks = self.client.stacks()
            else:
                stacks = stacks_modified_since(self.client, since)
            return self._snapshot_locked(stacks)

    def is_won(self) -> bool:
        """All four foundations complete."""
        return all(f.count == f.capacity for f in self.shadow.foundations)

    def _apply_locked(self, action: Action) -> tuple[ActionResult, SyncReport]:
        if not self.is_active():
            return (
                ActionResult.failure("Session has ended", error_code="INVALID_ACTION"),
                SyncReport(generation=self.client.last_modified),
            )
        result = self.reducer.apply(self.shadow, action)
        report = update_client_data(self.client, self.shadow)
        self.last_activity = time.time()
        return result, report

    def _snapshot_locked(self, stacks: list[CardStack]) -> ClientSnapshot:
        return ClientSnapshot(
            generation=self.client.last_modified,
            stacks=[stack.copy() for stack in stacks],
            won=self.is_won(),
        )


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Create sessions with a freshly dealt game
    - Track active sessions
    - Clean up ended sessions

    No persistence - sessions are in-memory only.
    """

    def __init__(self, default_mode: GameMode = GameMode.CLASSIC, session_ttl: int = 3600):
        self.default_mode = default_mode
        self.session_ttl = session_ttl
        self._sessions: dict[str, Session] = {}
        self._lock = threading.Lock()

    def create_session(
        self,
        mode: GameMode | None = None,
        seed: int | None = None,
    ) -> Session:
        """
        Create a new game session.

        Args:
            mode: Draw mode (defaults to the manager's default)
            seed: Seed for a reproducible deal; None deals unpredictably

        Returns:
            New Session with shadow and client populated
        """
        rng = random.Random(seed) if seed is not None else random.SystemRandom()
        shadow = GameState.create()
        client = GameState.create()
        init_game(shadow, client, INITIAL_GENERATION, rng)

        now = time.time()
        session = Session(
            session_id=str(uuid.uuid4()),
            shadow=shadow,
            client=client,
            reducer=Reducer(
                mode=mode if mode is not None else self.default_mode,
                rng=rng,
                generation=INITIAL_GENERATION,
            ),
            created_at=now,
            seed=seed,
            last_activity=now,
        )

        with self._lock:
            self._sessions[session.session_id] = session
        logger.info("Created session %s (mode=%s)", session.session_id, session.mode.name)
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def require_session(self, session_id: str) -> Session:
        session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def end_session(self, session_id: str, reason: str = "completed") -> bool:
        """
        End a session and drop its state.

        Returns False if no such session exists.
        """
        with self._lock:
            session = self._sessions.pop(session_id, None)
        if session is None:
            return False

        if reason == "completed":
            session.state = SessionState.GAME_OVER
        else:
            session.state = SessionState.ABANDONED
        logger.info("Ended session %s (%s)", session_id, reason)
        return True

    def list_active_sessions(self) -> list[str]:
        """List IDs of active sessions."""
        return [
            sid for sid, session in self._sessions.items()
            if session.is_active()
        ]

    def cleanup_stale_sessions(self, max_age_seconds: int | None = None) -> list[str]:
        """
        Drop sessions idle for longer than max_age_seconds (default: the
        manager's session_ttl).

        Returns the IDs that were removed.
        """
        if max_age_seconds is None:
            max_age_seconds = self.session_ttl
        cutoff = time.time() - max_age_seconds
        stale = [
            sid for sid, session in list(self._sessions.items())
            if session.last_activity < cutoff
        ]
        for session_id in stale:
            self.end_session(session_id, reason="stale")
        return stale
