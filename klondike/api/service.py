"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to engine actions
2. Manages sessions
3. Serializes the client (redacted) state for responses

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field

from .schemas import (
    # Requests
    CreateSessionRequest,
    MoveRequest,
    RevealRequest,
    # Responses
    ActionResponse,
    ClientStateResponse,
    ErrorResponse,
    SessionResponse,
    # Shared
    CardInfo,
    StackInfo,
    # Enums
    ErrorCode,
    GameModeName,
    SessionStatus,
)
from ..config import parse_mode
from ..engine_core.action import Action
from ..engine_core.moves import GameMode
from ..engine_core.state import Card, CardStack
from ..session import Session, SessionManager, SessionState


def card_to_info(card: Card) -> CardInfo:
    """Serialize a client-side card. Unknown cards carry no identity."""
    if not card.is_real:
        return CardInfo(hidden=True, face_up=False, label=str(card))
    return CardInfo(
        hidden=False,
        face_up=card.face_up,
        suit=card.suit.name.lower(),
        rank=card.rank.value,
        color=card.suit.color,
        label=str(card),
    )


def stack_to_info(stack: CardStack) -> StackInfo:
    return StackInfo(
        stack_id=stack.name,
        last_modified=stack.last_modified,
        count=stack.count,
        cards=[card_to_info(card) for card in stack.cards],
    )


def mode_name(mode: GameMode) -> GameModeName:
    return GameModeName(mode.name.lower())


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()

        # Create session
        session_response = service.create_session(CreateSessionRequest())

        # Play
        service.draw(session_id)
        service.move(session_id, MoveRequest(source="waste", destination="tableau:3"))

        # Read what the player may see
        state = service.get_client_state(session_id)
    """
    session_manager: SessionManager = field(default_factory=SessionManager)

    def create_session(self, request: CreateSessionRequest) -> SessionResponse:
        """Create a new game session with a fresh deal. Idle sessions are dropped first."""
        self.session_manager.cleanup_stale_sessions()
        mode = parse_mode(request.mode.value) if request.mode else None
        session = self.session_manager.create_session(mode=mode, seed=request.random_seed)
        return self._session_to_response(session)

    def get_session(self, session_id: str) -> SessionResponse | ErrorResponse:
        """Get session status."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        return self._session_to_response(session)

    def end_session(self, session_id: str, reason: str = "user_ended") -> bool:
        """End a session. Returns False if it did not exist."""
        return self.session_manager.end_session(session_id, reason)

    def list_sessions(self) -> list[str]:
        return self.session_manager.list_active_sessions()

    def get_client_state(
        self,
        session_id: str,
        since: int | None = None,
    ) -> ClientStateResponse | ErrorResponse:
        """
        Get the redacted state.

        With `since`, only stacks changed after that generation are
        returned.
        """
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)

        snapshot = session.snapshot(since)
        return ClientStateResponse(
            session_id=session_id,
            generation=snapshot.generation,
            mode=mode_name(session.mode),
            partial=since is not None,
            stacks=[stack_to_info(stack) for stack in snapshot.stacks],
        )

    def draw(self, session_id: str) -> ActionResponse | ErrorResponse:
        """Draw from the deck, or recycle the waste when the deck is empty."""
        return self._apply(session_id, Action.draw())

    def move(self, session_id: str, request: MoveRequest) -> ActionResponse | ErrorResponse:
        return self._apply(session_id, Action.move(request.source, request.destination))

    def reveal(self, session_id: str, request: RevealRequest) -> ActionResponse | ErrorResponse:
        return self._apply(session_id, Action.reveal(request.stack))

    def new_game(self, session_id: str) -> ActionResponse | ErrorResponse:
        """Re-deal within the same session."""
        return self._apply(session_id, Action.new_game())

    # =========================================================================
    # Helpers
    # =========================================================================

    def _apply(self, session_id: str, action: Action) -> ActionResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)

        result, snapshot = session.perform(action)
        if not result.success:
            return ErrorResponse(
                error=result.error or "Action failed",
                error_code=self._error_code(result.error_code),
            )

        return ActionResponse(
            session_id=session_id,
            success=True,
            generation=snapshot.generation,
            moved=result.moved,
            recycled=result.recycled,
            changes=result.state_changes,
            updated_stacks=[stack_to_info(stack) for stack in snapshot.stacks],
            status=self._status(session, snapshot.won),
        )

    def _session_to_response(self, session: Session) -> SessionResponse:
        snapshot = session.snapshot()
        return SessionResponse(
            session_id=session.session_id,
            status=self._status(session, snapshot.won),
            mode=mode_name(session.mode),
            generation=snapshot.generation,
            created_at=session.created_at,
            cards_in_deck=snapshot.find("deck").count,
            cards_in_waste=snapshot.find("waste").count,
            cards_on_foundations=sum(
                stack.count for stack in snapshot.stacks if stack.name.startswith("foundation:")
            ),
        )

    def _status(self, session: Session, won: bool) -> SessionStatus:
        if session.state == SessionState.ABANDONED:
            return SessionStatus.ABANDONED
        if session.state == SessionState.GAME_OVER:
            return SessionStatus.GAME_OVER
        if won:
            return SessionStatus.WON
        return SessionStatus.ACTIVE

    def _error_code(self, code: str | None) -> ErrorCode:
        try:
            return ErrorCode(code)
        except ValueError:
            return ErrorCode.INTERNAL_ERROR

    def _not_found(self, session_id: str) -> ErrorResponse:
        return ErrorResponse(
            error=f"Session {session_id} not found",
            error_code=ErrorCode.SESSION_NOT_FOUND,
        )
