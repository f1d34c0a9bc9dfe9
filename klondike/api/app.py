"""
FastAPI Application - REST API over the client state.

Endpoints:
    GET    /health                             Health check
    POST   /api/v1/sessions                    Create game session
    GET    /api/v1/sessions                    List active sessions
    GET    /api/v1/sessions/{id}               Get session status
    DELETE /api/v1/sessions/{id}               End session
    GET    /api/v1/sessions/{id}/state         Get the redacted state (?since=<generation>)
    POST   /api/v1/sessions/{id}/draw          Draw or recycle
    POST   /api/v1/sessions/{id}/move          Move a top card
    POST   /api/v1/sessions/{id}/reveal        Turn a tableau top card face up
    POST   /api/v1/sessions/{id}/new-game      Re-deal

Every state in a response comes from the client projection, so face-down
cards never leave the server with their identity.
"""

from typing import Annotated, Optional

from fastapi import Body, FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..config import Settings, load_settings
from ..session import SessionManager
from .schemas import (
    # Request models
    CreateSessionRequest,
    MoveRequest,
    RevealRequest,
    # Response models
    ActionResponse,
    ClientStateResponse,
    EndSessionResponse,
    ErrorResponse,
    HealthResponse,
    SessionListResponse,
    SessionResponse,
    # Enums
    ErrorCode,
)
from .service import APIService


def create_app(service: Optional[APIService] = None, settings: Optional[Settings] = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)
        settings: Optional Settings (read from the environment if not provided)

    Returns:
        FastAPI application instance
    """
    settings = settings or load_settings()

    app = FastAPI(
        title="Klondike Engine API",
        description="""
Klondike solitaire with a server-side authoritative state.

The server keeps the full deal to itself and only ever returns the
player's view: face-down cards are reported as `hidden` with no suit or
rank. Each stack carries `last_modified`; pass `since=<generation>` to
`GET /state` to receive only the stacks that changed.

## Error Codes

| Code | Description |
|------|-------------|
| `SESSION_NOT_FOUND` | Session does not exist |
| `INVALID_ACTION` | Action is not allowed in this state |
| `EMPTY_SOURCE` | Nothing to move from the source stack |
| `UNKNOWN_STACK` | Stack reference is not valid |
| `CAPACITY_EXCEEDED` | Destination stack is full |
        """,
        version=__version__,
        docs_url=None if settings.env == "production" else "/api/docs",
        redoc_url=None if settings.env == "production" else "/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or APIService(
        session_manager=SessionManager(
            default_mode=settings.mode,
            session_ttl=settings.session_ttl,
        ),
    )
    app.state.service = api_service

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(error: ErrorResponse) -> JSONResponse:
        """Turn an ErrorResponse into a JSON response with a matching status."""
        status_code = 404 if error.error_code == ErrorCode.SESSION_NOT_FOUND else 400
        return JSONResponse(status_code=status_code, content=error.model_dump(mode="json"))

    def respond(response):
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    # =========================================================================
    # Health
    # =========================================================================

    @app.get("/health", response_model=HealthResponse, tags=["Meta"])
    async def health() -> HealthResponse:
        return HealthResponse(status="ok", service="klondike", version=__version__)

    # =========================================================================
    # Session Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions",
        response_model=SessionResponse,
        responses={422: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="Create a new game session",
    )
    async def create_session(
        body: Annotated[Optional[CreateSessionRequest], Body()] = None,
    ) -> SessionResponse:
        """
        Create a new game session and deal a game.

        Use `random_seed` for a reproducible deal.
        """
        request = body or CreateSessionRequest(random_seed=settings.seed)
        return api_service.create_session(request)

    @app.get(
        "/api/v1/sessions",
        response_model=SessionListResponse,
        tags=["Sessions"],
        summary="List active sessions",
    )
    async def list_sessions() -> SessionListResponse:
        """List all active session IDs."""
        sessions = api_service.list_sessions()
        return SessionListResponse(sessions=sessions, count=len(sessions))

    @app.get(
        "/api/v1/sessions/{session_id}",
        response_model=SessionResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="Get session status",
    )
    async def get_session(session_id: str):
        """Get the current status of a game session."""
        return respond(api_service.get_session(session_id))

    @app.delete(
        "/api/v1/sessions/{session_id}",
        response_model=EndSessionResponse,
        tags=["Sessions"],
        summary="End a game session",
    )
    async def end_session(
        session_id: str,
        reason: Annotated[str, Query(description="Reason for ending")] = "user_ended",
    ) -> EndSessionResponse:
        """End a game session and drop its state."""
        success = api_service.end_session(session_id, reason)
        return EndSessionResponse(success=success, session_id=session_id)

    # =========================================================================
    # Game Endpoints
    # =========================================================================

    @app.get(
        "/api/v1/sessions/{session_id}/state",
        response_model=ClientStateResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Get the player's view of the game",
    )
    async def get_state(
        session_id: str,
        since: Annotated[
            Optional[int],
            Query(description="Only return stacks changed after this generation"),
        ] = None,
    ):
        return respond(api_service.get_client_state(session_id, since=since))

    @app.post(
        "/api/v1/sessions/{session_id}/draw",
        response_model=ActionResponse,
        responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Draw from the deck, or recycle the waste",
    )
    async def draw(session_id: str):
        """
        Draw one card (classic) or up to three (draw_three) onto the waste.

        When the deck is empty the waste is turned over into the deck and
        `recycled` is true.
        """
        return respond(api_service.draw(session_id))

    @app.post(
        "/api/v1/sessions/{session_id}/move",
        response_model=ActionResponse,
        responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Move a top card between stacks",
    )
    async def move(session_id: str, body: MoveRequest):
        return respond(api_service.move(session_id, body))

    @app.post(
        "/api/v1/sessions/{session_id}/reveal",
        response_model=ActionResponse,
        responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Turn a tableau's top card face up",
    )
    async def reveal(session_id: str, body: RevealRequest):
        return respond(api_service.reveal(session_id, body))

    @app.post(
        "/api/v1/sessions/{session_id}/new-game",
        response_model=ActionResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Deal a new game in the same session",
    )
    async def new_game(session_id: str):
        return respond(api_service.new_game(session_id))

    return app


# For running directly: uvicorn klondike.api.app:app
app = create_app()
