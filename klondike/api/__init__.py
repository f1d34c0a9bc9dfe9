"""
API Module - HTTP interface to game sessions.

Exposes the engine via a REST API. A client:
1. Creates a game session
2. Reads its (redacted) view of the table
3. Draws, moves and reveals cards
4. Polls for stacks changed since the generation it last saw

All state is session-scoped. No persistent user accounts required.
"""

from .schemas import (
    # Requests
    CreateSessionRequest,
    MoveRequest,
    RevealRequest,
    # Responses
    ActionResponse,
    ClientStateResponse,
    EndSessionResponse,
    ErrorResponse,
    HealthResponse,
    SessionListResponse,
    SessionResponse,
    # Shared
    CardInfo,
    StackInfo,
    # Enums
    ErrorCode,
    GameModeName,
    SessionStatus,
)
from .service import APIService

__all__ = [
    # Requests
    "CreateSessionRequest",
    "MoveRequest",
    "RevealRequest",
    # Responses
    "ActionResponse",
    "ClientStateResponse",
    "EndSessionResponse",
    "ErrorResponse",
    "HealthResponse",
    "SessionListResponse",
    "SessionResponse",
    # Shared
    "CardInfo",
    "StackInfo",
    # Enums
    "ErrorCode",
    "GameModeName",
    "SessionStatus",
    # Service
    "APIService",
]
