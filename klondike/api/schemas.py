"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between a player-facing client and the
engine. Only the redacted client state is ever serialized: a face-down
card is sent as hidden with no suit or rank.

Error Codes:
- SESSION_NOT_FOUND: Session does not exist or has ended
- INVALID_ACTION: Action is malformed or not allowed in this state
- EMPTY_SOURCE: Move requested from an empty stack
- UNKNOWN_STACK: Stack reference does not name a stack
- CAPACITY_EXCEEDED: Destination stack cannot hold another card
- VALIDATION_ERROR: Request body or parameters failed validation
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class SessionStatus(str, Enum):
    """Session status values."""
    ACTIVE = "active"
    WON = "won"
    GAME_OVER = "game_over"
    ABANDONED = "abandoned"


class GameModeName(str, Enum):
    """Draw mode names."""
    CLASSIC = "classic"
    DRAW_THREE = "draw_three"


class ErrorCode(str, Enum):
    """Structured error codes."""
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    INVALID_ACTION = "INVALID_ACTION"
    EMPTY_SOURCE = "EMPTY_SOURCE"
    UNKNOWN_STACK = "UNKNOWN_STACK"
    CAPACITY_EXCEEDED = "CAPACITY_EXCEEDED"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class CardInfo(BaseModel):
    """A card as the player sees it."""
    hidden: bool = Field(False, description="Face-down card; identity withheld")
    face_up: bool = False
    suit: Optional[str] = Field(None, description="hearts, spades, diamonds, clubs")
    rank: Optional[int] = Field(None, ge=1, le=13, description="1 (ace) to 13 (king)")
    color: Optional[str] = None
    label: str = Field("??", description="Short face text, e.g. 'Q♠'")

    model_config = {"from_attributes": True}


class StackInfo(BaseModel):
    """One stack of the client state."""
    stack_id: str = Field(description="deck, waste, foundation:<i>, tableau:<i>")
    last_modified: int = Field(description="Generation at which the stack last changed")
    count: int = 0
    cards: list[CardInfo] = Field(default_factory=list)

    model_config = {"from_attributes": True}


# =============================================================================
# Request Models
# =============================================================================

class CreateSessionRequest(BaseModel):
    """Request to create a new game session."""
    mode: Optional[GameModeName] = Field(None, description="Draw mode; server default if omitted")
    random_seed: Optional[int] = Field(None, description="Seed for a reproducible deal")


class MoveRequest(BaseModel):
    """Move the top card of one stack onto another."""
    source: str = Field(..., description="Stack to take the top card from")
    destination: str = Field(..., description="Stack to put the card on")


class RevealRequest(BaseModel):
    """Turn the face-down top card of a tableau face up."""
    stack: str = Field(..., description="tableau:<i>")


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    api_version: str = Field("v1", description="API version")


class ClientStateResponse(BaseModel):
    """
    The redacted game state.

    When requested with `since`, `stacks` holds only the stacks that
    changed after that generation and `partial` is true.
    """
    session_id: str
    generation: int
    mode: GameModeName
    partial: bool = False
    stacks: list[StackInfo] = Field(default_factory=list)
    api_version: str = "v1"


class SessionResponse(BaseModel):
    """Response containing session information."""
    session_id: str
    status: SessionStatus
    mode: GameModeName
    generation: int = 0
    created_at: float = 0.0
    cards_in_deck: int = 0
    cards_in_waste: int = 0
    cards_on_foundations: int = 0
    api_version: str = "v1"


class ActionResponse(BaseModel):
    """Result of a draw, move or reveal, with the stacks that changed."""
    session_id: str
    success: bool
    generation: int
    moved: int = 0
    recycled: bool = Field(False, description="The waste was turned over into the deck")
    changes: list[str] = Field(default_factory=list)
    updated_stacks: list[StackInfo] = Field(default_factory=list)
    status: SessionStatus = SessionStatus.ACTIVE
    api_version: str = "v1"


class SessionListResponse(BaseModel):
    """Response listing active sessions."""
    sessions: list[str]
    count: int


class EndSessionResponse(BaseModel):
    """Response after ending a session."""
    success: bool
    session_id: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
