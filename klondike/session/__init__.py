"""
Session Module - Manages ephemeral game sessions.

A session represents one play-through of a game:
- Created when a player starts a game
- Holds the shadow state and its client projection
- Applies actions and keeps the client in sync
- Destroyed when the game ends

Sessions are EPHEMERAL: no persistence, nothing survives end_session.
"""

from .manager import ClientSnapshot, SessionManager, Session, SessionState

__all__ = [
    "ClientSnapshot",
    "SessionManager",
    "Session",
    "SessionState",
]
