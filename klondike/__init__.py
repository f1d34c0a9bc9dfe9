"""
Klondike - Solitaire engine with redacted state synchronization.

The engine keeps an authoritative (shadow) game state and derives a
player-visible (client) state from it. It provides:
- Dealing, drawing, recycling and a generic card move
- Per-stack logical clocks so only changed stacks are re-synced
- Redaction of face-down cards during synchronization
- In-memory sessions and a REST API over the client state
"""

__version__ = "0.1.0"
