"""
Session Module - Manages ephemeral duel sessions.

A session represents one play-through of a duel:
- Created when a client starts a game
- Holds the engine and its current snapshot
- Destroyed when the client deletes it

Sessions are EPHEMERAL:
- No persistence to database
- Replays rebuild the catalog from the session seed
"""

from .manager import SessionManager, Session, SessionState

__all__ = [
    "SessionManager",
    "Session",
    "SessionState",
]
