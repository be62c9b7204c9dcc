"""
Session Manager - Creates and manages duel sessions.

LIFECYCLE:
1. Client creates a session -> a fresh GameEngine in chooseHero
2. Both players pick heroes, then take turns through the engine
3. Game ends -> the session stays readable until it is deleted
4. Client can reset the session to replay with the same seed

PERSISTENCE RULES:
- NO database for gameplay
- Sessions live in memory only
- Deleting a session drops its engine and every snapshot
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any
import logging
import time
import uuid

from ..catalog import RandomCatalog
from ..engine_core.engine import GameEngine
from ..engine_core.rules import DEFAULT_RULES, GameRules
from ..engine_core.state import GamePhase, GameState


logger = logging.getLogger(__name__)


class SessionState(Enum):
    """State of a duel session."""
    CHOOSING_HEROES = "choosing_heroes"
    ACTIVE = "active"
    GAME_OVER = "game_over"
    ENDED = "ended"


@dataclass
class Session:
    """
    An ephemeral duel session.

    Contains:
    - The engine owning the current snapshot
    - The seed its catalog was built from
    - Session metadata

    State is NOT persisted.
    """
    session_id: str
    engine: GameEngine
    created_at: float
    seed: int | None = None
    ended: bool = False
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def game_state(self) -> GameState:
        return self.engine.state

    @property
    def state(self) -> SessionState:
        if self.ended:
            return SessionState.ENDED
        phase = self.engine.state.phase
        if phase == GamePhase.GAME_OVER:
            return SessionState.GAME_OVER
        if phase.is_player_turn:
            return SessionState.ACTIVE
        return SessionState.CHOOSING_HEROES

    def is_active(self) -> bool:
        """Check if the duel can still be played."""
        return self.state in {SessionState.CHOOSING_HEROES, SessionState.ACTIVE}


class SessionManager:
    """
    Manages duel sessions.

    Responsibilities:
    - Create sessions, each with its own engine and seeded catalog
    - Track sessions by id
    - Clean up finished sessions

    No persistence - sessions are in-memory only.
    """

    def __init__(self, rules: GameRules = DEFAULT_RULES, default_seed: int | None = None):
        self.rules = rules
        self.default_seed = default_seed
        self._sessions: dict[str, Session] = {}

    def create_session(
        self,
        seed: int | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> Session:
        """
        Create a new duel session.

        Args:
            seed: Seed for the card catalog; falls back to the manager default
            metadata: Free-form client data stored with the session

        Returns:
            New Session waiting for hero selection
        """
        session_id = str(uuid.uuid4())
        if seed is None:
            seed = self.default_seed

        engine = GameEngine(
            catalog=RandomCatalog(seed=seed),
            rules=self.rules,
            seed=seed,
            game_id=session_id,
        )
        engine.initialize()

        session = Session(
            session_id=session_id,
            engine=engine,
            created_at=time.time(),
            seed=seed,
            metadata=dict(metadata or {}),
        )
        self._sessions[session_id] = session
        logger.info("Created session %s (seed=%s)", session_id, seed)
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def reset_session(self, session_id: str) -> Session | None:
        """
        Restart a session's duel.

        The catalog is rebuilt from the session seed, so a seeded
        session deals the same cards again.
        """
        session = self._sessions.get(session_id)
        if session is None:
            return None
        session.engine = GameEngine(
            catalog=RandomCatalog(seed=session.seed),
            rules=self.rules,
            seed=session.seed,
            game_id=session_id,
        )
        session.engine.initialize()
        logger.info("Reset session %s", session_id)
        return session

    def end_session(self, session_id: str) -> bool:
        """
        End a session and drop it from memory.

        Returns False when the session does not exist.
        """
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        session.ended = True
        logger.info("Ended session %s", session_id)
        return True

    def list_sessions(self) -> list[str]:
        """List IDs of all known sessions."""
        return list(self._sessions)

    def list_active_sessions(self) -> list[str]:
        """List IDs of sessions whose duel is still running."""
        return [
            sid for sid, session in self._sessions.items()
            if session.is_active()
        ]

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> int:
        """
        Clean up finished sessions older than max_age.

        Returns the number of sessions removed.
        """
        current_time = time.time()
        to_remove = [
            session_id for session_id, session in self._sessions.items()
            if current_time - session.created_at > max_age_seconds and not session.is_active()
        ]
        for session_id in to_remove:
            self.end_session(session_id)
        if to_remove:
            logger.debug("Removed %d stale sessions", len(to_remove))
        return len(to_remove)
