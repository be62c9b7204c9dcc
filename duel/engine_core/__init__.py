"""
Engine Core - Deterministic duel state management.

The engine is the runtime that:
1. Holds the current GameState snapshot
2. Applies actions via the reducer
3. Runs the turn/phase machine and its auto-skip cascade
4. Resolves targeting, combat, purchases and progression
"""

from .state import (
    ActionPhase,
    ActorKind,
    AttackType,
    Equipment,
    GameOverReason,
    GamePhase,
    GameState,
    Hero,
    Monster,
    Player,
    Target,
    TargetKind,
    Unit,
)
from .action import Action, ActionType, ActionPayload, ActionResult, ErrorCode, Outcome, OutcomeKind
from .rules import GameRules, DEFAULT_RULES
from .reducer import Reducer, apply_action
from .engine import GameEngine, new_game_state

__all__ = [
    "ActionPhase",
    "ActorKind",
    "AttackType",
    "Equipment",
    "GameOverReason",
    "GamePhase",
    "GameState",
    "Hero",
    "Monster",
    "Player",
    "Target",
    "TargetKind",
    "Unit",
    "Action",
    "ActionType",
    "ActionPayload",
    "ActionResult",
    "ErrorCode",
    "Outcome",
    "OutcomeKind",
    "GameRules",
    "DEFAULT_RULES",
    "Reducer",
    "apply_action",
    "GameEngine",
    "new_game_state",
]
