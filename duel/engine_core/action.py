"""
Action System - Actions, payloads, outcomes and results.

Actions represent:
1. Setup actions (choose hero)
2. Turn actions (buy, select, attack, cancel)
3. Flow actions (advance phase, start turn)

All state changes flow through actions. Every result carries
outcome descriptors the presentation layer renders as notices.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .state import ActorKind, AttackType, Hero, Target


class ActionType(Enum):
    """Types of actions in the system."""
    # Setup
    SELECT_HERO = "select_hero"

    # Flow
    START_TURN = "start_turn"
    ADVANCE_PHASE = "advance_phase"

    # Turn actions
    BUY = "buy"
    SELECT = "select"
    SELECT_ATTACK_TYPE = "select_attack_type"
    ATTACK = "attack"
    CANCEL = "cancel"


class OutcomeKind(Enum):
    """How the presentation layer should treat an outcome."""
    INFO = "info"
    SUCCESS = "success"
    REJECTED = "rejected"
    GAME_OVER = "game_over"


class ErrorCode(str, Enum):
    """Machine-readable outcome codes."""
    WRONG_PHASE = "WRONG_PHASE"
    INVALID_PLAYER = "INVALID_PLAYER"
    HERO_ALREADY_CHOSEN = "HERO_ALREADY_CHOSEN"
    ACTION_USED = "ACTION_USED"
    INSUFFICIENT_GOLD = "INSUFFICIENT_GOLD"
    UNIT_LIMIT = "UNIT_LIMIT"
    INVALID_OFFER = "INVALID_OFFER"
    NO_HERO_ACTIONS = "NO_HERO_ACTIONS"
    NO_UNITS = "NO_UNITS"
    INVALID_ACTOR = "INVALID_ACTOR"
    ATTACK_TYPE_REQUIRED = "ATTACK_TYPE_REQUIRED"
    NO_SELECTION = "NO_SELECTION"
    INVALID_TARGET = "INVALID_TARGET"
    SELF_TARGET = "SELF_TARGET"
    TAUNT = "TAUNT"
    BELOW_THRESHOLD = "BELOW_THRESHOLD"
    NO_HANDLER = "NO_HANDLER"
    HANDLER_ERROR = "HANDLER_ERROR"


@dataclass(frozen=True)
class Outcome:
    """A user-facing notice describing what an action did."""
    kind: OutcomeKind
    title: str
    detail: str = ""
    code: ErrorCode | None = None

    @classmethod
    def info(cls, title: str, detail: str = "", code: ErrorCode | None = None) -> Outcome:
        return cls(OutcomeKind.INFO, title, detail, code)

    @classmethod
    def success(cls, title: str, detail: str = "") -> Outcome:
        return cls(OutcomeKind.SUCCESS, title, detail)

    @classmethod
    def rejected(cls, title: str, detail: str = "", code: ErrorCode | None = None) -> Outcome:
        return cls(OutcomeKind.REJECTED, title, detail, code)

    @classmethod
    def game_over(cls, title: str, detail: str = "") -> Outcome:
        return cls(OutcomeKind.GAME_OVER, title, detail)


@dataclass(frozen=True)
class ActionPayload:
    """
    Payload for an action - contains the action parameters.

    Different action types use different fields.
    Validation happens in the reducer and the component handlers.
    """
    player_id: int | None = None
    hero: Hero | None = None
    offer_index: int | None = None
    actor_kind: ActorKind | None = None
    unit_index: int | None = None
    attack_type: AttackType | None = None
    target: Target | None = None


@dataclass(frozen=True)
class Action:
    """
    A complete action to be applied to the game state.

    Actions are:
    - Logged for replay
    - Validated before application
    - Applied atomically by the reducer
    """
    action_type: ActionType
    payload: ActionPayload = field(default_factory=ActionPayload)

    @classmethod
    def select_hero(cls, hero: Hero, player_id: int) -> Action:
        return cls(ActionType.SELECT_HERO, ActionPayload(player_id=player_id, hero=hero))

    @classmethod
    def start_turn(cls, player_id: int) -> Action:
        return cls(ActionType.START_TURN, ActionPayload(player_id=player_id))

    @classmethod
    def advance_phase(cls) -> Action:
        return cls(ActionType.ADVANCE_PHASE)

    @classmethod
    def buy(cls, offer_index: int) -> Action:
        return cls(ActionType.BUY, ActionPayload(offer_index=offer_index))

    @classmethod
    def select(cls, actor_kind: ActorKind, unit_index: int | None = None) -> Action:
        return cls(
            ActionType.SELECT,
            ActionPayload(actor_kind=actor_kind, unit_index=unit_index),
        )

    @classmethod
    def select_attack_type(cls, attack_type: AttackType) -> Action:
        return cls(ActionType.SELECT_ATTACK_TYPE, ActionPayload(attack_type=attack_type))

    @classmethod
    def attack(cls, target: Target) -> Action:
        return cls(ActionType.ATTACK, ActionPayload(target=target))

    @classmethod
    def cancel(cls) -> Action:
        return cls(ActionType.CANCEL)


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - Whether the action took effect
    - The resulting state (the unchanged state on rejection)
    - Outcome descriptors, in the order they happened
    """
    success: bool
    new_state: Any | None = None  # GameState
    outcomes: list[Outcome] = field(default_factory=list)
    error: str | None = None
    error_code: ErrorCode | None = None

    @property
    def outcome(self) -> Outcome | None:
        """The outcome to headline; game over wins over everything else."""
        for outcome in self.outcomes:
            if outcome.kind == OutcomeKind.GAME_OVER:
                return outcome
        return self.outcomes[0] if self.outcomes else None

    @classmethod
    def failure(
        cls,
        state: Any,
        title: str,
        detail: str = "",
        error_code: ErrorCode | None = None,
        kind: OutcomeKind = OutcomeKind.REJECTED,
    ) -> ActionResult:
        """Create a failure result; the state is passed through untouched."""
        return cls(
            success=False,
            new_state=state,
            outcomes=[Outcome(kind, title, detail, error_code)],
            error=detail or title,
            error_code=error_code,
        )

    @classmethod
    def success_with_state(cls, state: Any, *outcomes: Outcome) -> ActionResult:
        """Create a success result with new state."""
        return cls(success=True, new_state=state, outcomes=list(outcomes))
