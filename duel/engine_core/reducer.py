"""
Reducer - Applies actions to game state.

The reducer is the single point of state mutation.
All state changes must go through apply_action().

Design principles:
- Pure function: (state, action) -> new_state
- Validates the coarse phase before dispatching
- Delegates game rules to the component modules
- Runs the auto-skip cascade on every resulting state
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from . import combat, economy, phases, targeting
from .action import Action, ActionResult, ActionType, ErrorCode
from .rules import DEFAULT_RULES, GameRules
from .state import GamePhase, GameState

if TYPE_CHECKING:
    from ..catalog import CatalogProvider


@dataclass
class Reducer:
    """
    Reducer applies actions to game state.

    Stateless - all state is in GameState.
    Rules and catalog provide the constants and the card supply.
    """
    catalog: CatalogProvider
    rules: GameRules = field(default_factory=lambda: DEFAULT_RULES)

    def apply(self, state: GameState, action: Action) -> ActionResult:
        """
        Apply an action to the game state.

        Returns ActionResult with the new state. Rejected actions
        return the state unchanged along with the reason.
        """
        # Validate action is legal
        validation_error = self._validate_action(state, action)
        if validation_error:
            return ActionResult.failure(state, "Not now!", validation_error, ErrorCode.WRONG_PHASE)

        # Dispatch to handler based on action type
        handler = self._get_handler(action.action_type)
        if not handler:
            return ActionResult.failure(
                state,
                "Unknown action!",
                f"No handler for action type: {action.action_type}",
                ErrorCode.NO_HANDLER,
            )

        try:
            result = handler(state, action)
        except Exception as e:
            return ActionResult.failure(state, "Action failed!", str(e), ErrorCode.HANDLER_ERROR)

        new_state = phases.settle(result.new_state)
        # Log action to history if successful
        if result.success:
            new_state = new_state._copy_with(action_history=new_state.action_history + (action,))
        result.new_state = new_state
        return result

    def _validate_action(self, state: GameState, action: Action) -> str | None:
        """
        Validate that an action is legal in the current phase.

        Returns error message if invalid, None if valid.
        """
        if state.phase == GamePhase.GAME_OVER:
            return "Game is over - no actions allowed"

        if action.action_type == ActionType.SELECT_HERO:
            if state.phase != GamePhase.CHOOSE_HERO:
                return "Heroes can only be chosen before the duel starts"
            return None

        if state.phase in (GamePhase.SETUP, GamePhase.CHOOSE_HERO):
            return "Game not started - choose heroes first"

        return None

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.SELECT_HERO: self._handle_select_hero,
            ActionType.START_TURN: self._handle_start_turn,
            ActionType.ADVANCE_PHASE: self._handle_advance_phase,
            ActionType.BUY: self._handle_buy,
            ActionType.SELECT: self._handle_select,
            ActionType.SELECT_ATTACK_TYPE: self._handle_select_attack_type,
            ActionType.ATTACK: self._handle_attack,
            ActionType.CANCEL: self._handle_cancel,
        }
        return handlers.get(action_type)

    def _handle_select_hero(self, state: GameState, action: Action) -> ActionResult:
        payload = action.payload
        return phases.select_hero(state, payload.hero, payload.player_id, self.catalog, self.rules)

    def _handle_start_turn(self, state: GameState, action: Action) -> ActionResult:
        return phases.begin_turn(state, action.payload.player_id, self.rules)

    def _handle_advance_phase(self, state: GameState, action: Action) -> ActionResult:
        return phases.advance_phase(state, self.catalog, self.rules)

    def _handle_buy(self, state: GameState, action: Action) -> ActionResult:
        return economy.buy(state, action.payload.offer_index, self.catalog, self.rules)

    def _handle_select(self, state: GameState, action: Action) -> ActionResult:
        payload = action.payload
        return targeting.select(state, payload.actor_kind, payload.unit_index)

    def _handle_select_attack_type(self, state: GameState, action: Action) -> ActionResult:
        return targeting.select_attack_type(state, action.payload.attack_type)

    def _handle_attack(self, state: GameState, action: Action) -> ActionResult:
        return combat.attack(state, action.payload.target)

    def _handle_cancel(self, state: GameState, action: Action) -> ActionResult:
        return targeting.cancel(state)


def apply_action(
    catalog: CatalogProvider,
    state: GameState,
    action: Action,
    rules: GameRules = DEFAULT_RULES,
) -> ActionResult:
    """
    Convenience function to apply an action.

    Creates a Reducer and applies the action.
    """
    reducer = Reducer(catalog=catalog, rules=rules)
    return reducer.apply(state, action)
