"""
Turn/Phase State Machine.

Coarse phases: setup -> chooseHero -> player1Turn <-> player2Turn -> gameOver.
Inside a player turn the action phase runs buy -> heroAction -> unitAction -> end.

Auto-skip: after every operation the reducer calls settle(), which keeps
advancing while the current action phase has nothing the player could do.
settle() is a plain loop, so it is idempotent and bounded by the number
of action phases.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from .action import ActionResult, ErrorCode, Outcome
from .economy import can_afford_any, opening_shop, restock_shop
from .progression import (
    day_of_location,
    is_past_day_limit,
    location_for_day,
    next_day,
    top_up_monsters,
)
from .rules import GameRules
from .state import (
    ActionPhase,
    ActionsUsed,
    GameOverReason,
    GamePhase,
    GameState,
    Hero,
)

if TYPE_CHECKING:
    from ..catalog import CatalogProvider


PHASE_ORDER = (
    ActionPhase.BUY,
    ActionPhase.HERO_ACTION,
    ActionPhase.UNIT_ACTION,
    ActionPhase.END,
)


def next_action_phase(phase: ActionPhase) -> ActionPhase | None:
    """The phase after `phase`, or None once the turn is at its end."""
    index = PHASE_ORDER.index(phase)
    if index + 1 < len(PHASE_ORDER):
        return PHASE_ORDER[index + 1]
    return None


def should_skip_phase(state: GameState, phase: ActionPhase) -> bool:
    """Whether the current player has nothing to do in `phase`."""
    player = state.current

    if phase == ActionPhase.BUY:
        return not can_afford_any(state, player)

    if phase == ActionPhase.HERO_ACTION:
        if state.remaining_hero_actions <= 0:
            return True
        hero = player.hero
        return hero is not None and hero.ap == 0 and hero.mp == 0

    if phase == ActionPhase.UNIT_ACTION:
        return len(player.units) == 0 or state.actions_used.unit_action

    return False


def settle(state: GameState) -> GameState:
    """
    Run the auto-skip cascade until no further skip applies.

    Never runs while a selection is pending, and never leaves `end`:
    ending the turn is always the player's call.
    """
    for _ in PHASE_ORDER:
        if not state.phase.is_player_turn or state.targeting_mode:
            break
        phase = state.action_phase
        if phase == ActionPhase.END or not should_skip_phase(state, phase):
            break
        state = state._copy_with(action_phase=next_action_phase(phase))
    return state


# =============================================================================
# Hero selection
# =============================================================================

def select_hero(
    state: GameState,
    template: Hero,
    player_id: int,
    catalog: CatalogProvider,
    rules: GameRules,
) -> ActionResult:
    """Assign a hero to a player; the second assignment starts the game."""
    if player_id not in (1, 2):
        return ActionResult.failure(
            state, "No such player!", f"Player {player_id} does not exist.",
            ErrorCode.INVALID_PLAYER,
        )

    player = state.get_player(player_id)
    if player.hero is not None:
        return ActionResult.failure(
            state,
            "Hero already chosen!",
            f"Player {player_id} already plays {player.hero.name}.",
            ErrorCode.HERO_ALREADY_CHOSEN,
        )

    hero = template._copy_with(card_id=f"{template.card_id}-p{player_id}")
    new_state = state.with_player(player._copy_with(hero=hero))
    outcome = Outcome.success(f"Player {player_id} selected {hero.name}!", hero.description)

    if not all(p.hero is not None for p in new_state.players):
        return ActionResult.success_with_state(new_state, outcome)

    location = rules.starting_location
    first = new_state.get_player(1)
    new_state = new_state._copy_with(
        phase=GamePhase.PLAYER1_TURN,
        action_phase=ActionPhase.BUY,
        current_player=1,
        monsters=tuple(catalog.generate_monsters(location, rules.monster_pool_size)),
        shop=opening_shop(location, catalog, rules),
        actions_used=ActionsUsed(),
        remaining_hero_actions=first.hero.sp,
        selection=None,
        attack_type=None,
        day=1,
        location=location,
    )
    return ActionResult.success_with_state(
        new_state,
        outcome,
        Outcome.info("The duel begins!", f"Day 1 in the {location}. Player 1 moves first."),
    )


# =============================================================================
# Turn transitions
# =============================================================================

def begin_turn(state: GameState, player_id: int, rules: GameRules) -> ActionResult:
    """
    Start `player_id`'s turn.

    Recomputes the day first: running past the day limit ends the game
    in a draw and nothing else of the turn start happens.
    """
    if player_id not in (1, 2):
        return ActionResult.failure(
            state, "No such player!", f"Player {player_id} does not exist.",
            ErrorCode.INVALID_PLAYER,
        )

    day = next_day(state, player_id)
    if is_past_day_limit(day, rules):
        new_state = state.end_game(None, GameOverReason.DAY_LIMIT)._copy_with(day=day)
        return ActionResult.success_with_state(
            new_state,
            Outcome.game_over(
                "Game over!",
                f"The duel ended after {rules.day_limit} days. Both players lose!",
            ),
        )

    location = location_for_day(day, rules)
    player = state.get_player(player_id)
    hero_speed = player.hero.sp if player.hero else 0

    new_state = state.with_player(player._copy_with(gold=rules.turn_gold))
    new_state = new_state._copy_with(
        current_player=player_id,
        phase=GamePhase.turn_of(player_id),
        action_phase=ActionPhase.BUY,
        day=day,
        location=location,
        actions_used=ActionsUsed(),
        selection=None,
        attack_type=None,
        remaining_hero_actions=hero_speed,
    )

    outcomes = [
        Outcome.info(
            f"Player {player_id}'s turn",
            f"Day {day} in the {location} "
            f"({day_of_location(day, rules)} of {rules.days_per_location}).",
        )
    ]
    if location != state.location:
        outcomes.append(Outcome.info("New location!", f"The duel moves on to the {location}."))
    return ActionResult.success_with_state(new_state, *outcomes)


def end_turn(state: GameState, catalog: CatalogProvider, rules: GameRules) -> ActionResult:
    """Hand the turn to the other player and restock the board."""
    result = begin_turn(state, state.opponent_id, rules)
    new_state = result.new_state
    if new_state.phase == GamePhase.GAME_OVER:
        return result

    new_state = top_up_monsters(new_state, catalog, rules, new_state.location)
    new_state = restock_shop(new_state, catalog, rules, new_state.location)
    return ActionResult.success_with_state(new_state, *result.outcomes)


def advance_phase(state: GameState, catalog: CatalogProvider, rules: GameRules) -> ActionResult:
    """Move to the next action phase; from `end` this ends the turn."""
    upcoming = next_action_phase(state.action_phase)
    if upcoming is None:
        return end_turn(state, catalog, rules)

    new_state = state.clear_selection()._copy_with(action_phase=upcoming)
    return ActionResult.success_with_state(new_state)
