"""
Targeting & Selection.

A player first selects who acts (their hero, or their units as one
pool), then picks a target. Selection enforces the per-turn limits and
settles the attack type when the actor can only attack one way.
"""

from __future__ import annotations

from .action import ActionResult, ErrorCode, Outcome, OutcomeKind
from .state import ActorKind, AttackType, GameState, Selection


def resolve_attack_type(
    ap: int,
    mp: int,
    pending: AttackType | None,
) -> tuple[AttackType | None, bool]:
    """
    Work out the attack type for an actor with the given power stats.

    Returns (attack_type, ambiguous). An actor with exactly one nonzero
    power stat always attacks that way. An actor with both must have a
    pending choice, otherwise the selection is ambiguous.
    """
    if ap > 0 and mp == 0:
        return AttackType.PHYSICAL, False
    if ap == 0 and mp > 0:
        return AttackType.MAGICAL, False
    if ap > 0 and mp > 0 and pending is None:
        return None, True
    return pending, False


def select(state: GameState, actor_kind: ActorKind, unit_index: int | None = None) -> ActionResult:
    """Select the current player's hero or unit pool for an attack."""
    player = state.current

    if actor_kind == ActorKind.UNIT:
        if state.actions_used.unit_action:
            return ActionResult.failure(
                state,
                "Action already used!",
                "You can only use one unit action per turn.",
                ErrorCode.ACTION_USED,
            )
        if not player.units:
            return ActionResult.failure(
                state, "No units!", "You have no units to command.", ErrorCode.NO_UNITS,
            )
        if unit_index is not None and not 0 <= unit_index < len(player.units):
            return ActionResult.failure(
                state,
                "No such unit!",
                f"You have no unit at position {unit_index}.",
                ErrorCode.INVALID_ACTOR,
            )
        # Units attack as one pool, so the pooled stats decide the type like a hero's.
        ap = player.total_unit_stat("ap")
        mp = player.total_unit_stat("mp")
    else:
        if state.remaining_hero_actions <= 0:
            return ActionResult.failure(
                state,
                "No actions remaining!",
                "Your hero has used all available actions this turn.",
                ErrorCode.NO_HERO_ACTIONS,
            )
        ap, mp = player.hero.ap, player.hero.mp
        unit_index = None

    attack_type, ambiguous = resolve_attack_type(ap, mp, state.attack_type)
    if ambiguous:
        return ActionResult.failure(
            state,
            "Select attack type",
            "Choose between Physical or Magical attack.",
            ErrorCode.ATTACK_TYPE_REQUIRED,
            kind=OutcomeKind.INFO,
        )

    new_state = state._copy_with(
        selection=Selection(actor_kind=actor_kind, unit_index=unit_index),
        attack_type=attack_type,
    )
    actor = player.hero.name if actor_kind == ActorKind.HERO else "Your units"
    return ActionResult.success_with_state(
        new_state,
        Outcome.info(f"{actor} ready to attack", "Choose a target."),
    )


def select_attack_type(state: GameState, attack_type: AttackType) -> ActionResult:
    """Set the pending attack type; nothing else changes."""
    return ActionResult.success_with_state(state._copy_with(attack_type=attack_type))


def cancel(state: GameState) -> ActionResult:
    """Drop any pending selection and attack type."""
    return ActionResult.success_with_state(state.clear_selection())
