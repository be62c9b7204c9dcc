"""
Combat Resolver.

Resolves an attack from the current selection against a target:
- Hero vs hero: damage mitigated by the *other* resistance stat
  (physical by rp, magical by dp), at least 1
- Vs units: all-or-nothing against the defender's total unit hp
- Vs monster: all-or-nothing against the monster's hp, then the monster
  counterattacks with both its power stats
- Provocateurs: while the defender has one, only it may be attacked
  (the hero cannot be); monsters are never covered by this rule
"""

from __future__ import annotations

from .action import ActionResult, ErrorCode, Outcome
from .state import (
    ActionsUsed,
    ActorKind,
    AttackType,
    GameOverReason,
    GameState,
    Hero,
    Monster,
    Player,
    Target,
    TargetKind,
)


def attack_value(state: GameState) -> int:
    """Power of the pending attack for the selected actor and attack type."""
    player = state.current
    stat = "ap" if state.attack_type == AttackType.PHYSICAL else "mp"
    if state.selection.actor_kind == ActorKind.HERO:
        return getattr(player.hero, stat)
    # Units act as one pool
    return player.total_unit_stat(stat)


def hero_damage(value: int, attack_type: AttackType, defender: Hero) -> int:
    """Damage a hero takes from a direct attack."""
    if attack_type == AttackType.PHYSICAL:
        return max(1, value - defender.rp)
    return max(1, value - defender.dp)


def counterattack_damage(monster: Monster, hero: Hero) -> int:
    """Damage a monster deals back when it is defeated."""
    physical = max(0, monster.ap - hero.dp)
    magical = max(0, monster.mp - hero.rp)
    return physical + magical


def violates_taunt(defender: Player, target: Target) -> bool:
    """Whether a provocateur forbids attacking `target`."""
    if target.kind == TargetKind.MONSTER:
        return False
    provocateur = defender.provocateur_index()
    if provocateur is None:
        return False
    if target.kind == TargetKind.HERO:
        return True
    return target.index != provocateur


def _spend_action(state: GameState, actor_kind: ActorKind) -> GameState:
    """Clear the pending attack and use up the actor's action."""
    used = state.actions_used
    if actor_kind == ActorKind.UNIT:
        return state.clear_selection()._copy_with(
            actions_used=ActionsUsed(buy=used.buy, hero_action=used.hero_action, unit_action=True),
        )
    return state.clear_selection()._copy_with(
        actions_used=ActionsUsed(buy=used.buy, hero_action=True, unit_action=used.unit_action),
        remaining_hero_actions=state.remaining_hero_actions - 1,
    )


def _validate_target(state: GameState, target: Target) -> tuple[str, str, ErrorCode] | None:
    """Return (title, detail, code) when the target cannot be attacked."""
    if target.kind == TargetKind.MONSTER:
        if target.index is None or not 0 <= target.index < len(state.monsters):
            return "No such monster!", f"There is no monster at position {target.index}.", ErrorCode.INVALID_TARGET
        return None

    if target.player_id not in (1, 2):
        return "No such player!", f"Player {target.player_id} does not exist.", ErrorCode.INVALID_TARGET
    if target.player_id == state.current_player:
        return "Cannot attack!", "You cannot attack your own forces.", ErrorCode.SELF_TARGET

    defender = state.get_player(target.player_id)
    if target.kind == TargetKind.HERO and defender.hero is None:
        return "No hero!", f"Player {target.player_id} has no hero.", ErrorCode.INVALID_TARGET
    if target.kind == TargetKind.UNIT:
        if target.index is None or not 0 <= target.index < len(defender.units):
            return "No such unit!", f"There is no enemy unit at position {target.index}.", ErrorCode.INVALID_TARGET
    return None


def attack(state: GameState, target: Target) -> ActionResult:
    """Resolve the pending attack against `target`."""
    if state.selection is None:
        return ActionResult.failure(
            state, "Nothing selected!", "Select your hero or units first.", ErrorCode.NO_SELECTION,
        )
    if state.attack_type is None:
        return ActionResult.failure(
            state,
            "Select attack type",
            "Choose between Physical or Magical attack.",
            ErrorCode.ATTACK_TYPE_REQUIRED,
        )

    problem = _validate_target(state, target)
    if problem:
        title, detail, code = problem
        return ActionResult.failure(state.clear_selection(), title, detail, code)

    if target.kind != TargetKind.MONSTER:
        defender = state.get_player(target.player_id)
        if violates_taunt(defender, target):
            return ActionResult.failure(
                state.clear_selection(),
                "Cannot attack!",
                "You must attack the provocateur unit first!",
                ErrorCode.TAUNT,
            )

    value = attack_value(state)
    actor_kind = state.selection.actor_kind

    if target.kind == TargetKind.HERO:
        return _attack_hero(state, target.player_id, value, actor_kind)
    if target.kind == TargetKind.UNIT:
        return _attack_units(state, target.player_id, value, actor_kind)
    return _attack_monster(state, target.index, value, actor_kind)


def _attack_hero(state: GameState, defender_id: int, value: int, actor_kind: ActorKind) -> ActionResult:
    defender = state.get_player(defender_id)
    attacker = state.current
    damage = hero_damage(value, state.attack_type, defender.hero)
    wounded = defender.hero.take_damage(damage)

    new_state = _spend_action(state.with_player(defender._copy_with(hero=wounded)), actor_kind)

    if wounded.is_defeated:
        new_state = new_state.end_game(state.current_player, GameOverReason.HERO_DEFEATED)
        return ActionResult.success_with_state(
            new_state,
            Outcome.game_over(
                f"Player {state.current_player} wins!",
                f"{attacker.hero.name} defeated {defender.hero.name}!",
            ),
        )

    return ActionResult.success_with_state(
        new_state,
        Outcome.success("Attack successful!", f"Dealt {damage} damage to {defender.hero.name}!"),
    )


def _attack_units(state: GameState, defender_id: int, value: int, actor_kind: ActorKind) -> ActionResult:
    defender = state.get_player(defender_id)
    total_hp = defender.total_unit_stat("hp")

    if value < total_hp:
        return ActionResult.success_with_state(
            _spend_action(state, actor_kind),
            Outcome.info(
                "Attack unsuccessful!",
                f"Your attack ({value}) was less than the enemy units' total health "
                f"({total_hp})! No damage dealt.",
                ErrorCode.BELOW_THRESHOLD,
            ),
        )

    new_state = _spend_action(state.with_player(defender._copy_with(units=())), actor_kind)
    return ActionResult.success_with_state(
        new_state,
        Outcome.success(
            "Units destroyed!",
            f"Your {state.attack_type.value} attack ({value}) destroyed all enemy units "
            f"({total_hp} total health)!",
        ),
    )


def _attack_monster(state: GameState, index: int, value: int, actor_kind: ActorKind) -> ActionResult:
    monster = state.monsters[index]

    if value < monster.hp:
        return ActionResult.success_with_state(
            _spend_action(state, actor_kind),
            Outcome.info(
                "Attack unsuccessful!",
                f"Your {state.attack_type.value} attack ({value}) was less than "
                f"{monster.name}'s health ({monster.hp})! No damage dealt.",
                ErrorCode.BELOW_THRESHOLD,
            ),
        )

    attacker = state.current
    outcomes = []

    hero = attacker.hero
    damage = counterattack_damage(monster, hero)
    if damage > 0:
        hero = hero.take_damage(damage)
        outcomes.append(Outcome.info(
            f"{monster.name} counterattacked!",
            f"Your hero took {damage} damage.",
        ))

    outcomes.append(Outcome.success(
        "Monster defeated!",
        f"{monster.name} was defeated! Gained {monster.gold_reward} gold!",
    ))

    # The reward is paid even if the counterattack kills the hero
    new_attacker = attacker._copy_with(gold=attacker.gold + monster.gold_reward, hero=hero)
    new_state = state.with_player(new_attacker)._copy_with(
        monsters=state.monsters[:index] + state.monsters[index + 1:],
    )
    new_state = _spend_action(new_state, actor_kind)

    if hero.is_defeated:
        new_state = new_state.end_game(state.opponent_id, GameOverReason.COUNTERATTACK)
        outcomes.append(Outcome.game_over(
            f"Player {state.current_player} defeated!",
            f"{hero.name} was killed by {monster.name}'s counterattack! "
            f"Player {state.opponent_id} wins!",
        ))

    return ActionResult.success_with_state(new_state, *outcomes)
