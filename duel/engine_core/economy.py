"""
Economy - Shop pricing, restocking and purchases.

Every generated shop offer goes through the cost-reduction policy.
The shop keeps a fixed layout: whenever an offer leaves it, a fresh
offer of the same kind takes its slot.
"""

from __future__ import annotations
import math
from typing import TYPE_CHECKING

from .action import ActionResult, ErrorCode, Outcome
from .rules import GameRules
from .state import (
    ActionsUsed,
    Equipment,
    GameState,
    Player,
    ShopOffer,
    Stat,
    Unit,
)

if TYPE_CHECKING:
    from ..catalog import CatalogProvider


def reduce_cost(offer: ShopOffer, rules: GameRules) -> ShopOffer:
    """Apply the cost-reduction policy to a generated offer."""
    new_cost = max(rules.min_cost, math.floor(offer.cost * rules.cost_reduction))
    return offer._copy_with(cost=new_cost)


def fresh_offer(
    kind: type,
    location: str,
    catalog: CatalogProvider,
    rules: GameRules,
) -> ShopOffer:
    """Generate one reduced-cost offer of the given kind for a location."""
    if kind is Unit:
        offer = catalog.generate_units(location, 1)[0]
    else:
        offer = catalog.sample_equipment(1)[0]
    return reduce_cost(offer, rules)


def opening_shop(location: str, catalog: CatalogProvider, rules: GameRules) -> tuple[ShopOffer, ...]:
    """The shop at game start: one unit and one piece of equipment."""
    return (
        fresh_offer(Unit, location, catalog, rules),
        fresh_offer(Equipment, location, catalog, rules),
    )


def restock_shop(
    state: GameState,
    catalog: CatalogProvider,
    rules: GameRules,
    location: str | None = None,
) -> GameState:
    """Replace every offer one-for-one with a fresh offer of the same kind."""
    location = location or state.location
    if not state.shop:
        return state._copy_with(shop=opening_shop(location, catalog, rules))
    new_shop = tuple(
        fresh_offer(type(offer), location, catalog, rules)
        for offer in state.shop
    )
    return state._copy_with(shop=new_shop)


def can_afford_any(state: GameState, player: Player) -> bool:
    return any(offer.cost <= player.gold for offer in state.shop)


def equip(player: Player, item: Equipment) -> Player:
    """
    Equip an item on the player's hero.

    The item replaces whatever occupied its slot (the old item is
    discarded) and its bonus is added to the hero for good.
    """
    hero = player.hero
    if hero is not None:
        hero = hero.with_bonus(item.bonus_stat, item.bonus_amount)
    return player._copy_with(hero=hero, equipment=player.equipment.equip(item))


def buy(
    state: GameState,
    offer_index: int,
    catalog: CatalogProvider,
    rules: GameRules,
) -> ActionResult:
    """Buy the shop offer at `offer_index` for the current player."""
    if state.actions_used.buy:
        return ActionResult.failure(
            state,
            "Action already used!",
            "You can only buy one item per turn.",
            ErrorCode.ACTION_USED,
        )

    if offer_index is None or not 0 <= offer_index < len(state.shop):
        return ActionResult.failure(
            state,
            "No such offer!",
            f"The shop has no offer at position {offer_index}.",
            ErrorCode.INVALID_OFFER,
        )

    player = state.current
    offer = state.shop[offer_index]

    if player.gold < offer.cost:
        return ActionResult.failure(
            state,
            "Not enough gold!",
            f"You need {offer.cost} gold to buy {offer.name}.",
            ErrorCode.INSUFFICIENT_GOLD,
        )

    if isinstance(offer, Unit):
        if len(player.units) >= rules.max_units:
            return ActionResult.failure(
                state,
                "Unit limit reached!",
                f"You can only have {rules.max_units} units at a time.",
                ErrorCode.UNIT_LIMIT,
            )
        new_player = player._copy_with(
            units=player.units + (offer,),
            gold=player.gold - offer.cost,
        )
        detail = f"{offer.name} joined your army."
    else:
        new_player = equip(player._copy_with(gold=player.gold - offer.cost), offer)
        bonus = offer.bonus_stat.value.upper()
        detail = f"{offer.name} equipped (+{offer.bonus_amount} {bonus})."
        if offer.bonus_stat == Stat.HP:
            detail = f"{offer.name} equipped (+{offer.bonus_amount} HP and max HP)."

    new_shop = list(state.shop)
    new_shop[offer_index] = fresh_offer(type(offer), state.location, catalog, rules)

    new_state = state.with_player(new_player)._copy_with(
        shop=tuple(new_shop),
        actions_used=ActionsUsed(
            buy=True,
            hero_action=state.actions_used.hero_action,
            unit_action=state.actions_used.unit_action,
        ),
    )
    return ActionResult.success_with_state(
        new_state,
        Outcome.success(f"Bought {offer.name} for {offer.cost} gold", detail),
    )
