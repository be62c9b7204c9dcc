"""
Day/Location Progression.

The duel travels through a fixed route of locations. Each location
lasts `days_per_location` days; once the route runs out the last
location stays in play. A new day starts when player 1 begins a turn.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from .rules import GameRules
from .state import GameState

if TYPE_CHECKING:
    from ..catalog import CatalogProvider


def location_for_day(day: int, rules: GameRules) -> str:
    """Map a day (1-based) to its location."""
    index = min((day - 1) // rules.days_per_location, len(rules.locations) - 1)
    return rules.locations[max(index, 0)]


def day_of_location(day: int, rules: GameRules) -> int:
    """Which day of the current location this is (1..days_per_location)."""
    return (day - 1) % rules.days_per_location + 1


def days_remaining(day: int, rules: GameRules) -> int:
    return max(0, rules.day_limit - day)


def next_day(state: GameState, player_id: int) -> int:
    """
    Day counter for a turn starting for `player_id`.

    Only player 1 advances the day. The opening turn keeps day 1:
    player 1 is already current then and nothing has been played.
    """
    if player_id != 1:
        return state.day
    if state.day == 1 and state.current_player == 1:
        return 1
    return state.day + 1


def is_past_day_limit(day: int, rules: GameRules) -> bool:
    return day > rules.day_limit


def top_up_monsters(
    state: GameState,
    catalog: CatalogProvider,
    rules: GameRules,
    location: str | None = None,
) -> GameState:
    """Refill the shared monster pool to its target size."""
    missing = rules.monster_pool_size - len(state.monsters)
    if missing <= 0:
        return state
    fresh = catalog.generate_monsters(location or state.location, missing)
    return state._copy_with(monsters=state.monsters + tuple(fresh))
