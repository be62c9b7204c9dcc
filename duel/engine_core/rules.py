"""
Game Rules - Tunable constants of a duel.

The reducer is built from a GameRules instance the same way it
would be built from a game definition. Defaults are the standard game.
"""

from __future__ import annotations
from dataclasses import dataclass


LOCATIONS = ("forest", "ruins", "catacombs", "necropolis", "chthonian", "crypt")


@dataclass(frozen=True)
class GameRules:
    """Constants consumed by the engine components."""
    day_limit: int = 18
    days_per_location: int = 3
    locations: tuple[str, ...] = LOCATIONS

    # Economy
    turn_gold: int = 5
    starting_gold: int = 0
    cost_reduction: float = 0.8
    min_cost: int = 1

    # Board limits
    max_units: int = 3
    monster_pool_size: int = 2

    @property
    def starting_location(self) -> str:
        return self.locations[0]


DEFAULT_RULES = GameRules()
