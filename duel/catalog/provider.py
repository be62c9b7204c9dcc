"""
Catalog Provider - Supplies cards to the engine.

The engine only ever talks to the CatalogProvider interface:
- heroes(): the fixed hero template list
- generate_monsters(location, count): location-scoped monster rolls
- generate_units(location, count): recruitable units, derived from monsters
- sample_equipment(count): draws from the flat equipment pool

RandomCatalog is the standard implementation. It owns a seeded
random.Random, so two catalogs with the same seed deal the same game.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
import random
import re

from ..engine_core.state import Equipment, Hero, Monster, Unit, UnitRole
from .equipment import EQUIPMENT_POOL
from .heroes import HERO_TEMPLATES
from .locations import get_location_profile


# One unit in five holds the line as a provocateur
PROVOCATEUR_CHANCE = 0.2

# Recruiting a unit costs this much more than its monster form is worth
UNIT_COST_MARKUP = 2


def _slug(name: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")


class CatalogProvider(ABC):
    """Interface between the engine and the card content."""

    @abstractmethod
    def heroes(self) -> tuple[Hero, ...]:
        """Return the hero templates players choose from."""

    @abstractmethod
    def generate_monsters(self, location: str, count: int) -> list[Monster]:
        """Roll `count` monsters for a location."""

    @abstractmethod
    def generate_units(self, location: str, count: int) -> list[Unit]:
        """Roll `count` recruitable units for a location."""

    @abstractmethod
    def sample_equipment(self, count: int) -> list[Equipment]:
        """Draw `count` distinct items from the equipment pool."""


class RandomCatalog(CatalogProvider):
    """
    Seeded catalog.

    Usage:
        catalog = RandomCatalog(seed=42)
        monsters = catalog.generate_monsters("forest", 2)
    """

    def __init__(self, seed: int | None = None, provocateur_chance: float = PROVOCATEUR_CHANCE):
        self.seed = seed
        self.provocateur_chance = provocateur_chance
        self._rng = random.Random(seed)

    def heroes(self) -> tuple[Hero, ...]:
        return HERO_TEMPLATES

    def generate_monsters(self, location: str, count: int) -> list[Monster]:
        if count < 0:
            raise ValueError(f"Cannot generate {count} monsters")
        profile = get_location_profile(location)
        monsters = []
        for _ in range(count):
            name = self._rng.choice(profile.monster_names)
            hp = self._rng.randint(*profile.hp_range)
            monsters.append(Monster(
                card_id=f"monster-{_slug(name)}-{self._instance_suffix()}",
                name=name,
                image=_slug(name),
                description=f"A {name.lower()} lurking in the {location}",
                hp=hp,
                max_hp=hp,
                ap=self._rng.randint(*profile.ap_range),
                mp=self._rng.randint(*profile.mp_range),
                gold_reward=self._rng.randint(*profile.gold_range),
                location=location,
            ))
        return monsters

    def generate_units(self, location: str, count: int) -> list[Unit]:
        units = []
        for monster in self.generate_monsters(location, count):
            is_provocateur = self._rng.random() < self.provocateur_chance
            units.append(Unit(
                card_id=f"unit-{_slug(monster.name)}-{self._instance_suffix()}",
                name=monster.name,
                image=monster.image,
                description=f"A {monster.name.lower()} sworn to your banner",
                hp=monster.hp,
                max_hp=monster.max_hp,
                ap=monster.ap,
                mp=monster.mp,
                cost=monster.gold_reward + UNIT_COST_MARKUP,
                role=UnitRole.PROVOCATEUR if is_provocateur else UnitRole.STANDARD,
            ))
        return units

    def sample_equipment(self, count: int) -> list[Equipment]:
        if count < 0:
            raise ValueError(f"Cannot sample {count} equipment items")
        picked = self._rng.sample(EQUIPMENT_POOL, min(count, len(EQUIPMENT_POOL)))
        return [
            item._copy_with(card_id=f"{item.card_id}-{self._instance_suffix()}")
            for item in picked
        ]

    def _instance_suffix(self) -> str:
        """Unique-per-game instance id drawn from the seeded generator."""
        return f"{self._rng.getrandbits(32):08x}"
