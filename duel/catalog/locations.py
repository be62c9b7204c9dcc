"""
Location profiles.

Each location the duel travels through has its own monster pool.
Stat ranges grow with severity: the further down the route,
the tougher (and richer) the monsters.
"""

from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class LocationProfile:
    """Monster generation parameters for one location."""
    name: str
    severity: int
    description: str
    monster_names: tuple[str, ...]
    hp_range: tuple[int, int]
    ap_range: tuple[int, int]
    mp_range: tuple[int, int]
    gold_range: tuple[int, int]


LOCATION_PROFILES: dict[str, LocationProfile] = {
    profile.name: profile
    for profile in (
        LocationProfile(
            name="forest",
            severity=0,
            description="Sunlight still reaches the forest floor. Wolves and goblins prowl the paths.",
            monster_names=("Wolf", "Goblin", "Giant Spider", "Bandit", "Wild Boar"),
            hp_range=(3, 6),
            ap_range=(1, 3),
            mp_range=(0, 1),
            gold_range=(1, 3),
        ),
        LocationProfile(
            name="ruins",
            severity=1,
            description="Crumbling walls of a fallen kingdom, haunted by its last defenders.",
            monster_names=("Skeleton", "Ghoul", "Cultist", "Stone Golem", "Harpy"),
            hp_range=(5, 9),
            ap_range=(2, 4),
            mp_range=(0, 2),
            gold_range=(2, 4),
        ),
        LocationProfile(
            name="catacombs",
            severity=2,
            description="Endless tunnels of bone where the dead do not rest.",
            monster_names=("Wraith", "Bone Knight", "Ghast", "Banshee", "Crypt Bat Swarm"),
            hp_range=(8, 12),
            ap_range=(2, 5),
            mp_range=(1, 4),
            gold_range=(3, 5),
        ),
        LocationProfile(
            name="necropolis",
            severity=3,
            description="A city of the dead ruled by liches and their knights.",
            monster_names=("Lich Acolyte", "Death Knight", "Abomination", "Vampire", "Shade"),
            hp_range=(11, 16),
            ap_range=(3, 6),
            mp_range=(2, 5),
            gold_range=(4, 7),
        ),
        LocationProfile(
            name="chthonian",
            severity=4,
            description="The underworld depths, where shadows have teeth.",
            monster_names=("Shadow Fiend", "Chthonian Worm", "Nightmare", "Pit Horror", "Hellhound"),
            hp_range=(14, 20),
            ap_range=(4, 8),
            mp_range=(3, 6),
            gold_range=(6, 9),
        ),
        LocationProfile(
            name="crypt",
            severity=5,
            description="The final crypt. Nothing that enters leaves unchanged.",
            monster_names=("Dracolich", "Bone Colossus", "Elder Lich", "Crypt Lord", "Void Herald"),
            hp_range=(18, 25),
            ap_range=(5, 9),
            mp_range=(4, 8),
            gold_range=(8, 12),
        ),
    )
}


def get_location_profile(location: str) -> LocationProfile:
    """Look up the generation profile of a location."""
    try:
        return LOCATION_PROFILES[location]
    except KeyError:
        raise ValueError(f"Unknown location: {location}") from None
