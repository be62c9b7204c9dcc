"""
Hero templates.

Warriors lean on physical power (ap) and physical resistance (dp),
mages on magical power (mp) and magical resistance (rp). A few heroes
carry both attack stats and must pick an attack type when they act.
"""

from ..engine_core.state import Hero, HeroClass


def _hero(
    card_id: str,
    name: str,
    description: str,
    hero_class: HeroClass,
    hp: int,
    ap: int,
    mp: int,
    dp: int,
    rp: int,
    sp: int,
) -> Hero:
    return Hero(
        card_id=card_id,
        name=name,
        image=card_id.removeprefix("hero-"),
        description=description,
        hp=hp,
        max_hp=hp,
        ap=ap,
        mp=mp,
        dp=dp,
        rp=rp,
        sp=sp,
        hero_class=hero_class,
    )


# ============================================================================
# Warriors
# ============================================================================

KNIGHT = _hero(
    "hero-knight", "Knight",
    "A steadfast knight in heavy plate",
    HeroClass.WARRIOR, hp=30, ap=6, mp=0, dp=3, rp=2, sp=1,
)

BERSERKER = _hero(
    "hero-berserker", "Berserker",
    "Strikes twice before the enemy can blink",
    HeroClass.WARRIOR, hp=26, ap=5, mp=0, dp=1, rp=1, sp=2,
)

PALADIN = _hero(
    "hero-paladin", "Paladin",
    "A holy warrior who wields both blade and prayer",
    HeroClass.WARRIOR, hp=32, ap=5, mp=2, dp=3, rp=3, sp=1,
)


# ============================================================================
# Mages
# ============================================================================

ARCHMAGE = _hero(
    "hero-archmage", "Archmage",
    "Master of raw arcane power",
    HeroClass.MAGE, hp=22, ap=0, mp=8, dp=1, rp=3, sp=1,
)

BATTLEMAGE = _hero(
    "hero-battlemage", "Battlemage",
    "Blends sword and spell",
    HeroClass.MAGE, hp=24, ap=3, mp=5, dp=2, rp=2, sp=1,
)

NECROMANCER = _hero(
    "hero-necromancer", "Necromancer",
    "Drains life with rapid curses",
    HeroClass.MAGE, hp=20, ap=0, mp=5, dp=1, rp=2, sp=2,
)


HERO_TEMPLATES: tuple[Hero, ...] = (
    KNIGHT,
    BERSERKER,
    PALADIN,
    ARCHMAGE,
    BATTLEMAGE,
    NECROMANCER,
)

_HEROES_BY_ID = {hero.card_id: hero for hero in HERO_TEMPLATES}


def get_hero_template(card_id: str) -> Hero:
    """Look up a hero template by id."""
    try:
        return _HEROES_BY_ID[card_id]
    except KeyError:
        raise ValueError(f"Unknown hero template: {card_id}") from None
