"""
Equipment pool.

A flat pool, not tied to locations. Weapons raise attack stats
or speed, armor raises resistances or health.
"""

from ..engine_core.state import Equipment, EquipmentType, Stat


def _item(
    card_id: str,
    name: str,
    description: str,
    equipment_type: EquipmentType,
    bonus_stat: Stat,
    bonus_amount: int,
    cost: int,
) -> Equipment:
    return Equipment(
        card_id=card_id,
        name=name,
        image=card_id.removeprefix("equipment-"),
        description=description,
        equipment_type=equipment_type,
        bonus_stat=bonus_stat,
        bonus_amount=bonus_amount,
        cost=cost,
    )


W, A = EquipmentType.WEAPON, EquipmentType.ARMOR

EQUIPMENT_POOL: tuple[Equipment, ...] = (
    # Weapons
    _item("equipment-iron-sword", "Iron Sword", "A plain but reliable blade", W, Stat.AP, 2, 4),
    _item("equipment-battle-axe", "Battle Axe", "Heavy enough to split shields", W, Stat.AP, 4, 7),
    _item("equipment-oak-staff", "Oak Staff", "Channels a steady flow of magic", W, Stat.MP, 2, 4),
    _item("equipment-arcane-wand", "Arcane Wand", "Crackles with barely contained power", W, Stat.MP, 4, 7),
    _item("equipment-quicksilver-dagger", "Quicksilver Dagger", "Lets its bearer act once more each turn", W, Stat.SP, 1, 8),
    # Armor
    _item("equipment-leather-armor", "Leather Armor", "Light protection against blades", A, Stat.DP, 1, 3),
    _item("equipment-chain-mail", "Chain Mail", "Rings of steel turn aside blows", A, Stat.DP, 3, 6),
    _item("equipment-warded-cloak", "Warded Cloak", "Stitched with protective runes", A, Stat.RP, 2, 4),
    _item("equipment-runed-helm", "Runed Helm", "Shrugs off hostile spells", A, Stat.RP, 3, 6),
    _item("equipment-amulet-of-vigor", "Amulet of Vigor", "Its wearer grows hardier", A, Stat.HP, 5, 4),
)
