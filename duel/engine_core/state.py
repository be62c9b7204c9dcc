"""
Game State - Immutable snapshot of a duel.

Design principles:
- Immutable: every mutation returns a new snapshot
- One card family: Hero, Unit, Monster and Equipment share a base Card
  and are told apart by their `card_type` discriminant
- Serializable: plain values and tuples only
- Derived flags (targeting mode, current player) are properties, never fields
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, ClassVar, Union


class GamePhase(Enum):
    """Coarse game phases."""
    SETUP = "setup"
    CHOOSE_HERO = "chooseHero"
    PLAYER1_TURN = "player1Turn"
    PLAYER2_TURN = "player2Turn"
    GAME_OVER = "gameOver"

    @property
    def is_player_turn(self) -> bool:
        return self in (GamePhase.PLAYER1_TURN, GamePhase.PLAYER2_TURN)

    @classmethod
    def turn_of(cls, player_id: int) -> GamePhase:
        return cls.PLAYER1_TURN if player_id == 1 else cls.PLAYER2_TURN


class ActionPhase(Enum):
    """Sub-phases of a player turn, in play order."""
    BUY = "buy"
    HERO_ACTION = "heroAction"
    UNIT_ACTION = "unitAction"
    END = "end"


class AttackType(Enum):
    PHYSICAL = "physical"
    MAGICAL = "magical"


class ActorKind(Enum):
    """Who acts on the current player's side."""
    HERO = "hero"
    UNIT = "unit"


class TargetKind(Enum):
    HERO = "hero"
    UNIT = "unit"
    MONSTER = "monster"


class CardType(Enum):
    HERO = "hero"
    UNIT = "unit"
    MONSTER = "monster"
    EQUIPMENT = "equipment"


class HeroClass(Enum):
    WARRIOR = "warrior"
    MAGE = "mage"


class UnitRole(Enum):
    STANDARD = "standard"
    PROVOCATEUR = "provocateur"  # Draws every enemy attack onto itself


class EquipmentType(Enum):
    WEAPON = "weapon"
    ARMOR = "armor"


class Stat(Enum):
    """The six hero stats equipment can raise."""
    HP = "hp"
    AP = "ap"
    MP = "mp"
    DP = "dp"
    RP = "rp"
    SP = "sp"


class GameOverReason(Enum):
    DAY_LIMIT = "day_limit"
    HERO_DEFEATED = "hero_defeated"
    COUNTERATTACK = "counterattack"


# =============================================================================
# Cards
# =============================================================================

@dataclass(frozen=True)
class Card:
    """
    A card instance.

    Catalog templates are cards too; the engine copies them
    before placing them in a player's hands.
    """
    card_type: ClassVar[CardType]

    card_id: str
    name: str
    image: str = ""
    description: str = ""

    def _copy_with(self, **kwargs) -> Any:
        """Create a copy with some fields replaced."""
        return replace(self, **kwargs)


@dataclass(frozen=True)
class Hero(Card):
    """A player's hero. Its hp reaching 0 ends the game."""
    card_type: ClassVar[CardType] = CardType.HERO

    hp: int = 0
    max_hp: int = 0
    ap: int = 0  # Physical power
    mp: int = 0  # Magical power
    dp: int = 0  # Physical resistance
    rp: int = 0  # Magical resistance
    sp: int = 0  # Actions per turn
    hero_class: HeroClass = HeroClass.WARRIOR

    def __post_init__(self):
        # Templates may leave max_hp out; a fresh hero is at full health
        if self.max_hp < self.hp:
            object.__setattr__(self, "max_hp", self.hp)

    @property
    def is_defeated(self) -> bool:
        return self.hp <= 0

    def take_damage(self, damage: int) -> Hero:
        """Return hero with damage applied, hp floored at 0."""
        return self._copy_with(hp=max(0, self.hp - damage))

    def with_bonus(self, stat: Stat, amount: int) -> Hero:
        """Return hero with an equipment bonus applied permanently."""
        if stat == Stat.HP:
            return self._copy_with(max_hp=self.max_hp + amount, hp=self.hp + amount)
        return self._copy_with(**{stat.value: getattr(self, stat.value) + amount})


@dataclass(frozen=True)
class Unit(Card):
    """A recruited unit. Units fight as one pool."""
    card_type: ClassVar[CardType] = CardType.UNIT

    hp: int = 0
    max_hp: int = 0
    ap: int = 0
    mp: int = 0
    cost: int = 0
    role: UnitRole = UnitRole.STANDARD

    def __post_init__(self):
        if self.max_hp < self.hp:
            object.__setattr__(self, "max_hp", self.hp)

    @property
    def is_provocateur(self) -> bool:
        return self.role == UnitRole.PROVOCATEUR


@dataclass(frozen=True)
class Monster(Card):
    """A neutral monster from the shared pool."""
    card_type: ClassVar[CardType] = CardType.MONSTER

    hp: int = 0
    max_hp: int = 0
    ap: int = 0
    mp: int = 0
    gold_reward: int = 0
    location: str = ""

    def __post_init__(self):
        if self.max_hp < self.hp:
            object.__setattr__(self, "max_hp", self.hp)


@dataclass(frozen=True)
class Equipment(Card):
    """A weapon or armor piece sold in the shop."""
    card_type: ClassVar[CardType] = CardType.EQUIPMENT

    equipment_type: EquipmentType = EquipmentType.WEAPON
    bonus_stat: Stat = Stat.AP
    bonus_amount: int = 0
    cost: int = 0


ShopOffer = Union[Unit, Equipment]


# =============================================================================
# Players
# =============================================================================

@dataclass(frozen=True)
class Loadout:
    """Equipment slots: one weapon, one armor."""
    weapon: Equipment | None = None
    armor: Equipment | None = None

    def equip(self, item: Equipment) -> Loadout:
        """Return loadout with the item's slot replaced."""
        if item.equipment_type == EquipmentType.WEAPON:
            return Loadout(weapon=item, armor=self.armor)
        return Loadout(weapon=self.weapon, armor=item)


@dataclass(frozen=True)
class Player:
    """State for one of the two players."""
    player_id: int
    hero: Hero | None = None
    units: tuple[Unit, ...] = ()
    gold: int = 0
    equipment: Loadout = field(default_factory=Loadout)

    def _copy_with(self, **kwargs) -> Player:
        return replace(self, **kwargs)

    def total_unit_stat(self, stat: str) -> int:
        """Sum a stat ('hp', 'ap' or 'mp') across all units."""
        return sum(getattr(unit, stat) for unit in self.units)

    def provocateur_index(self) -> int | None:
        """Index of the first provocateur unit, if any."""
        for index, unit in enumerate(self.units):
            if unit.is_provocateur:
                return index
        return None


# =============================================================================
# Turn bookkeeping
# =============================================================================

@dataclass(frozen=True)
class ActionsUsed:
    """Per-turn action flags."""
    buy: bool = False
    hero_action: bool = False
    unit_action: bool = False


@dataclass(frozen=True)
class Selection:
    """The actor picked for a pending attack."""
    actor_kind: ActorKind
    unit_index: int | None = None


@dataclass(frozen=True)
class Target:
    """What an attack is aimed at."""
    kind: TargetKind
    player_id: int | None = None
    index: int | None = None

    @classmethod
    def hero(cls, player_id: int) -> Target:
        return cls(kind=TargetKind.HERO, player_id=player_id)

    @classmethod
    def unit(cls, player_id: int, index: int) -> Target:
        return cls(kind=TargetKind.UNIT, player_id=player_id, index=index)

    @classmethod
    def monster(cls, index: int) -> Target:
        return cls(kind=TargetKind.MONSTER, index=index)


# =============================================================================
# Root aggregate
# =============================================================================

@dataclass(frozen=True)
class GameState:
    """
    Complete game state at a point in time.

    This is the canonical snapshot the engine operates on.
    All state changes go through the reducer.
    """
    game_id: str

    # Players
    players: tuple[Player, Player] = (Player(player_id=1), Player(player_id=2))
    current_player: int = 1

    # Shared board
    monsters: tuple[Monster, ...] = ()
    shop: tuple[ShopOffer, ...] = ()

    # Phases
    phase: GamePhase = GamePhase.SETUP
    action_phase: ActionPhase = ActionPhase.BUY
    winner: int | None = None
    game_over_reason: GameOverReason | None = None

    # Turn bookkeeping
    actions_used: ActionsUsed = field(default_factory=ActionsUsed)
    remaining_hero_actions: int = 0

    # Pending attack
    selection: Selection | None = None
    attack_type: AttackType | None = None

    # Progression
    day: int = 1
    location: str = "forest"

    # History (for replay and inspection)
    action_history: tuple[Any, ...] = ()

    # Seed the catalog was created with
    random_seed: int | None = None

    @property
    def targeting_mode(self) -> bool:
        """True while an actor is selected and waiting for a target."""
        return self.selection is not None

    @property
    def current(self) -> Player:
        """The player whose turn it is."""
        return self.get_player(self.current_player)

    @property
    def opponent_id(self) -> int:
        return 2 if self.current_player == 1 else 1

    @property
    def opponent(self) -> Player:
        return self.get_player(self.opponent_id)

    def get_player(self, player_id: int) -> Player:
        """Get player by id (1 or 2)."""
        return self.players[player_id - 1]

    def with_player(self, player: Player) -> GameState:
        """Return new state with updated player."""
        new_players = tuple(
            player if p.player_id == player.player_id else p
            for p in self.players
        )
        return self._copy_with(players=new_players)

    def clear_selection(self) -> GameState:
        """Return new state with no pending attack."""
        return self._copy_with(selection=None, attack_type=None)

    def end_game(self, winner: int | None, reason: GameOverReason) -> GameState:
        return self._copy_with(
            phase=GamePhase.GAME_OVER,
            winner=winner,
            game_over_reason=reason,
            selection=None,
            attack_type=None,
        )

    def _copy_with(self, **kwargs) -> GameState:
        """Create a copy with some fields replaced."""
        return replace(self, **kwargs)
