"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the exact contract between clients and the engine.
All responses include explicit types for OpenAPI schema generation.

Error Codes:
- SESSION_NOT_FOUND: Session does not exist or was deleted
- INVALID_HERO: Hero template id is not in the catalog
- VALIDATION_ERROR: Request body failed validation
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field

from ..engine_core.action import OutcomeKind
from ..engine_core.state import (
    ActionPhase,
    ActorKind,
    AttackType,
    EquipmentType,
    GameOverReason,
    GamePhase,
    HeroClass,
    Stat,
    TargetKind,
    UnitRole,
)


# =============================================================================
# Enums
# =============================================================================

class SessionStatus(str, Enum):
    """Session status values."""
    CHOOSING_HEROES = "choosing_heroes"
    ACTIVE = "active"
    GAME_OVER = "game_over"
    ENDED = "ended"


class ErrorCode(str, Enum):
    """Structured error codes."""
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    INVALID_HERO = "INVALID_HERO"
    VALIDATION_ERROR = "VALIDATION_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class HeroInfo(BaseModel):
    """Hero card for display."""
    card_id: str
    name: str
    image: str = ""
    description: str = ""
    hero_class: HeroClass
    hp: int
    max_hp: int
    ap: int = Field(description="Physical power")
    mp: int = Field(description="Magical power")
    dp: int = Field(description="Physical resistance")
    rp: int = Field(description="Magical resistance")
    sp: int = Field(description="Actions per turn")

    model_config = {"from_attributes": True}


class UnitInfo(BaseModel):
    """A recruited unit."""
    card_id: str
    name: str
    image: str = ""
    hp: int
    max_hp: int
    ap: int
    mp: int
    cost: int
    role: UnitRole

    model_config = {"from_attributes": True}


class MonsterInfo(BaseModel):
    """A monster in the shared pool."""
    card_id: str
    name: str
    image: str = ""
    description: str = ""
    hp: int
    max_hp: int
    ap: int
    mp: int
    gold_reward: int
    location: str

    model_config = {"from_attributes": True}


class EquipmentInfo(BaseModel):
    """A weapon or armor piece."""
    card_id: str
    name: str
    image: str = ""
    description: str = ""
    equipment_type: EquipmentType
    bonus_stat: Stat
    bonus_amount: int
    cost: int

    model_config = {"from_attributes": True}


class ShopOfferInfo(BaseModel):
    """One shop slot: either a unit or a piece of equipment."""
    index: int
    card_type: str = Field(description="unit or equipment")
    cost: int
    unit: Optional[UnitInfo] = None
    equipment: Optional[EquipmentInfo] = None
    affordable: bool = Field(False, description="Current player can pay for it")


class LoadoutInfo(BaseModel):
    """Equipped items."""
    weapon: Optional[EquipmentInfo] = None
    armor: Optional[EquipmentInfo] = None

    model_config = {"from_attributes": True}


class PlayerInfo(BaseModel):
    """Player information for display."""
    player_id: int
    hero: Optional[HeroInfo] = None
    units: list[UnitInfo] = Field(default_factory=list)
    gold: int = 0
    equipment: LoadoutInfo = Field(default_factory=LoadoutInfo)
    is_current_turn: bool = False
    total_unit_hp: int = 0

    model_config = {"from_attributes": True}


class ActionsUsedInfo(BaseModel):
    """Per-turn action flags."""
    buy: bool = False
    hero_action: bool = False
    unit_action: bool = False

    model_config = {"from_attributes": True}


class SelectionInfo(BaseModel):
    """The actor waiting for a target."""
    actor_kind: ActorKind
    unit_index: Optional[int] = None

    model_config = {"from_attributes": True}


class OutcomeInfo(BaseModel):
    """A notice describing what an action did."""
    kind: OutcomeKind
    title: str
    detail: str = ""
    code: Optional[str] = None


class LocationInfo(BaseModel):
    """A location on the route."""
    name: str
    severity: int
    description: str
    first_day: int
    last_day: int
    monster_names: list[str] = Field(default_factory=list)
    hp_range: tuple[int, int]
    ap_range: tuple[int, int]
    mp_range: tuple[int, int]
    gold_range: tuple[int, int]
    sample_monsters: list[MonsterInfo] = Field(default_factory=list)


# =============================================================================
# Request Models
# =============================================================================

class CreateSessionRequest(BaseModel):
    """Request to create a new duel session."""
    seed: Optional[int] = Field(None, description="Seed for reproducible games")
    metadata: dict[str, Any] = Field(default_factory=dict, description="Free-form client data")


class SelectHeroRequest(BaseModel):
    """Request to assign a hero template to a player."""
    player_id: int = Field(..., ge=1, le=2)
    hero_id: str = Field(..., description="Hero template id, see GET /api/v1/heroes")


class StartTurnRequest(BaseModel):
    """Request to start a player's turn without restocking."""
    player_id: int = Field(..., ge=1, le=2)


class BuyRequest(BaseModel):
    """Request to buy a shop offer."""
    offer_index: int = Field(..., ge=0)


class SelectRequest(BaseModel):
    """Request to pick the attacker."""
    actor_kind: ActorKind
    unit_index: Optional[int] = Field(None, ge=0)


class AttackTypeRequest(BaseModel):
    """Request to choose physical or magical."""
    attack_type: AttackType


class AttackRequest(BaseModel):
    """Request to attack a target with the current selection."""
    kind: TargetKind
    player_id: Optional[int] = Field(None, description="Owner of a hero or unit target")
    index: Optional[int] = Field(None, description="Unit or monster position")


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class GameStateResponse(BaseModel):
    """Complete duel snapshot for display."""
    session_id: str
    status: SessionStatus
    phase: GamePhase
    action_phase: ActionPhase
    current_player: int
    day: int
    location: str
    days_remaining: int
    players: list[PlayerInfo] = Field(default_factory=list)
    monsters: list[MonsterInfo] = Field(default_factory=list)
    shop: list[ShopOfferInfo] = Field(default_factory=list)
    actions_used: ActionsUsedInfo = Field(default_factory=ActionsUsedInfo)
    remaining_hero_actions: int = 0
    targeting_mode: bool = False
    selection: Optional[SelectionInfo] = None
    attack_type: Optional[AttackType] = None
    winner: Optional[int] = None
    game_over_reason: Optional[GameOverReason] = None
    random_seed: Optional[int] = None
    api_version: str = "v1"


class ActionResponse(BaseModel):
    """Result of an engine operation."""
    session_id: str
    success: bool
    outcomes: list[OutcomeInfo] = Field(default_factory=list)
    error_code: Optional[str] = None
    game_state: GameStateResponse
    api_version: str = "v1"


class SessionResponse(BaseModel):
    """Response containing session information."""
    session_id: str
    status: SessionStatus
    phase: GamePhase
    seed: Optional[int] = None
    day: int = 1
    created_at: float = 0.0
    metadata: dict[str, Any] = Field(default_factory=dict)
    api_version: str = "v1"


class SessionListResponse(BaseModel):
    """Response listing sessions."""
    sessions: list[str]
    count: int


class EndSessionResponse(BaseModel):
    """Response after ending a session."""
    success: bool
    session_id: str


class HeroListResponse(BaseModel):
    """Hero templates players choose from."""
    heroes: list[HeroInfo]
    count: int


class LocationListResponse(BaseModel):
    """The route in play order."""
    locations: list[LocationInfo]
    days_per_location: int
    day_limit: int


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
    environment: str
