"""
API Module - Client interface.

Exposes the engine via REST API. A client:
1. Lists heroes and locations
2. Creates a duel session
3. Chooses a hero for each player
4. Plays turns: buy, select, attack, advance
5. Reads the snapshot and outcomes after every call

All state is session-scoped. No persistent user accounts required.
"""

from .schemas import (
    # Requests
    CreateSessionRequest,
    SelectHeroRequest,
    StartTurnRequest,
    BuyRequest,
    SelectRequest,
    AttackTypeRequest,
    AttackRequest,
    # Responses
    ActionResponse,
    GameStateResponse,
    SessionResponse,
    HeroListResponse,
    LocationListResponse,
    ErrorResponse,
    # Shared
    PlayerInfo,
    HeroInfo,
    UnitInfo,
    MonsterInfo,
    EquipmentInfo,
    OutcomeInfo,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "CreateSessionRequest",
    "SelectHeroRequest",
    "StartTurnRequest",
    "BuyRequest",
    "SelectRequest",
    "AttackTypeRequest",
    "AttackRequest",
    # Responses
    "ActionResponse",
    "GameStateResponse",
    "SessionResponse",
    "HeroListResponse",
    "LocationListResponse",
    "ErrorResponse",
    # Shared
    "PlayerInfo",
    "HeroInfo",
    "UnitInfo",
    "MonsterInfo",
    "EquipmentInfo",
    "OutcomeInfo",
    # Service
    "APIService",
    "create_app",
]
