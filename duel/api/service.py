"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to engine calls
2. Manages sessions
3. Formats snapshots and outcomes for clients

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
Unknown sessions and unknown catalog ids come back as ErrorResponse;
game-rule rejections are ordinary ActionResponses with success=False.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable
import logging

from .schemas import (
    # Requests
    AttackRequest,
    AttackTypeRequest,
    BuyRequest,
    CreateSessionRequest,
    SelectHeroRequest,
    SelectRequest,
    StartTurnRequest,
    # Responses
    ActionResponse,
    ErrorResponse,
    GameStateResponse,
    HeroListResponse,
    LocationListResponse,
    SessionResponse,
    # Shared
    ActionsUsedInfo,
    EquipmentInfo,
    HeroInfo,
    LoadoutInfo,
    LocationInfo,
    MonsterInfo,
    OutcomeInfo,
    PlayerInfo,
    SelectionInfo,
    ShopOfferInfo,
    UnitInfo,
    # Enums
    ErrorCode,
    SessionStatus,
)
from ..catalog import HERO_TEMPLATES, RandomCatalog, get_hero_template, get_location_profile
from ..engine_core.action import ActionResult, Outcome
from ..engine_core.engine import GameEngine
from ..engine_core.progression import days_remaining
from ..engine_core.state import GameState, Player, Target, Unit
from ..session import Session, SessionManager


logger = logging.getLogger(__name__)


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()

        # Create session
        session_response = service.create_session(CreateSessionRequest(seed=7))

        # Choose heroes
        service.select_hero(session_id, SelectHeroRequest(player_id=1, hero_id="hero-knight"))

        # Play
        service.advance_phase(session_id)
    """
    session_manager: SessionManager = field(default_factory=SessionManager)
    session_max_age: int = 3600

    # =========================================================================
    # Sessions
    # =========================================================================

    def create_session(self, request: CreateSessionRequest) -> SessionResponse:
        """Create a new duel session waiting for hero selection.

        Finished sessions older than `session_max_age` seconds are dropped first.
        """
        self.session_manager.cleanup_stale_sessions(self.session_max_age)
        session = self.session_manager.create_session(seed=request.seed, metadata=request.metadata)
        return self._session_to_response(session)

    def get_session(self, session_id: str) -> SessionResponse | ErrorResponse:
        """Get session status."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._session_not_found(session_id)
        return self._session_to_response(session)

    def end_session(self, session_id: str) -> bool:
        return self.session_manager.end_session(session_id)

    def list_sessions(self, active_only: bool = False) -> list[str]:
        if active_only:
            return self.session_manager.list_active_sessions()
        return self.session_manager.list_sessions()

    def reset_session(self, session_id: str) -> ActionResponse | ErrorResponse:
        """Restart the duel in a session from hero selection."""
        session = self.session_manager.reset_session(session_id)
        if not session:
            return self._session_not_found(session_id)
        return self._result_to_response(
            session,
            ActionResult.success_with_state(
                session.game_state,
                Outcome.info("New duel", "Both players choose a hero."),
            ),
        )

    def get_game_state(self, session_id: str) -> GameStateResponse | ErrorResponse:
        """Get the complete current snapshot."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._session_not_found(session_id)
        return self._state_to_response(session)

    # =========================================================================
    # Catalog
    # =========================================================================

    def list_heroes(self) -> HeroListResponse:
        heroes = [HeroInfo.model_validate(hero) for hero in HERO_TEMPLATES]
        return HeroListResponse(heroes=heroes, count=len(heroes))

    def list_locations(self, seed: int | None = None, samples: int = 0) -> LocationListResponse:
        """
        Describe the route in play order.

        With `samples` > 0 each location also carries that many
        monsters rolled from a catalog built from `seed`.
        """
        rules = self.session_manager.rules
        catalog = RandomCatalog(seed=seed) if samples > 0 else None
        locations = []
        for position, name in enumerate(rules.locations):
            profile = get_location_profile(name)
            sample_monsters = []
            if catalog is not None:
                sample_monsters = [
                    MonsterInfo.model_validate(monster)
                    for monster in catalog.generate_monsters(name, samples)
                ]
            locations.append(LocationInfo(
                name=profile.name,
                severity=profile.severity,
                description=profile.description,
                first_day=position * rules.days_per_location + 1,
                last_day=(position + 1) * rules.days_per_location,
                monster_names=list(profile.monster_names),
                hp_range=profile.hp_range,
                ap_range=profile.ap_range,
                mp_range=profile.mp_range,
                gold_range=profile.gold_range,
                sample_monsters=sample_monsters,
            ))
        return LocationListResponse(
            locations=locations,
            days_per_location=rules.days_per_location,
            day_limit=rules.day_limit,
        )

    # =========================================================================
    # Engine operations
    # =========================================================================

    def select_hero(self, session_id: str, request: SelectHeroRequest) -> ActionResponse | ErrorResponse:
        try:
            template = get_hero_template(request.hero_id)
        except ValueError as e:
            return ErrorResponse(
                error=str(e),
                error_code=ErrorCode.INVALID_HERO,
                details={"hero_id": request.hero_id},
            )
        return self._run(session_id, "select_hero", lambda engine: engine.select_hero(template, request.player_id))

    def start_turn(self, session_id: str, request: StartTurnRequest) -> ActionResponse | ErrorResponse:
        return self._run(session_id, "start_turn", lambda engine: engine.start_turn(request.player_id))

    def buy(self, session_id: str, request: BuyRequest) -> ActionResponse | ErrorResponse:
        return self._run(session_id, "buy", lambda engine: engine.buy(request.offer_index))

    def advance_phase(self, session_id: str) -> ActionResponse | ErrorResponse:
        return self._run(session_id, "advance_phase", lambda engine: engine.advance_phase())

    def select(self, session_id: str, request: SelectRequest) -> ActionResponse | ErrorResponse:
        return self._run(
            session_id,
            "select",
            lambda engine: engine.select(request.actor_kind, request.unit_index),
        )

    def select_attack_type(self, session_id: str, request: AttackTypeRequest) -> ActionResponse | ErrorResponse:
        return self._run(
            session_id,
            "select_attack_type",
            lambda engine: engine.select_attack_type(request.attack_type),
        )

    def attack(self, session_id: str, request: AttackRequest) -> ActionResponse | ErrorResponse:
        target = Target(kind=request.kind, player_id=request.player_id, index=request.index)
        return self._run(session_id, "attack", lambda engine: engine.attack(target))

    def cancel(self, session_id: str) -> ActionResponse | ErrorResponse:
        return self._run(session_id, "cancel", lambda engine: engine.cancel())

    def _run(
        self,
        session_id: str,
        operation: str,
        call: Callable[[GameEngine], ActionResult],
    ) -> ActionResponse | ErrorResponse:
        """Look up the session, run one engine operation and format the result."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._session_not_found(session_id)

        result = call(session.engine)
        if result.success:
            logger.debug("Session %s: %s succeeded", session_id, operation)
        else:
            logger.info(
                "Session %s: %s rejected (%s): %s",
                session_id,
                operation,
                result.error_code.value if result.error_code else "-",
                result.error,
            )
        return self._result_to_response(session, result)

    # =========================================================================
    # Conversion helpers
    # =========================================================================

    def _session_not_found(self, session_id: str) -> ErrorResponse:
        return ErrorResponse(
            error=f"Session {session_id} not found",
            error_code=ErrorCode.SESSION_NOT_FOUND,
        )

    def _session_to_response(self, session: Session) -> SessionResponse:
        state = session.game_state
        return SessionResponse(
            session_id=session.session_id,
            status=SessionStatus(session.state.value),
            phase=state.phase,
            seed=session.seed,
            day=state.day,
            created_at=session.created_at,
            metadata=session.metadata,
        )

    def _result_to_response(self, session: Session, result: ActionResult) -> ActionResponse:
        return ActionResponse(
            session_id=session.session_id,
            success=result.success,
            outcomes=[_outcome_info(outcome) for outcome in result.outcomes],
            error_code=result.error_code.value if result.error_code else None,
            game_state=self._state_to_response(session),
        )

    def _state_to_response(self, session: Session) -> GameStateResponse:
        state = session.game_state
        rules = self.session_manager.rules
        return GameStateResponse(
            session_id=session.session_id,
            status=SessionStatus(session.state.value),
            phase=state.phase,
            action_phase=state.action_phase,
            current_player=state.current_player,
            day=state.day,
            location=state.location,
            days_remaining=days_remaining(state.day, rules),
            players=[_player_info(player, state) for player in state.players],
            monsters=[MonsterInfo.model_validate(monster) for monster in state.monsters],
            shop=_shop_info(state),
            actions_used=ActionsUsedInfo.model_validate(state.actions_used),
            remaining_hero_actions=state.remaining_hero_actions,
            targeting_mode=state.targeting_mode,
            selection=SelectionInfo.model_validate(state.selection) if state.selection else None,
            attack_type=state.attack_type,
            winner=state.winner,
            game_over_reason=state.game_over_reason,
            random_seed=state.random_seed,
        )


def _outcome_info(outcome: Outcome) -> OutcomeInfo:
    return OutcomeInfo(
        kind=outcome.kind,
        title=outcome.title,
        detail=outcome.detail,
        code=outcome.code.value if outcome.code else None,
    )


def _player_info(player: Player, state: GameState) -> PlayerInfo:
    loadout = player.equipment
    return PlayerInfo(
        player_id=player.player_id,
        hero=HeroInfo.model_validate(player.hero) if player.hero else None,
        units=[UnitInfo.model_validate(unit) for unit in player.units],
        gold=player.gold,
        equipment=LoadoutInfo(
            weapon=EquipmentInfo.model_validate(loadout.weapon) if loadout.weapon else None,
            armor=EquipmentInfo.model_validate(loadout.armor) if loadout.armor else None,
        ),
        is_current_turn=(
            state.phase.is_player_turn and player.player_id == state.current_player
        ),
        total_unit_hp=player.total_unit_stat("hp"),
    )


def _shop_info(state: GameState) -> list[ShopOfferInfo]:
    gold = state.current.gold
    offers = []
    for index, offer in enumerate(state.shop):
        is_unit = isinstance(offer, Unit)
        offers.append(ShopOfferInfo(
            index=index,
            card_type=offer.card_type.value,
            cost=offer.cost,
            unit=UnitInfo.model_validate(offer) if is_unit else None,
            equipment=None if is_unit else EquipmentInfo.model_validate(offer),
            affordable=offer.cost <= gold,
        ))
    return offers
