"""
Tests for API Pydantic schemas.

Validates that:
- Request models reject bad input
- Responses serialize enums as their wire values
- Card models load straight from engine dataclasses
"""

import pytest
from pydantic import ValidationError


class TestRequestSchemas:
    """Tests for request validation."""

    def test_select_hero_player_range(self):
        from duel.api.schemas import SelectHeroRequest

        assert SelectHeroRequest(player_id=2, hero_id="hero-knight").player_id == 2
        with pytest.raises(ValidationError):
            SelectHeroRequest(player_id=3, hero_id="hero-knight")

    def test_buy_index_not_negative(self):
        from duel.api.schemas import BuyRequest

        with pytest.raises(ValidationError):
            BuyRequest(offer_index=-1)

    def test_enums_from_wire_values(self):
        from duel.api.schemas import AttackRequest, SelectRequest
        from duel.engine_core.state import ActorKind, TargetKind

        select = SelectRequest.model_validate({"actor_kind": "unit", "unit_index": 0})
        attack = AttackRequest.model_validate({"kind": "monster", "index": 1})

        assert select.actor_kind == ActorKind.UNIT
        assert attack.kind == TargetKind.MONSTER
        assert attack.player_id is None

    def test_unknown_attack_type_rejected(self):
        from duel.api.schemas import AttackTypeRequest

        with pytest.raises(ValidationError):
            AttackTypeRequest.model_validate({"attack_type": "psychic"})


class TestResponseSchemas:
    """Tests for response models."""

    def test_error_response_schema(self):
        from duel.api.schemas import ErrorResponse, ErrorCode

        error = ErrorResponse(
            error="Session abc not found",
            error_code=ErrorCode.SESSION_NOT_FOUND,
        )

        data = error.model_dump()
        assert data["error_code"] == "SESSION_NOT_FOUND"
        assert data["api_version"] == "v1"
        assert data["details"] is None

    def test_hero_info_from_dataclass(self):
        from duel.api.schemas import HeroInfo
        from duel.catalog import get_hero_template

        info = HeroInfo.model_validate(get_hero_template("hero-archmage"))

        data = info.model_dump(mode="json")
        assert data["card_id"] == "hero-archmage"
        assert data["hero_class"] == "mage"
        assert data["mp"] == 8

    def test_unit_info_role(self):
        from duel.api.schemas import UnitInfo
        from duel.engine_core.state import Unit, UnitRole

        unit = Unit(card_id="u1", name="Wolf", hp=4, ap=2, cost=3, role=UnitRole.PROVOCATEUR)

        data = UnitInfo.model_validate(unit).model_dump(mode="json")
        assert data["role"] == "provocateur"
        assert data["max_hp"] == 4

    def test_game_state_response_serializes_phases(self):
        from duel.api.schemas import GameStateResponse, SessionStatus
        from duel.engine_core.state import ActionPhase, GamePhase

        response = GameStateResponse(
            session_id="s1",
            status=SessionStatus.ACTIVE,
            phase=GamePhase.PLAYER2_TURN,
            action_phase=ActionPhase.UNIT_ACTION,
            current_player=2,
            day=4,
            location="ruins",
            days_remaining=14,
        )

        data = response.model_dump(mode="json")
        assert data["phase"] == "player2Turn"
        assert data["action_phase"] == "unitAction"
        assert data["targeting_mode"] is False
        assert data["winner"] is None
        assert data["players"] == []


class TestOpenAPISchema:
    """Tests for OpenAPI schema generation."""

    def test_openapi_schema_generates(self):
        """OpenAPI schema generates without errors."""
        from duel.api.app import create_app
        from fastapi.openapi.utils import get_openapi

        app = create_app()
        schema = get_openapi(title=app.title, version=app.version, routes=app.routes)

        assert "paths" in schema
        assert "schemas" in schema["components"]

    def test_response_models_in_schema(self):
        from duel.api.app import create_app

        schemas = create_app().openapi()["components"]["schemas"]

        for name in (
            "SessionResponse",
            "GameStateResponse",
            "ActionResponse",
            "HeroListResponse",
            "LocationListResponse",
            "ErrorResponse",
        ):
            assert name in schemas, f"Missing schema: {name}"

    def test_action_endpoints_registered(self):
        from duel.api.app import create_app

        paths = create_app().openapi()["paths"]

        for action in ("heroes", "start-turn", "buy", "advance", "select", "attack-type", "attack", "cancel"):
            assert "post" in paths[f"/api/v1/sessions/{{session_id}}/{action}"]
        assert "200" in paths["/api/v1/sessions/{session_id}/state"]["get"]["responses"]
