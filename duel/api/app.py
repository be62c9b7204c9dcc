"""
FastAPI Application - REST API for duel clients.

Endpoints:
    GET    /api/v1/heroes                          List hero templates
    GET    /api/v1/locations                       Describe the route
    POST   /api/v1/sessions                        Create duel session
    GET    /api/v1/sessions                        List sessions
    GET    /api/v1/sessions/{id}                   Get session status
    DELETE /api/v1/sessions/{id}                   End session
    GET    /api/v1/sessions/{id}/state             Get game state
    POST   /api/v1/sessions/{id}/reset             Restart the duel
    POST   /api/v1/sessions/{id}/heroes            Choose a hero
    POST   /api/v1/sessions/{id}/start-turn        Start a player's turn
    POST   /api/v1/sessions/{id}/buy               Buy a shop offer
    POST   /api/v1/sessions/{id}/advance           Advance the action phase
    POST   /api/v1/sessions/{id}/select            Select the attacker
    POST   /api/v1/sessions/{id}/attack-type       Choose physical or magical
    POST   /api/v1/sessions/{id}/attack            Attack a target
    POST   /api/v1/sessions/{id}/cancel            Drop the pending attack

Game-rule rejections are not HTTP errors: they come back with
success=false and a REJECTED outcome. HTTP errors are reserved for
unknown sessions and malformed requests.

All responses are JSON with explicit Pydantic schemas.
"""

from typing import Annotated, Optional, Union
import logging
import os

from fastapi import FastAPI, Query, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Environment configuration
DUEL_ENV = os.getenv("DUEL_ENV", "development")
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")
DUEL_DEFAULT_SEED = os.getenv("DUEL_DEFAULT_SEED")
DUEL_SESSION_MAX_AGE = int(os.getenv("DUEL_SESSION_MAX_AGE", "3600"))

API_VERSION = "1.0.0"

logger = logging.getLogger(__name__)


def create_app(service=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    from .service import APIService
    from .schemas import (
        # Request models
        AttackRequest,
        AttackTypeRequest,
        BuyRequest,
        CreateSessionRequest,
        SelectHeroRequest,
        SelectRequest,
        StartTurnRequest,
        # Response models
        ActionResponse,
        EndSessionResponse,
        ErrorResponse,
        GameStateResponse,
        HealthResponse,
        HeroListResponse,
        LocationListResponse,
        SessionListResponse,
        SessionResponse,
        # Enums
        ErrorCode,
    )
    from ..session import SessionManager

    app = FastAPI(
        title="Duel Engine API",
        description="""
Two-player duel engine: heroes, units, monsters and a shop across a route of locations.

## Turn Flow

1. `POST /sessions` then `POST /heroes` once per player
2. Each turn runs through `buy`, `heroAction`, `unitAction` and `end`;
   phases with nothing to do are skipped automatically
3. Attack with `POST /select`, optionally `POST /attack-type`, then `POST /attack`
4. `POST /advance` from `end` hands the turn over

## Error Codes

| Code | Description |
|------|-------------|
| `SESSION_NOT_FOUND` | Session does not exist |
| `INVALID_HERO` | Hero template id is unknown |
| `VALIDATION_ERROR` | Request body is invalid |
        """,
        version=API_VERSION,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Service instance
    default_seed = int(DUEL_DEFAULT_SEED) if DUEL_DEFAULT_SEED else None
    api_service = service or APIService(
        session_manager=SessionManager(default_seed=default_seed),
        session_max_age=DUEL_SESSION_MAX_AGE,
    )
    logger.info("Duel API created (env=%s)", DUEL_ENV)

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Optional[dict] = None,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(
                error=message,
                error_code=error_code,
                details=details,
            ).model_dump(mode="json"),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """Report malformed requests with the standard error body."""
        logger.info("Rejected malformed request to %s", request.url.path)
        return make_error_response(
            ErrorCode.VALIDATION_ERROR,
            "Request validation failed",
            status_code=422,
            details={"errors": jsonable_encoder(exc.errors())},
        )

    def respond(response):
        """Pass service results through, turning ErrorResponse into an HTTP error."""
        if hasattr(response, "error"):
            status_code = 404 if response.error_code == ErrorCode.SESSION_NOT_FOUND else 400
            return make_error_response(
                response.error_code,
                response.error,
                status_code=status_code,
                details=response.details,
            )
        return response

    # =========================================================================
    # Catalog Endpoints
    # =========================================================================

    @app.get(
        "/api/v1/heroes",
        response_model=HeroListResponse,
        tags=["Catalog"],
        summary="List hero templates",
    )
    async def list_heroes() -> HeroListResponse:
        """The heroes players choose from, by template id."""
        return api_service.list_heroes()

    @app.get(
        "/api/v1/locations",
        response_model=LocationListResponse,
        tags=["Catalog"],
        summary="Describe the route",
    )
    async def list_locations(
        seed: Annotated[Optional[int], Query(description="Seed for sample monsters")] = None,
        samples: Annotated[int, Query(description="Sample monsters per location", ge=0, le=10)] = 0,
    ) -> LocationListResponse:
        """Locations in play order with their day ranges and monster pools."""
        return api_service.list_locations(seed=seed, samples=samples)

    # =========================================================================
    # Session Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions",
        response_model=SessionResponse,
        tags=["Sessions"],
        summary="Create a new duel session",
    )
    async def create_session(body: CreateSessionRequest) -> SessionResponse:
        """Create a duel waiting for both players to choose a hero."""
        return api_service.create_session(body)

    @app.get(
        "/api/v1/sessions",
        response_model=SessionListResponse,
        tags=["Sessions"],
        summary="List sessions",
    )
    async def list_sessions(
        active_only: Annotated[bool, Query(description="Only sessions whose duel is running")] = False,
    ) -> SessionListResponse:
        """List session IDs."""
        sessions = api_service.list_sessions(active_only=active_only)
        return SessionListResponse(sessions=sessions, count=len(sessions))

    @app.get(
        "/api/v1/sessions/{session_id}",
        response_model=SessionResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="Get session status",
    )
    async def get_session(session_id: str) -> Union[SessionResponse, JSONResponse]:
        """Get the current status of a duel session."""
        return respond(api_service.get_session(session_id))

    @app.delete(
        "/api/v1/sessions/{session_id}",
        response_model=EndSessionResponse,
        tags=["Sessions"],
        summary="End a duel session",
    )
    async def end_session(session_id: str) -> EndSessionResponse:
        """End a duel session and release its state."""
        success = api_service.end_session(session_id)
        return EndSessionResponse(success=success, session_id=session_id)

    # =========================================================================
    # Game Endpoints
    # =========================================================================

    @app.get(
        "/api/v1/sessions/{session_id}/state",
        response_model=GameStateResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Get current game state",
    )
    async def get_game_state(session_id: str) -> Union[GameStateResponse, JSONResponse]:
        """Get the complete current snapshot for display."""
        return respond(api_service.get_game_state(session_id))

    @app.post(
        "/api/v1/sessions/{session_id}/reset",
        response_model=ActionResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Restart the duel",
    )
    async def reset_session(session_id: str) -> Union[ActionResponse, JSONResponse]:
        """Throw the current duel away and go back to hero selection."""
        return respond(api_service.reset_session(session_id))

    @app.post(
        "/api/v1/sessions/{session_id}/heroes",
        response_model=ActionResponse,
        responses={
            400: {"model": ErrorResponse, "description": "Unknown hero"},
            404: {"model": ErrorResponse, "description": "Session not found"},
        },
        tags=["Game"],
        summary="Choose a hero for a player",
    )
    async def select_hero(
        session_id: str,
        body: SelectHeroRequest,
    ) -> Union[ActionResponse, JSONResponse]:
        """
        Assign a hero template to a player.

        The second choice starts the duel with player 1 on day 1.
        """
        return respond(api_service.select_hero(session_id, body))

    @app.post(
        "/api/v1/sessions/{session_id}/start-turn",
        response_model=ActionResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Start a player's turn",
    )
    async def start_turn(
        session_id: str,
        body: StartTurnRequest,
    ) -> Union[ActionResponse, JSONResponse]:
        """Start a turn directly: stipend, day and location, no restock."""
        return respond(api_service.start_turn(session_id, body))

    @app.post(
        "/api/v1/sessions/{session_id}/buy",
        response_model=ActionResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Buy a shop offer",
    )
    async def buy(session_id: str, body: BuyRequest) -> Union[ActionResponse, JSONResponse]:
        """Buy the offer at `offer_index`. One purchase per turn."""
        return respond(api_service.buy(session_id, body))

    @app.post(
        "/api/v1/sessions/{session_id}/advance",
        response_model=ActionResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Advance the action phase",
    )
    async def advance_phase(session_id: str) -> Union[ActionResponse, JSONResponse]:
        """Move to the next action phase; from `end` the turn passes."""
        return respond(api_service.advance_phase(session_id))

    @app.post(
        "/api/v1/sessions/{session_id}/select",
        response_model=ActionResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Select the attacker",
    )
    async def select(session_id: str, body: SelectRequest) -> Union[ActionResponse, JSONResponse]:
        """Select the hero or the unit pool for the next attack."""
        return respond(api_service.select(session_id, body))

    @app.post(
        "/api/v1/sessions/{session_id}/attack-type",
        response_model=ActionResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Choose the attack type",
    )
    async def select_attack_type(
        session_id: str,
        body: AttackTypeRequest,
    ) -> Union[ActionResponse, JSONResponse]:
        """Choose physical or magical for an actor that can do both."""
        return respond(api_service.select_attack_type(session_id, body))

    @app.post(
        "/api/v1/sessions/{session_id}/attack",
        response_model=ActionResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Attack a target",
    )
    async def attack(session_id: str, body: AttackRequest) -> Union[ActionResponse, JSONResponse]:
        """
        Attack the opponent's hero, their units, or a monster.

        **Request Body:**
        ```json
        {"kind": "monster", "index": 0}
        ```
        """
        return respond(api_service.attack(session_id, body))

    @app.post(
        "/api/v1/sessions/{session_id}/cancel",
        response_model=ActionResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Cancel the pending attack",
    )
    async def cancel(session_id: str) -> Union[ActionResponse, JSONResponse]:
        """Drop the current selection and attack type."""
        return respond(api_service.cancel(session_id))

    # =========================================================================
    # Health Check
    # =========================================================================

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        """Health check endpoint for load balancers."""
        return HealthResponse(
            status="healthy",
            service="duel-engine",
            version=API_VERSION,
            environment=DUEL_ENV,
        )

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Duel Engine API",
            "version": API_VERSION,
            "docs": "/api/docs",
            "health": "/health",
        }

    return app


# For running directly: uvicorn duel.api.app:app
app = create_app()
