"""
Pytest fixtures for Duel tests.
"""

import pytest

from ..engine_core.engine import GameEngine, new_game_state
from ..engine_core.reducer import Reducer
from ..engine_core.rules import DEFAULT_RULES, GameRules
from ..engine_core.state import (
    ActionPhase,
    GamePhase,
    GameState,
    HeroClass,
    Player,
)
from .factories import FakeCatalog, make_equipment, make_hero, make_monster, make_unit


@pytest.fixture
def rules() -> GameRules:
    return DEFAULT_RULES


@pytest.fixture
def catalog() -> FakeCatalog:
    """Deterministic catalog for testing."""
    return FakeCatalog()


@pytest.fixture
def reducer(catalog, rules) -> Reducer:
    return Reducer(catalog=catalog, rules=rules)


@pytest.fixture
def engine(catalog, rules) -> GameEngine:
    """Engine waiting for both heroes."""
    engine = GameEngine(catalog=catalog, rules=rules, game_id="test_game")
    engine.initialize()
    return engine


@pytest.fixture
def choose_hero_state(rules) -> GameState:
    """Fresh state in the hero selection phase."""
    return new_game_state(rules, game_id="test_game", phase=GamePhase.CHOOSE_HERO)


@pytest.fixture
def playing_state() -> GameState:
    """
    Player 1's turn on day 1 in the forest.

    Player 1: warrior (hp 30, ap 6, dp 3, rp 2, sp 1), 0 gold.
    Player 2: mage (hp 22, mp 8, dp 1, rp 3, sp 1), 0 gold.
    Two monsters (hp 4, ap 3, reward 2); shop is one unit (cost 4)
    and one sword (cost 3).
    """
    warrior = make_hero("hero-warrior-p1", "Warrior")
    mage = make_hero(
        "hero-mage-p2", "Mage",
        hp=22, ap=0, mp=8, dp=1, rp=3, sp=1, hero_class=HeroClass.MAGE,
    )
    return GameState(
        game_id="test_game",
        players=(
            Player(player_id=1, hero=warrior),
            Player(player_id=2, hero=mage),
        ),
        current_player=1,
        monsters=(make_monster("monster-a"), make_monster("monster-b")),
        shop=(make_unit("unit-shop", cost=4), make_equipment("equipment-shop", cost=3)),
        phase=GamePhase.PLAYER1_TURN,
        action_phase=ActionPhase.BUY,
        remaining_hero_actions=1,
        day=1,
        location="forest",
    )


@pytest.fixture
def rich_state(playing_state) -> GameState:
    """playing_state with 10 gold for player 1."""
    player = playing_state.get_player(1)
    return playing_state.with_player(player._copy_with(gold=10))
